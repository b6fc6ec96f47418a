from typing import Dict, Iterator, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator
from datetime import date


class Activity(BaseModel):
    """Atomic schedulable unit. Durations are nominal weeks."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    nominal_duration: int = Field(..., gt=0)
    dependencies: Tuple[str, ...] = ()
    is_milestone: bool = False


class WorkPackage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    duration: Optional[int] = None
    activities: Tuple[Activity, ...] = Field(..., min_length=1)


class Phase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    duration: Optional[int] = None
    work_packages: Tuple[WorkPackage, ...] = Field(..., min_length=1)


class ScheduleTemplate(BaseModel):
    """Phases -> work packages -> activities, in declaration order.

    Read-only reference data: instances are frozen and may be shared
    across concurrent computations.
    """
    model_config = ConfigDict(frozen=True)

    project_type: str
    phases: Tuple[Phase, ...] = ()

    @model_validator(mode="after")
    def _unique_activity_ids(self) -> "ScheduleTemplate":
        seen = set()
        for _, _, activity in self.walk():
            if activity.id in seen:
                raise ValueError(f"duplicate activity id '{activity.id}' in template '{self.project_type}'")
            seen.add(activity.id)
        return self

    def walk(self) -> Iterator[Tuple[Phase, WorkPackage, Activity]]:
        """Yield (phase, work_package, activity) in declaration order."""
        for phase in self.phases:
            for work_package in phase.work_packages:
                for activity in work_package.activities:
                    yield phase, work_package, activity

    def iter_activities(self) -> Iterator[Activity]:
        for _, _, activity in self.walk():
            yield activity

    def activity_map(self) -> Dict[str, Activity]:
        return {a.id: a for a in self.iter_activities()}

    @property
    def milestone_count(self) -> int:
        return sum(1 for a in self.iter_activities() if a.is_milestone)


class ActivityDates(BaseModel):
    start: date
    finish: date
    scaled_duration: int


class ScheduledActivity(ActivityDates):
    id: str
    name: str
    phase: str
    work_package: str
    dependencies: List[str] = []
    is_milestone: bool = False


class ComputedSchedule(BaseModel):
    project_type: str
    area: float
    multiplier: float
    ordering: str
    days_per_unit: int
    project_start_date: date
    project_end_date: date
    total_duration_weeks: int
    milestone_count: int
    activities: Dict[str, ScheduledActivity] = {}
    critical_path: List[str] = []
    warnings: List[str] = []
