import logging
import math
from datetime import date, datetime
from typing import Optional

from backend import config
from backend.app.schedule.models import ComputedSchedule, ScheduledActivity, ScheduleTemplate
from backend.app.schedule.templates import get_template

from .critical_path import find_critical_path
from .graph import build_activity_graph, check_ordering, dependency_warnings, topological_order
from .propagation import project_end_date, propagate
from .scaler import area_multiplier

logger = logging.getLogger(__name__)


def total_duration_weeks(start: date, end: date) -> int:
    """Whole weeks spanned, rounded up: ceil((end - start) / 7 days)."""
    return int(math.ceil((end - start).days / 7))


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_schedule(
    template: ScheduleTemplate,
    area: float,
    project_start_date: Optional[date] = None,
    ordering: Optional[str] = None,
    days_per_unit: Optional[int] = None,
) -> ComputedSchedule:
    """Scale, propagate and find the critical path for one template.

    Pure apart from defaulting project_start_date to today. Either a full
    ComputedSchedule is returned or InvalidInputError/CyclicDependencyError
    is raised.
    """
    ordering = check_ordering(ordering or config.SCHEDULE_ORDERING)
    days_per_unit = config.SCHEDULE_DAYS_PER_UNIT if days_per_unit is None else days_per_unit
    start = _as_date(project_start_date) if project_start_date is not None else date.today()

    multiplier = area_multiplier(area)
    graph = build_activity_graph(template)
    order = topological_order(graph)
    dates = propagate(
        template, start, multiplier=multiplier, ordering=ordering, days_per_unit=days_per_unit,
        graph=graph, order=order,
    )
    critical_path = find_critical_path(template, ordering=ordering, graph=graph, order=order)
    warnings = dependency_warnings(graph, ordering)
    for w in warnings:
        logger.warning("[%s] %s", template.project_type, w)

    activities = {}
    for phase, work_package, activity in template.walk():
        d = dates[activity.id]
        activities[activity.id] = ScheduledActivity(
            id=activity.id,
            name=activity.name,
            phase=phase.title,
            work_package=work_package.title,
            dependencies=list(activity.dependencies),
            is_milestone=activity.is_milestone,
            start=d.start,
            finish=d.finish,
            scaled_duration=d.scaled_duration,
        )

    end = project_end_date(dates, start)
    result = ComputedSchedule(
        project_type=template.project_type,
        area=float(area),
        multiplier=multiplier,
        ordering=ordering,
        days_per_unit=days_per_unit,
        project_start_date=start,
        project_end_date=end,
        total_duration_weeks=total_duration_weeks(start, end),
        milestone_count=template.milestone_count,
        activities=activities,
        critical_path=critical_path,
        warnings=warnings,
    )
    logger.info(
        "Computed %s schedule: %d activities, multiplier %.2f, %s -> %s, critical path %d activities",
        template.project_type, len(activities), multiplier, start.isoformat(), end.isoformat(), len(critical_path),
    )
    return result


def build_schedule(
    project_type: Optional[str],
    area: float,
    project_start_date: Optional[date] = None,
    ordering: Optional[str] = None,
    days_per_unit: Optional[int] = None,
) -> ComputedSchedule:
    """Resolve the built-in template for project_type (unknown -> default) and compute it."""
    template = get_template(project_type, default=config.DEFAULT_PROJECT_TYPE)
    return compute_schedule(
        template,
        area,
        project_start_date=project_start_date,
        ordering=ordering,
        days_per_unit=days_per_unit,
    )
