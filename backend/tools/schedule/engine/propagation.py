import logging
from datetime import date, timedelta
from typing import Dict, List, Optional

from backend.app.schedule.errors import InvalidInputError
from backend.app.schedule.models import ActivityDates, ScheduleTemplate

from .graph import DECLARATION, ActivityGraph, build_activity_graph, check_ordering, topological_order
from .scaler import check_multiplier, scaled_duration

logger = logging.getLogger(__name__)


def propagate(
    template: ScheduleTemplate,
    project_start_date: date,
    multiplier: float = 1.0,
    ordering: str = "topological",
    days_per_unit: int = 1,
    graph: Optional[ActivityGraph] = None,
    order: Optional[List[int]] = None,
) -> Dict[str, ActivityDates]:
    """Compute start/finish dates for every activity in the template.

    - No dependencies: start on project_start_date.
    - Otherwise start the day after the latest finish among dependencies that
      have already been computed. Dependencies that are unknown (or, in
      declaration ordering, declared later) do not constrain the start.
    - finish = start + scaled_duration * days_per_unit - 1 day (inclusive range).

    ordering="declaration" walks phases/work packages/activities as declared,
    skipping dependencies not yet computed. ordering="topological" walks a
    stable topological order, so forward references resolve.

    graph/order may be passed in when the caller has already built them for
    this template.

    Returns {activity_id: ActivityDates} in declaration order. Raises
    CyclicDependencyError for cyclic templates in either ordering, and
    InvalidInputError for bad arguments or dates past date.max.
    """
    ordering = check_ordering(ordering)
    multiplier = check_multiplier(multiplier)
    if isinstance(days_per_unit, bool) or not isinstance(days_per_unit, int) or days_per_unit < 1:
        raise InvalidInputError(f"days_per_unit must be a positive integer, got {days_per_unit!r}")

    if graph is None:
        graph = build_activity_graph(template)
    if order is None:
        order = topological_order(graph)
    sequence: List[int] = list(range(len(graph))) if ordering == DECLARATION else order

    computed: Dict[str, ActivityDates] = {}
    for i in sequence:
        activity = graph.activities[i]
        duration = scaled_duration(activity.nominal_duration, multiplier)
        finishes = [computed[d].finish for d in activity.dependencies if d in computed]
        try:
            if finishes:
                start = max(finishes) + timedelta(days=1)
            else:
                if activity.dependencies:
                    logger.debug("Activity %s has no computed dependencies; starting at project start", activity.id)
                start = project_start_date
            finish = start + timedelta(days=duration * days_per_unit - 1)
        except OverflowError:
            logger.warning("Activity %s runs past %s", activity.id, date.max.isoformat())
            raise InvalidInputError("schedule extends past the supported date range")
        computed[activity.id] = ActivityDates(start=start, finish=finish, scaled_duration=duration)

    return {a.id: computed[a.id] for a in graph.activities}


def project_end_date(dates: Dict[str, ActivityDates], project_start_date: date) -> date:
    """Latest finish across all activities (the start date for an empty schedule)."""
    current = project_start_date
    for d in dates.values():
        if d.finish > current:
            current = d.finish
    return current
