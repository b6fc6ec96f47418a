from typing import List, Optional


class ScheduleError(Exception):
    """Base class for failures raised while computing a schedule."""


class InvalidInputError(ScheduleError, ValueError):
    """Raised for unusable engine inputs (area, ordering, unit conversion)."""


class CyclicDependencyError(ScheduleError):
    """Raised when the activity dependency relation contains a cycle.

    `cycle` holds the activity ids in dependency order, with the first id
    repeated at the end, e.g. ["A", "B", "A"].
    """

    def __init__(self, cycle: List[str], message: Optional[str] = None):
        self.cycle = list(cycle)
        super().__init__(message or f"Cyclic dependency: {' -> '.join(self.cycle)}")
