from .scaler import area_multiplier, scaled_duration
from .graph import (
    ORDERINGS,
    ActivityGraph,
    build_activity_graph,
    dependency_warnings,
    format_dependency_graph,
    topological_order,
)
from .propagation import propagate, project_end_date
from .critical_path import find_critical_path
from .schedule import build_schedule, compute_schedule, total_duration_weeks

__all__ = [
    "area_multiplier",
    "scaled_duration",
    "ORDERINGS",
    "ActivityGraph",
    "build_activity_graph",
    "dependency_warnings",
    "format_dependency_graph",
    "topological_order",
    "propagate",
    "project_end_date",
    "find_critical_path",
    "compute_schedule",
    "build_schedule",
    "total_duration_weeks",
]
