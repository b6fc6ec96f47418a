import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from backend.app.schedule.errors import CyclicDependencyError, InvalidInputError
from backend.app.schedule.models import Activity, ScheduleTemplate

logger = logging.getLogger(__name__)

TOPOLOGICAL = "topological"
DECLARATION = "declaration"
ORDERINGS = (TOPOLOGICAL, DECLARATION)


@dataclass
class ActivityGraph:
    """Arena-indexed dependency graph. Index = declaration position."""
    activities: List[Activity]
    index: Dict[str, int]
    preds: List[List[int]]
    succs: List[List[int]]
    # activity id -> dependency ids that are not in the template
    unknown: Dict[str, List[str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.activities)

    def ids(self, nodes: List[int]) -> List[str]:
        return [self.activities[i].id for i in nodes]


def check_ordering(ordering: str) -> str:
    value = (ordering or "").strip().lower()
    if value not in ORDERINGS:
        raise InvalidInputError(f"ordering must be one of {', '.join(ORDERINGS)}, got {ordering!r}")
    return value


def build_activity_graph(template: ScheduleTemplate) -> ActivityGraph:
    """Build predecessor/successor adjacency once.

    Edges are dependency -> dependent. Successor lists follow the dependents'
    declaration order; repeated dependency ids collapse to one edge.
    """
    activities = list(template.iter_activities())
    index = {a.id: i for i, a in enumerate(activities)}
    preds: List[List[int]] = [[] for _ in activities]
    succs: List[List[int]] = [[] for _ in activities]
    unknown: Dict[str, List[str]] = {}
    for i, a in enumerate(activities):
        for dep in a.dependencies:
            j = index.get(dep)
            if j is None:
                unknown.setdefault(a.id, []).append(dep)
                continue
            if j in preds[i]:
                continue
            preds[i].append(j)
            succs[j].append(i)
    return ActivityGraph(activities=activities, index=index, preds=preds, succs=succs, unknown=unknown)


def _extract_cycle(graph: ActivityGraph, remaining: set) -> List[str]:
    # Every node left over by Kahn's algorithm has a predecessor that is also
    # left over, so walking predecessors must revisit a node.
    node = min(remaining)
    seen: Dict[int, int] = {}
    walk: List[int] = []
    while node not in seen:
        seen[node] = len(walk)
        walk.append(node)
        node = min(p for p in graph.preds[node] if p in remaining)
    cycle = walk[seen[node]:]
    cycle.reverse()
    ids = graph.ids(cycle)
    return ids + ids[:1]


def topological_order(graph: ActivityGraph) -> List[int]:
    """Stable topological sort (Kahn); ties go to the earliest declared activity.

    Raises CyclicDependencyError naming one cycle if the graph is not a DAG.
    """
    indeg = [len(p) for p in graph.preds]
    ready = [i for i, d in enumerate(indeg) if d == 0]
    heapq.heapify(ready)
    order: List[int] = []
    while ready:
        u = heapq.heappop(ready)
        order.append(u)
        for v in graph.succs[u]:
            indeg[v] -= 1
            if indeg[v] == 0:
                heapq.heappush(ready, v)
    if len(order) != len(graph):
        remaining = set(range(len(graph))) - set(order)
        cycle = _extract_cycle(graph, remaining)
        logger.error("Cyclic dependency detected: %s", " -> ".join(cycle))
        raise CyclicDependencyError(cycle)
    return order


def dependency_warnings(graph: ActivityGraph, ordering: str = TOPOLOGICAL) -> List[str]:
    """Describe dependencies that will not constrain their activity.

    Unknown ids are reported for every ordering. In declaration ordering,
    dependencies declared after their dependent are skipped too.
    """
    ordering = check_ordering(ordering)
    warnings: List[str] = []
    for i, a in enumerate(graph.activities):
        for dep in graph.unknown.get(a.id, []):
            warnings.append(f"Activity {a.id} depends on unknown activity {dep}; dependency ignored")
        if ordering == DECLARATION:
            for j in graph.preds[i]:
                if j > i:
                    warnings.append(
                        f"Activity {a.id} depends on {graph.activities[j].id}, which is declared later; "
                        "dependency ignored in declaration ordering"
                    )
    return warnings


def format_dependency_graph(template: ScheduleTemplate) -> str:
    """Return a human-readable listing of nodes and dependency edges."""
    graph = build_activity_graph(template)
    lines: List[str] = []
    lines.append(f"Dependency Graph for {template.project_type} template")
    lines.append("")
    lines.append("Nodes (nominal duration in weeks):")
    for a in graph.activities:
        flag = " [milestone]" if a.is_milestone else ""
        lines.append(f" - {a.id} {a.name}: {a.nominal_duration}{flag}")
    lines.append("")
    lines.append("Edges (dependency -> activity):")
    edges = [(graph.activities[j].id, a.id) for i, a in enumerate(graph.activities) for j in graph.preds[i]]
    if edges:
        for u, v in edges:
            lines.append(f" - {u} -> {v}")
    else:
        lines.append(" - (no dependencies declared)")
    for activity_id, deps in graph.unknown.items():
        for dep in deps:
            lines.append(f" - {dep} -> {activity_id} (unknown activity)")
    return "\n".join(lines)
