from typing import List, Optional, Set

from backend.app.schedule.models import ScheduleTemplate

from .graph import DECLARATION, ActivityGraph, build_activity_graph, check_ordering, topological_order


def _longest_chain_dp(graph: ActivityGraph, order: List[int]) -> List[int]:
    """Longest chain by activity count over a DAG in topological order.

    length[v] = 1 + max(length[p]) over known predecessors. Ties go to the
    earliest declared predecessor and, for the chain end, the earliest
    declared activity.
    """
    n = len(graph)
    if n == 0:
        return []
    length = [1] * n
    parent: List[Optional[int]] = [None] * n
    for v in order:
        for p in sorted(graph.preds[v]):
            if length[p] + 1 > length[v]:
                length[v] = length[p] + 1
                parent[v] = p
    end = max(range(n), key=lambda i: (length[i], -i))
    chain: List[int] = []
    node: Optional[int] = end
    while node is not None:
        chain.append(node)
        node = parent[node]
    chain.reverse()
    return chain


def _longest_chain_dfs(graph: ActivityGraph) -> List[int]:
    # Seeds are activities with no declared dependencies. The visited set is
    # shared across the whole search: a node reached a second time ends the path.
    visited: Set[int] = set()

    def extend(node: int, path: List[int]) -> List[int]:
        if node in visited:
            return path
        visited.add(node)
        current = path + [node]
        longest = current
        for succ in graph.succs[node]:
            extended = extend(succ, current)
            if len(extended) > len(longest):
                longest = extended
        return longest

    best: List[int] = []
    for i, activity in enumerate(graph.activities):
        if not activity.dependencies:
            path = extend(i, [])
            if len(path) > len(best):
                best = path
    return best


def find_critical_path(
    template: ScheduleTemplate,
    ordering: str = "topological",
    graph: Optional[ActivityGraph] = None,
    order: Optional[List[int]] = None,
) -> List[str]:
    """Return the longest chain of dependency-linked activity ids.

    Length is counted in activities, not duration. Consecutive ids (x, y)
    always satisfy x in y.dependencies.
    """
    ordering = check_ordering(ordering)
    if graph is None:
        graph = build_activity_graph(template)
    if order is None:
        order = topological_order(graph)
    if ordering == DECLARATION:
        chain = _longest_chain_dfs(graph)
    else:
        chain = _longest_chain_dp(graph, order)
    return graph.ids(chain)
