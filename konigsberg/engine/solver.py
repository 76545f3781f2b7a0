"""
Hierholzer engine.

Works on whatever graph it is handed; callers pass graph.unit_graph() so that
land groups are solved as single stops.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from konigsberg.engine.errors import PuzzleError
from konigsberg.engine.graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Solution:
    walk: Tuple[str, ...]   # node visitation order, len(edges) + 1 entries
    edges: Tuple[str, ...]  # edge ids in traversal order

    @property
    def start(self) -> str:
        return self.walk[0]


def _live_odd(graph: Graph, adjacency: Dict[str, deque]) -> List[str]:
    # parity of the unused bridges, which is the full parity on a fresh graph
    return [node_id for node_id in graph.node_ids if len(adjacency[node_id]) % 2]


def solve(graph: Graph) -> Optional[Solution]:
    """
    Eulerian walk over the unused edges of graph.
    Returns None when there is no unused edge, or when the unused edges admit
    no single walk (more than two odd ends, or separate networks).
    """
    adjacency = {node_id: deque() for node_id in graph.node_ids}
    for edge in graph.unused_edges():
        adjacency[edge.a].append((edge.b, edge.id))
        adjacency[edge.b].append((edge.a, edge.id))

    odd = _live_odd(graph, adjacency)
    if len(odd) not in (0, 2):
        logger.debug("No walk over the unused bridges: odd ends %s", ", ".join(odd))
        return None
    start = odd[0] if odd else next((node_id for node_id in graph.node_ids if adjacency[node_id]), None)
    if start is None:
        return None

    # each stack entry remembers the bridge that led to it
    stack = [(start, None)]
    path = []
    consumed = set()
    while stack:
        current = stack[-1][0]
        pending = adjacency[current]
        while pending and pending[0][1] in consumed:
            pending.popleft()
        if not pending:
            path.append(stack.pop())
        else:
            neighbour, edge_id = pending.popleft()
            consumed.add(edge_id)
            stack.append((neighbour, edge_id))

    path.reverse()
    walk = tuple(node_id for node_id, _ in path)
    edges = tuple(edge_id for _, edge_id in path[1:])

    unused = len(graph.unused_edges())
    if len(edges) < unused:
        logger.debug("No walk over the unused bridges: separate networks (%d of %d reachable)",
                     len(edges), unused)
        return None
    for i, edge_id in enumerate(edges):
        if not graph.edge(edge_id).connects(walk[i], walk[i + 1]):
            logger.error("Hierholzer step %s -> %s does not match bridge %s", walk[i], walk[i + 1], edge_id)
            raise PuzzleError(f"Bridge {edge_id} does not join {walk[i]} and {walk[i + 1]}")

    logger.debug("Hierholzer walk from %s covers %d bridges", start, len(edges))
    return Solution(walk=walk, edges=edges)


def hierholzer(graph: Graph) -> Optional[List[str]]:
    """ Ordered edge ids of one full traversal, or None if there is nothing to solve"""
    solution = solve(graph)
    if solution is None:
        return None
    return list(solution.edges)
