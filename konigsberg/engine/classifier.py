from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from konigsberg.engine.degrees import DegreeMap, degree_counts
from konigsberg.engine.graph import Graph


class EulerianKind(str, Enum):
    CIRCUIT = "circuit"
    TRAIL = "trail"
    IMPOSSIBLE = "impossible"


@dataclass(frozen=True)
class Classification:
    kind: EulerianKind
    odd_nodes: Tuple[str, ...]
    degrees: DegreeMap
    connected: bool

    @property
    def solvable(self) -> bool:
        """ Parity allows a walk and one walk can reach every bridge"""
        return self.kind != EulerianKind.IMPOSSIBLE and self.connected


def is_connected(graph: Graph) -> bool:
    """ True when all nodes that carry at least one edge sit in one component"""
    adjacency = {node_id: [] for node_id in graph.node_ids}
    for edge in graph.edges:
        adjacency[edge.a].append(edge.b)
        adjacency[edge.b].append(edge.a)

    bearing = [node_id for node_id, neighbours in adjacency.items() if neighbours]
    if not bearing:
        return True

    seen = {bearing[0]}
    queue = deque([bearing[0]])
    while queue:
        current = queue.popleft()
        for neighbour in adjacency[current]:
            if neighbour not in seen:
                seen.add(neighbour)
                queue.append(neighbour)
    return all(node_id in seen for node_id in bearing)


def classify(graph: Graph) -> Classification:
    """
    Eulerian type of the graph, decided on its traversal units.

    0 odd units -> circuit, 2 odd units -> trail, anything else -> impossible.
    The parity rule alone decides the kind; connectivity is reported next to it.
    """
    units = graph.unit_graph()
    degrees = degree_counts(units)
    odd = tuple(degrees.odd())
    if len(odd) == 0:
        kind = EulerianKind.CIRCUIT
    elif len(odd) == 2:
        kind = EulerianKind.TRAIL
    else:
        kind = EulerianKind.IMPOSSIBLE
    return Classification(kind=kind, odd_nodes=odd, degrees=degrees, connected=is_connected(units))


def suggest_bridges(classification: Classification) -> List[Tuple[str, str]]:
    """
    Bridges that would make an impossible graph walkable.
    Odd units are paired in order, one new bridge per pair, until only two
    odd units remain and the graph holds an Eulerian trail.
    """
    if classification.kind != EulerianKind.IMPOSSIBLE:
        return []
    odd = classification.odd_nodes[:-2]
    return [(odd[i], odd[i + 1]) for i in range(0, len(odd) - 1, 2)]
