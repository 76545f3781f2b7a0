from collections.abc import Mapping
from typing import Dict, Iterator, List

from konigsberg.engine.graph import Graph


class DegreeMap(Mapping):
    """ node id -> degree, iterating in graph insertion order"""

    def __init__(self, degrees: Dict[str, int]):
        self._degrees = dict(degrees)

    def __getitem__(self, node_id: str) -> int:
        return self._degrees[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._degrees)

    def __len__(self) -> int:
        return len(self._degrees)

    def __repr__(self):
        return f"DegreeMap({self._degrees!r})"

    def total(self) -> int:
        return sum(self._degrees.values())

    def odd(self) -> List[str]:
        return [node_id for node_id, degree in self._degrees.items() if degree % 2 == 1]


def degree_counts(graph: Graph) -> DegreeMap:
    """
    Degree of every node over the full edge set, used or not.
    Isolated nodes are included with 0. A self-loop counts twice.
    """
    degrees = {node_id: 0 for node_id in graph.node_ids}
    for edge in graph.edges:
        degrees[edge.a] += 1
        degrees[edge.b] += 1
    return DegreeMap(degrees)


def odd_degree_nodes(graph: Graph) -> List[str]:
    return degree_counts(graph).odd()
