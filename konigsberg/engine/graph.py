"""
Graph store for the bridge puzzle.

A Graph owns its nodes, its edges ("bridges") and the per-edge used flag.
How the player moves over it is decided by its traversal unit: either every
node is its own stop (SingleNode) or nodes are grouped into land masses and
the player stands on a whole land at a time (GroupedLand).
"""
import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from konigsberg.engine.errors import (
    EdgeAlreadyUsed,
    EdgeNotUsed,
    InvalidTopology,
    UnknownEdge,
    UnknownNode,
)

logger = logging.getLogger(__name__)


@dataclass
class Node:
    id: str
    x: float = 0.0  # display only
    y: float = 0.0


@dataclass
class Edge:
    id: str
    a: str
    b: str
    used: bool = False
    label: Optional[int] = None

    def touches(self, node_id: str) -> bool:
        return self.a == node_id or self.b == node_id

    def connects(self, u: str, v: str) -> bool:
        return (self.a == u and self.b == v) or (self.a == v and self.b == u)

    def other(self, node_id: str) -> str:
        return self.b if node_id == self.a else self.a


def first_member(group_id: str, members: List[str]) -> str:
    """ Default representative rule: the first listed node of the land"""
    return members[0]


class SingleNode:
    """ Every node is a traversal unit of its own"""
    kind = "single"

    def unit_of(self, node_id: str) -> str:
        return node_id

    def members(self, unit_id: str) -> List[str]:
        return [unit_id]

    def representative(self, unit_id: str) -> str:
        return unit_id

    def validate(self, node_ids) -> None:
        return None

    def clone(self) -> "SingleNode":
        return self


class GroupedLand:
    """ Nodes grouped into land masses. Crossing a bridge lands on the whole group."""
    kind = "grouped"

    def __init__(
            self,
            groups: Dict[str, List[str]],
            centers: Optional[Dict[str, Tuple[float, float]]] = None,
            representative_rule: Callable[[str, List[str]], str] = first_member,
    ):
        self.groups = {group_id: list(members) for group_id, members in groups.items()}
        self.centers = dict(centers or {})
        self.representative_rule = representative_rule

        self._unit_of = {}
        for group_id, members in self.groups.items():
            if not members:
                raise InvalidTopology(f"Land {group_id} has no nodes")
            for node_id in members:
                if node_id in self._unit_of:
                    raise InvalidTopology(
                        f"Node {node_id} belongs to both {self._unit_of[node_id]} and {group_id}")
                self._unit_of[node_id] = group_id

    def unit_of(self, node_id: str) -> str:
        try:
            return self._unit_of[node_id]
        except KeyError:
            raise UnknownNode(node_id) from None

    def members(self, unit_id: str) -> List[str]:
        return list(self.groups[unit_id])

    def representative(self, unit_id: str) -> str:
        return self.representative_rule(unit_id, self.groups[unit_id])

    def validate(self, node_ids) -> None:
        node_ids = set(node_ids)
        unknown = [n for n in self._unit_of if n not in node_ids]
        if unknown:
            raise InvalidTopology(f"Land groups reference unknown nodes: {', '.join(unknown)}")
        ungrouped = [n for n in node_ids if n not in self._unit_of]
        if ungrouped:
            raise InvalidTopology(f"Nodes without a land group: {', '.join(sorted(ungrouped))}")

    def clone(self) -> "GroupedLand":
        return GroupedLand(self.groups, self.centers, self.representative_rule)


class Graph:
    """ Nodes and bridges of one puzzle. Build it with create_graph()."""

    def __init__(self, nodes: List[Node], edges: List[Edge], traversal=None):
        self.nodes = nodes
        self.edges = edges
        self.traversal = traversal or SingleNode()
        self._nodes = {node.id: node for node in nodes}
        self._edges = {edge.id: edge for edge in edges}

    def __repr__(self):
        return f"Graph(nodes={len(self.nodes)}, edges={len(self.edges)}, traversal={self.traversal.kind})"

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    @property
    def is_grouped(self) -> bool:
        return self.traversal.kind == GroupedLand.kind

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def node(self, node_id: str) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNode(node_id) from None

    def edge(self, edge_id: str) -> Edge:
        try:
            return self._edges[edge_id]
        except KeyError:
            raise UnknownEdge(edge_id) from None

    def unused_edges(self) -> List[Edge]:
        return [edge for edge in self.edges if not edge.used]

    def all_used(self) -> bool:
        return all(edge.used for edge in self.edges)

    def unused_edges_at_unit(self, unit_id: str) -> List[Edge]:
        """ Unused bridges with at least one end in the given traversal unit"""
        unit_of = self.traversal.unit_of
        return [edge for edge in self.edges
                if not edge.used and (unit_of(edge.a) == unit_id or unit_of(edge.b) == unit_id)]

    # mutation
    def mark_edge_used(self, edge_id: str) -> "Graph":
        edge = self.edge(edge_id)
        if edge.used:
            logger.error("Bridge %s marked twice", edge_id)
            raise EdgeAlreadyUsed(edge_id)
        edge.used = True
        return self

    def unmark_edge_used(self, edge_id: str) -> "Graph":
        edge = self.edge(edge_id)
        if not edge.used:
            logger.error("Bridge %s un-marked while unused", edge_id)
            raise EdgeNotUsed(edge_id)
        edge.used = False
        return self

    def reset_usage(self) -> "Graph":
        for edge in self.edges:
            edge.used = False
        return self

    def add_edge(self, a: str, b: str, edge_id: Optional[str] = None, label: Optional[int] = None) -> Edge:
        """ Add a new unused bridge between two existing nodes"""
        self.node(a)
        self.node(b)
        if edge_id is None:
            counter = len(self.edges)
            while f"e{counter}" in self._edges:
                counter += 1
            edge_id = f"e{counter}"
        elif edge_id in self._edges:
            raise InvalidTopology(f"Duplicate bridge id {edge_id}")

        if label is None:
            labels = [edge.label for edge in self.edges if edge.label is not None]
            if labels:
                label = max(labels) + 1

        edge = Edge(id=edge_id, a=a, b=b, label=label)
        self.edges.append(edge)
        self._edges[edge.id] = edge
        return edge

    # copies
    def clone(self) -> "Graph":
        """ Deep, independent copy: nothing mutable is shared with the original"""
        return Graph(
            [replace(node) for node in self.nodes],
            [replace(edge) for edge in self.edges],
            self.traversal.clone(),
        )

    def unit_graph(self) -> "Graph":
        """
        Graph whose nodes are the traversal units.
        For SingleNode graphs that is the graph itself. For GroupedLand graphs
        every land becomes one node and every bridge keeps its id, with its ends
        mapped to their lands.
        """
        if not self.is_grouped:
            return self
        traversal = self.traversal
        nodes = [Node(group_id, *traversal.centers.get(group_id, (0.0, 0.0)))
                 for group_id in traversal.groups]
        edges = [Edge(edge.id, traversal.unit_of(edge.a), traversal.unit_of(edge.b), edge.used, edge.label)
                 for edge in self.edges]
        return Graph(nodes, edges, SingleNode())


def create_graph(
        nodes: Iterable[Node],
        edges: Iterable[Edge],
        land_groups: Optional[Dict[str, List[str]]] = None,
        land_centers: Optional[Dict[str, Tuple[float, float]]] = None,
        representative_rule: Callable[[str, List[str]], str] = first_member,
) -> Graph:
    """
    Validate and build a Graph.
    Raises InvalidTopology on duplicate node ids, duplicate edge ids, edges
    pointing at unknown nodes or inconsistent land groups.
    The inputs are copied, the returned graph owns its data.
    """
    nodes = [replace(node) for node in nodes]
    edges = [replace(edge) for edge in edges]

    seen = set()
    for node in nodes:
        if node.id in seen:
            raise InvalidTopology(f"Duplicate node id {node.id}")
        seen.add(node.id)

    edge_ids = set()
    for edge in edges:
        if edge.id in edge_ids:
            raise InvalidTopology(f"Duplicate bridge id {edge.id}")
        edge_ids.add(edge.id)
        for end in (edge.a, edge.b):
            if end not in seen:
                raise InvalidTopology(f"Bridge {edge.id} references unknown node {end}")

    traversal = SingleNode()
    if land_groups is not None:
        traversal = GroupedLand(land_groups, land_centers, representative_rule)
        traversal.validate(seen)

    graph = Graph(nodes, edges, traversal)
    logger.debug("Created %r", graph)
    return graph
