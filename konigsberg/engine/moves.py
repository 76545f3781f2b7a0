"""
Move validation and history.

The player is NOT_STARTED until a start node is picked, then POSITIONED on a
traversal unit. Every crossing consumes one unused bridge and is recorded so
it can be undone in LIFO order. When every bridge is used the game is
COMPLETED; with stranding detection on, arriving somewhere without unused
bridges while others remain elsewhere leaves the player STRANDED.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from konigsberg.engine.classifier import Classification, EulerianKind, classify
from konigsberg.engine.errors import MoveRejected, NoBridgeAvailable
from konigsberg.engine.graph import Edge, Graph

logger = logging.getLogger(__name__)


class PlayerStatus(str, Enum):
    NOT_STARTED = "not_started"
    POSITIONED = "positioned"
    STRANDED = "stranded"
    COMPLETED = "completed"


class CompletionOutcome(str, Enum):
    CIRCUIT_COMPLETED = "circuit_completed"
    TRAIL_COMPLETED = "trail_completed"
    INVALID_END = "invalid_end"
    NO_EULERIAN_PATH = "no_eulerian_path"


@dataclass(frozen=True)
class MoveRecord:
    edge_id: str
    from_node: str
    from_unit: str


@dataclass
class PlayerState:
    status: PlayerStatus = PlayerStatus.NOT_STARTED
    position: Optional[str] = None  # node id
    unit: Optional[str] = None  # traversal unit holding position
    history: List[MoveRecord] = field(default_factory=list)
    outcome: Optional[CompletionOutcome] = None


@dataclass(frozen=True)
class MoveResult:
    edge: Edge
    from_unit: str
    position: str
    unit: str
    status: PlayerStatus
    outcome: Optional[CompletionOutcome]
    remaining: int


def completion_outcome(classification: Classification, end_unit: str) -> CompletionOutcome:
    """ How a game that used every bridge ended"""
    if classification.kind == EulerianKind.CIRCUIT:
        return CompletionOutcome.CIRCUIT_COMPLETED
    if classification.kind == EulerianKind.TRAIL:
        if end_unit in classification.odd_nodes:
            return CompletionOutcome.TRAIL_COMPLETED
        return CompletionOutcome.INVALID_END
    return CompletionOutcome.NO_EULERIAN_PATH


class MoveValidator:

    def __init__(self, graph: Graph, detect_stranding: bool = True):
        self.graph = graph
        self.detect_stranding = detect_stranding
        self.state = PlayerState()

    @property
    def history(self) -> List[MoveRecord]:
        return self.state.history

    def select_start(self, node_id: str) -> PlayerState:
        if self.state.status != PlayerStatus.NOT_STARTED:
            raise MoveRejected("A start node has already been chosen")
        self.graph.node(node_id)
        self.state.status = PlayerStatus.POSITIONED
        self.state.position = node_id
        self.state.unit = self.graph.traversal.unit_of(node_id)
        logger.debug("Player starts at %s (%s)", node_id, self.state.unit)
        return self.state

    def find_bridge(self, target_node: str) -> Optional[Edge]:
        """ First unused bridge joining the current unit with the unit of target_node"""
        unit_of = self.graph.traversal.unit_of
        current = self.state.unit
        target = unit_of(target_node)
        for edge in self.graph.edges:
            if edge.used:
                continue
            unit_a, unit_b = unit_of(edge.a), unit_of(edge.b)
            if (unit_a == current and unit_b == target) or (unit_b == current and unit_a == target):
                return edge
        return None

    def next_targets(self) -> List[str]:
        """ Nodes the player could click next to cross a bridge"""
        if self.state.status != PlayerStatus.POSITIONED:
            return []
        unit_of = self.graph.traversal.unit_of
        targets = []
        for edge in self.graph.unused_edges_at_unit(self.state.unit):
            target = edge.b if unit_of(edge.a) == self.state.unit else edge.a
            if target not in targets:
                targets.append(target)
        return targets

    def cross(self, target_node: str) -> MoveResult:
        status = self.state.status
        if status == PlayerStatus.NOT_STARTED:
            raise MoveRejected("Choose a start node first")
        if status == PlayerStatus.STRANDED:
            raise MoveRejected("You are stranded. Undo or reset to continue")
        if status == PlayerStatus.COMPLETED:
            raise MoveRejected("Every bridge has been crossed. Undo or reset to play again")

        self.graph.node(target_node)
        edge = self.find_bridge(target_node)
        if edge is None:
            raise NoBridgeAvailable(self.state.unit, self.graph.traversal.unit_of(target_node))
        return self._apply(edge)

    def begin_at(self, unit_id: str) -> PlayerState:
        """ Place the player on a unit without consuming a bridge (AI playback start)"""
        self.state = PlayerState(
            status=PlayerStatus.POSITIONED,
            position=self.graph.traversal.representative(unit_id),
            unit=unit_id,
        )
        return self.state

    def replay(self, edge_id: str) -> MoveResult:
        """ Apply a bridge chosen by the solver from the current position"""
        return self._apply(self.graph.edge(edge_id))

    def _apply(self, edge: Edge) -> MoveResult:
        traversal = self.graph.traversal
        from_unit = self.state.unit
        arrival = traversal.unit_of(edge.b) if traversal.unit_of(edge.a) == from_unit else traversal.unit_of(edge.a)

        self.graph.mark_edge_used(edge.id)
        self.state.history.append(MoveRecord(edge.id, self.state.position, from_unit))
        self.state.unit = arrival
        if self.graph.is_grouped:
            self.state.position = traversal.representative(arrival)
        else:
            self.state.position = arrival

        remaining = self.settle()
        logger.debug("Crossed %s: %s -> %s (%s, %d left)",
                     edge.id, from_unit, arrival, self.state.status.value, remaining)

        return MoveResult(
            edge=edge,
            from_unit=from_unit,
            position=self.state.position,
            unit=arrival,
            status=self.state.status,
            outcome=self.state.outcome,
            remaining=remaining,
        )

    def settle(self) -> int:
        """
        Recompute the status of a started player from the bridges left.
        Also called after bridges are added mid-game. Returns the unused count.
        """
        remaining = len(self.graph.unused_edges())
        if self.state.status == PlayerStatus.NOT_STARTED:
            return remaining
        self.state.outcome = None
        if remaining == 0:
            self.state.status = PlayerStatus.COMPLETED
            self.state.outcome = completion_outcome(classify(self.graph), self.state.unit)
        elif self.detect_stranding and not self.graph.unused_edges_at_unit(self.state.unit):
            self.state.status = PlayerStatus.STRANDED
        else:
            self.state.status = PlayerStatus.POSITIONED
        return remaining

    def undo(self) -> Optional[MoveRecord]:
        """ Revert the last crossing. Returns None when there is nothing to revert."""
        if not self.state.history:
            return None
        record = self.state.history.pop()
        self.graph.unmark_edge_used(record.edge_id)
        self.state.position = record.from_node
        self.state.unit = record.from_unit
        self.state.status = PlayerStatus.POSITIONED
        self.state.outcome = None
        logger.debug("Undid %s, back at %s", record.edge_id, record.from_unit)
        return record

    def reset(self) -> PlayerState:
        self.graph.reset_usage()
        self.state = PlayerState()
        return self.state
