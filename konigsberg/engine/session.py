"""
Game session: the command surface a UI drives.

One GameSession owns one live graph, the player's move validator and at most
one pending AI playback. Every handle_* command returns a StatusReport and
notifies the on_state_changed listeners so the UI can redraw.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from konigsberg.engine.classifier import Classification, EulerianKind, classify, suggest_bridges
from konigsberg.engine.errors import InvalidTopology, MoveRejected, NoBridgeAvailable, UnknownNode
from konigsberg.engine.graph import Edge, Graph
from konigsberg.engine.moves import CompletionOutcome, MoveResult, MoveValidator, PlayerStatus
from konigsberg.engine.playback import Playback
from konigsberg.engine.solver import hierholzer, solve

logger = logging.getLogger(__name__)


class StatusLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusReport:
    message: str
    level: StatusLevel = StatusLevel.INFO
    edge_id: Optional[str] = None
    suggestions: Tuple[Tuple[str, str], ...] = ()
    playback: Optional[Playback] = None


@dataclass(frozen=True)
class PlayerSnapshot:
    status: PlayerStatus
    position: Optional[str]
    unit: Optional[str]
    outcome: Optional[CompletionOutcome]
    moves: Tuple[str, ...]
    next_targets: Tuple[str, ...]
    animating: bool

    @property
    def stranded(self) -> bool:
        return self.status == PlayerStatus.STRANDED

    @property
    def completed(self) -> bool:
        return self.status == PlayerStatus.COMPLETED


COMPLETION_MESSAGES = {
    CompletionOutcome.CIRCUIT_COMPLETED:
        ("Eulerian circuit completed! You returned to your starting point!", StatusLevel.SUCCESS),
    CompletionOutcome.TRAIL_COMPLETED:
        ("Eulerian path completed successfully!", StatusLevel.SUCCESS),
    CompletionOutcome.INVALID_END:
        ("All bridges used, but you ended at an invalid node!", StatusLevel.WARNING),
    CompletionOutcome.NO_EULERIAN_PATH:
        ("All bridges used, but this graph doesn't have a valid Eulerian path!", StatusLevel.WARNING),
}

GraphFactory = Callable[[Optional[str]], Graph]


class GameSession:

    def __init__(self, graph: Graph, detect_stranding: bool = True,
                 graph_factory: Optional[GraphFactory] = None):
        self.detect_stranding = detect_stranding
        self.last_report = StatusReport("Ready to play...")
        self._graph_factory = graph_factory
        self._listeners: List[Callable[["GameSession"], None]] = []
        self._playback: Optional[Playback] = None
        self._load(graph)

    def _load(self, graph: Graph) -> None:
        self.graph = graph
        self.validator = MoveValidator(graph, self.detect_stranding)

    # read side
    @property
    def message(self) -> str:
        return self.last_report.message

    @property
    def playback(self) -> Optional[Playback]:
        return self._playback

    @property
    def animating(self) -> bool:
        return self._playback is not None and self._playback.active

    def classification(self) -> Classification:
        return classify(self.graph)

    def get_graph_snapshot(self) -> Graph:
        return self.graph.clone()

    def get_player_state(self) -> PlayerSnapshot:
        state = self.validator.state
        return PlayerSnapshot(
            status=state.status,
            position=state.position,
            unit=state.unit,
            outcome=state.outcome,
            moves=tuple(record.edge_id for record in state.history),
            next_targets=tuple(self.validator.next_targets()),
            animating=self.animating,
        )

    def on_state_changed(self, callback: Callable[["GameSession"], None]) -> Callable[[], None]:
        """ Register a redraw callback. Returns a function that unregisters it."""
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _report(self, report: StatusReport) -> StatusReport:
        self.last_report = report
        # a failing redraw must not leave the game or a playback half applied
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("State listener %r failed", listener)
        return report

    # naming helpers for messages
    def _bridge_name(self, edge: Edge) -> str:
        return f"#{edge.label}" if edge.label is not None else edge.id

    def _place(self, unit: str) -> str:
        return f"Land {unit}" if self.graph.is_grouped else f"node {unit}"

    def _describe_move(self, result: MoveResult) -> StatusReport:
        if result.status == PlayerStatus.COMPLETED:
            message, level = COMPLETION_MESSAGES[result.outcome]
            return StatusReport(message, level, edge_id=result.edge.id)

        crossed = f"Crossed bridge {self._bridge_name(result.edge)} -> Arrived at {self._place(result.unit)}"
        if result.status == PlayerStatus.STRANDED:
            return StatusReport(
                f"{crossed}. Stranded: no unused bridge leaves here but {result.remaining} remain. "
                f"Undo or reset to try again.",
                StatusLevel.ERROR,
                edge_id=result.edge.id,
            )
        return StatusReport(crossed, edge_id=result.edge.id)

    # commands
    def handle_node_selected(self, node_id: str) -> StatusReport:
        if self.animating:
            return self._report(StatusReport("AI solve in progress", StatusLevel.WARNING))

        try:
            if self.validator.state.status == PlayerStatus.NOT_STARTED:
                self.validator.select_start(node_id)
                return self._report(StatusReport(f"Started at {node_id}"))
            result = self.validator.cross(node_id)
        except NoBridgeAvailable as e:
            if self.graph.is_grouped:
                message = f"No available bridge to cross from Land {e.from_unit}"
            else:
                message = "Invalid move: no unused bridge connects those nodes"
            return self._report(StatusReport(message, StatusLevel.WARNING))
        except (UnknownNode, MoveRejected) as e:
            return self._report(StatusReport(str(e), StatusLevel.WARNING))

        return self._report(self._describe_move(result))

    def handle_undo(self) -> StatusReport:
        if self.animating:
            return self._report(StatusReport("AI solve in progress", StatusLevel.WARNING))

        record = self.validator.undo()
        if record is None:
            return self._report(StatusReport("Nothing to undo"))
        edge = self.graph.edge(record.edge_id)
        return self._report(StatusReport(
            f"Undid bridge {self._bridge_name(edge)}, back at {self._place(record.from_unit)}",
            edge_id=edge.id,
        ))

    def handle_reset(self) -> StatusReport:
        self._cancel_playback()
        self.validator.reset()
        return self._report(StatusReport("Game reset."))

    def handle_ai_solve(self) -> StatusReport:
        self._cancel_playback()
        classification = self.classification()
        if classification.kind == EulerianKind.IMPOSSIBLE:
            return self._report(StatusReport(
                "Unsolvable: Odd-degree nodes: " + ", ".join(classification.odd_nodes), StatusLevel.ERROR))
        if not classification.connected:
            return self._report(StatusReport(
                "Unsolvable: the bridges do not form one connected network", StatusLevel.ERROR))

        playback_graph = self.graph.clone().reset_usage()
        solution = solve(playback_graph.unit_graph())
        if solution is None or not solution.edges:
            return self._report(StatusReport("AI could not compute a path", StatusLevel.WARNING))

        self.validator.reset()
        self.validator.begin_at(solution.start)
        self._playback = Playback(playback_graph, solution, on_step=self._ai_step, on_finish=self._ai_finished)
        logger.info("AI solve started from %s over %d bridges", solution.start, len(solution.edges))
        return self._report(StatusReport(
            f"AI solving from {self._place(solution.start)}: {len(solution.edges)} bridges",
            playback=self._playback,
        ))

    def _ai_step(self, edge_id: str) -> None:
        result = self.validator.replay(edge_id)
        self._report(self._describe_move(result))

    def _ai_finished(self) -> None:
        self._report(StatusReport("AI finished traversal", StatusLevel.SUCCESS))

    def handle_hint(self) -> StatusReport:
        classification = self.classification()
        if classification.kind == EulerianKind.IMPOSSIBLE or not classification.connected:
            return self._report(StatusReport("No valid Eulerian path exists.", StatusLevel.WARNING))

        sequence = hierholzer(self.graph.clone().reset_usage().unit_graph()) or []
        next_id = next((edge_id for edge_id in sequence if not self.graph.edge(edge_id).used), None)
        if next_id is None:
            return self._report(StatusReport("No unused edges left"))

        edge = self.graph.edge(next_id)
        unit_of = self.graph.traversal.unit_of
        return self._report(StatusReport(
            f"Hint: cross bridge {self._bridge_name(edge)} between "
            f"{self._place(unit_of(edge.a))} and {self._place(unit_of(edge.b))}",
            edge_id=edge.id,
        ))

    def handle_suggest_fix(self) -> StatusReport:
        classification = self.classification()
        if classification.kind != EulerianKind.IMPOSSIBLE:
            if classification.connected:
                return self._report(StatusReport(f"Already solvable ({classification.kind.value})"))
            return self._report(StatusReport(
                "Parity is fine but the bridges form separate networks: connect them", StatusLevel.WARNING))

        pairs = tuple(suggest_bridges(classification))
        proposal = ", ".join(f"{a} - {b}" for a, b in pairs)
        return self._report(StatusReport(
            f"Odd-degree nodes: {', '.join(classification.odd_nodes)}. Add bridges between odd nodes: {proposal}",
            StatusLevel.INFO,
            suggestions=pairs,
        ))

    def handle_add_bridge(self, a: str, b: str) -> StatusReport:
        if self.animating:
            return self._report(StatusReport("AI solve in progress", StatusLevel.WARNING))
        try:
            edge = self.graph.add_edge(a, b)
        except (UnknownNode, InvalidTopology) as e:
            return self._report(StatusReport(str(e), StatusLevel.WARNING))

        self.validator.settle()
        kind = self.classification().kind.value
        logger.info("Bridge %s added between %s and %s", edge.id, a, b)
        return self._report(StatusReport(
            f"Added bridge {self._bridge_name(edge)} between {a} and {b} (now {kind})", edge_id=edge.id))

    def handle_new_puzzle(self, graph: Optional[Graph] = None, difficulty: Optional[str] = None) -> StatusReport:
        if graph is None:
            if self._graph_factory is None:
                raise ValueError("No graph given and no graph factory configured")
            graph = self._graph_factory(difficulty)
        self._cancel_playback()
        self._load(graph)
        return self._report(StatusReport("New puzzle ready"))

    def close(self) -> None:
        self._cancel_playback()
        self._listeners.clear()

    def _cancel_playback(self) -> None:
        if self._playback is not None:
            self._playback.cancel()
            self._playback = None
