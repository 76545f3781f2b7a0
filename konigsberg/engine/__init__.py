from konigsberg.engine.errors import (
    PuzzleError, InvalidTopology, UnknownNode, UnknownEdge, EdgeAlreadyUsed, EdgeNotUsed,
    NoBridgeAvailable, MoveRejected,
)
from konigsberg.engine.graph import Node, Edge, Graph, SingleNode, GroupedLand, create_graph, first_member
from konigsberg.engine.degrees import DegreeMap, degree_counts, odd_degree_nodes
from konigsberg.engine.classifier import Classification, EulerianKind, classify, is_connected, suggest_bridges
from konigsberg.engine.solver import Solution, solve, hierholzer
from konigsberg.engine.moves import (
    CompletionOutcome, MoveRecord, MoveResult, MoveValidator, PlayerState, PlayerStatus, completion_outcome,
)
from konigsberg.engine.playback import Playback
from konigsberg.engine.session import GameSession, PlayerSnapshot, StatusLevel, StatusReport
from konigsberg.engine.generator import Difficulty, difficulty_size, generate_random_graph, generate_for_difficulty
from konigsberg.engine.topologies import konigsberg_graph
