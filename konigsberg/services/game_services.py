import logging
import random
from typing import Dict, Optional
from uuid import UUID, uuid4

from fastapi import HTTPException

from konigsberg.core.config import settings
from konigsberg.engine import GameSession, Graph, generate_for_difficulty, konigsberg_graph
from konigsberg.schemas import ClassificationRead, GameCreate, GameState, PlayerRead
from konigsberg.services.puzzle_services import PuzzleServices, serialize_graph

logger = logging.getLogger(__name__)


def random_puzzle(difficulty: Optional[str] = None, seed: Optional[int] = None) -> Graph:
    """ Random graph for a difficulty preset, sized to the configured canvas"""
    return generate_for_difficulty(
        difficulty or settings.DEFAULT_DIFFICULTY,
        settings.CANVAS_WIDTH,
        settings.CANVAS_HEIGHT,
        random.Random(seed),
    )


class GameServices:
    """ Live game sessions, keyed by game id. One instance per app."""

    def __init__(self):
        self.games: Dict[UUID, GameSession] = {}

    def create_game(self, request: GameCreate, db=None) -> UUID:
        """ Start a game on a stored puzzle, a fixed topology or a random graph"""
        if request.puzzle_id is not None:
            graph = PuzzleServices(db).to_graph(request.puzzle_id)
        elif request.topology == "konigsberg":
            graph = konigsberg_graph()
        else:
            graph = random_puzzle(request.difficulty, request.seed)

        detect_stranding = settings.DETECT_STRANDING if request.detect_stranding is None else request.detect_stranding
        self._make_room()
        game_id = uuid4()
        self.games[game_id] = GameSession(graph, detect_stranding=detect_stranding, graph_factory=random_puzzle)
        logger.info("Game %s created: %r", game_id, graph)
        return game_id

    def get_game(self, game_id: UUID) -> GameSession:
        session = self.games.get(game_id)
        if session is None:
            raise HTTPException(status_code=404, detail="Game not found")
        # most recently used games sit at the end
        self.games[game_id] = self.games.pop(game_id)
        return session

    def _make_room(self) -> None:
        """ Evict sessions until a new one fits, finished games before the least recently used"""
        while self.games and len(self.games) >= settings.MAX_GAMES:
            finished = (game_id for game_id, session in self.games.items()
                        if session.get_player_state().completed and not session.animating)
            victim = next(finished, next(iter(self.games)))
            self.games.pop(victim).close()
            logger.info("Game %s evicted, %d games live", victim, len(self.games))

    def delete_game(self, game_id: UUID) -> None:
        session = self.get_game(game_id)
        session.close()
        del self.games[game_id]
        logger.info("Game %s deleted", game_id)

    def close_all(self) -> None:
        for session in self.games.values():
            session.close()
        self.games.clear()

    def new_puzzle(self, game_id: UUID, difficulty: Optional[str] = None, seed: Optional[int] = None) -> GameSession:
        session = self.get_game(game_id)
        if seed is None:
            session.handle_new_puzzle(difficulty=difficulty)
        else:
            session.handle_new_puzzle(graph=random_puzzle(difficulty, seed))
        return session

    def serialize_game(self, game_id: UUID) -> GameState:
        """ Everything a UI needs to redraw one game"""
        session = self.get_game(game_id)
        report = session.last_report
        player = session.get_player_state()
        classification = session.classification()
        return GameState(
            id=game_id,
            message=report.message,
            level=report.level,
            edge_id=report.edge_id,
            suggestions=list(report.suggestions),
            graph=serialize_graph(session.get_graph_snapshot()),
            player=PlayerRead(
                status=player.status,
                position=player.position,
                unit=player.unit,
                stranded=player.stranded,
                completed=player.completed,
                outcome=player.outcome,
                moves=list(player.moves),
                next_targets=list(player.next_targets),
                animating=player.animating,
            ),
            classification=ClassificationRead(
                kind=classification.kind,
                odd_nodes=list(classification.odd_nodes),
                connected=classification.connected,
            ),
        )
