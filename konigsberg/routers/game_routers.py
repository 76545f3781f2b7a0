from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session
from uuid import UUID

from konigsberg.core.config import settings
from konigsberg.core.database import get_db
from konigsberg.schemas import BridgeAdd, GameCreate, GameState, NewPuzzleRequest, NodeSelect
from konigsberg.services import GameServices


router = APIRouter()


def get_game_services(request: Request) -> GameServices:
    """Registry of live games, created with the app"""
    return request.app.state.games


# Start a game
@router.post("/", response_model=GameState, status_code=201)
async def create_game(
    game: GameCreate,
    db: Session = Depends(get_db),
    games: GameServices = Depends(get_game_services),
):
    """Start a game on a stored puzzle, the Königsberg bridges or a random graph"""
    game_id = games.create_game(game, db)
    return games.serialize_game(game_id)


@router.get("/{game_id}", response_model=GameState)
async def get_game(game_id: UUID, games: GameServices = Depends(get_game_services)):
    """Current graph, player and status of a game"""
    return games.serialize_game(game_id)


@router.delete("/{game_id}", status_code=204)
async def delete_game(game_id: UUID, games: GameServices = Depends(get_game_services)):
    games.delete_game(game_id)
    return Response(status_code=204)


# Player click on a node
@router.post("/{game_id}/select", response_model=GameState)
async def select_node(game_id: UUID, selection: NodeSelect, games: GameServices = Depends(get_game_services)):
    """Pick the start node, or cross a bridge towards the selected node"""
    games.get_game(game_id).handle_node_selected(selection.node_id)
    return games.serialize_game(game_id)


@router.post("/{game_id}/undo", response_model=GameState)
async def undo(game_id: UUID, games: GameServices = Depends(get_game_services)):
    games.get_game(game_id).handle_undo()
    return games.serialize_game(game_id)


@router.post("/{game_id}/reset", response_model=GameState)
async def reset(game_id: UUID, games: GameServices = Depends(get_game_services)):
    games.get_game(game_id).handle_reset()
    return games.serialize_game(game_id)


@router.post("/{game_id}/ai-solve", response_model=GameState)
async def ai_solve(
    game_id: UUID,
    animate: bool = Query(True, description="Play one bridge per tick instead of all at once"),
    games: GameServices = Depends(get_game_services),
):
    """Let the AI walk every bridge"""
    report = games.get_game(game_id).handle_ai_solve()
    if report.playback is not None:
        if animate:
            report.playback.schedule(settings.AI_STEP_INTERVAL_MS / 1000)
        else:
            report.playback.run_to_completion()
    return games.serialize_game(game_id)


@router.post("/{game_id}/hint", response_model=GameState)
async def hint(game_id: UUID, games: GameServices = Depends(get_game_services)):
    games.get_game(game_id).handle_hint()
    return games.serialize_game(game_id)


@router.post("/{game_id}/suggest-fix", response_model=GameState)
async def suggest_fix(game_id: UUID, games: GameServices = Depends(get_game_services)):
    games.get_game(game_id).handle_suggest_fix()
    return games.serialize_game(game_id)


# Add bridge mode
@router.post("/{game_id}/bridges", response_model=GameState)
async def add_bridge(game_id: UUID, bridge: BridgeAdd, games: GameServices = Depends(get_game_services)):
    games.get_game(game_id).handle_add_bridge(bridge.start, bridge.end)
    return games.serialize_game(game_id)


@router.post("/{game_id}/new-puzzle", response_model=GameState)
async def new_puzzle(game_id: UUID, request: NewPuzzleRequest, games: GameServices = Depends(get_game_services)):
    """Replace the graph with a fresh random one"""
    games.new_puzzle(game_id, request.difficulty, request.seed)
    return games.serialize_game(game_id)
