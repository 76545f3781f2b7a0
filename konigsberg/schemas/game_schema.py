from pydantic import BaseModel, model_validator
from typing import Optional, List, Literal, Tuple
from uuid import UUID

from konigsberg.engine import CompletionOutcome, Difficulty, EulerianKind, PlayerStatus, StatusLevel
from konigsberg.schemas.puzzle_schema import PuzzleData


class GameCreate(BaseModel):
    puzzle_id: Optional[UUID] = None # stored puzzle
    topology: Optional[Literal["konigsberg"]] = None # fixed topology
    difficulty: Optional[Difficulty] = None # random puzzle, default from settings
    seed: Optional[int] = None
    detect_stranding: Optional[bool] = None

    @model_validator(mode="after")
    def one_source(self):
        """Only one of puzzle_id and topology may be given"""
        if self.puzzle_id is not None and self.topology is not None:
            raise ValueError("Give either puzzle_id or topology, not both")
        return self


class NodeSelect(BaseModel):
    node_id: str


class BridgeAdd(BaseModel):
    start: str
    end: str


class NewPuzzleRequest(BaseModel):
    difficulty: Optional[Difficulty] = None
    seed: Optional[int] = None


class PlayerRead(BaseModel):
    status: PlayerStatus
    position: Optional[str] = None
    unit: Optional[str] = None
    stranded: bool
    completed: bool
    outcome: Optional[CompletionOutcome] = None
    moves: List[str]
    next_targets: List[str]
    animating: bool


class ClassificationRead(BaseModel):
    kind: EulerianKind
    odd_nodes: List[str]
    connected: bool


class GameState(BaseModel):
    id: UUID
    message: str
    level: StatusLevel = StatusLevel.INFO
    edge_id: Optional[str] = None # bridge the last report is about (move, hint, undo)
    suggestions: List[Tuple[str, str]] = []
    graph: PuzzleData
    player: PlayerRead
    classification: ClassificationRead
