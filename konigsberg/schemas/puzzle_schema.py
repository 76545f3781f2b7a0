from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Tuple
from uuid import UUID
from datetime import datetime

from konigsberg.engine import Difficulty, EulerianKind
from konigsberg.schemas.edge_schema import EdgeCreate, EdgeRead
from konigsberg.schemas.node_schema import NodeCreate, NodeRead


class LandGroupCreate(BaseModel):
    id: str
    x: Optional[float] = None # land center, display only
    y: Optional[float] = None


class LandGroupRead(LandGroupCreate):
    members: List[str] = []


# Data sent by user
class PuzzleCreate(BaseModel):
    name: str
    description: Optional[str] = ""
    difficulty: Optional[str] = None
    nodes: List[NodeCreate]
    edges: List[EdgeCreate]
    land_groups: List[LandGroupCreate] = [] # order and centers of lands, members come from nodes


# Random puzzle request
class PuzzleGenerate(BaseModel):
    name: str = "Generated Puzzle"
    difficulty: Difficulty = Difficulty.EASY
    node_count: Optional[int] = Field(default=None, ge=1) # overrides the difficulty preset
    edge_count: Optional[int] = Field(default=None, ge=0)
    seed: Optional[int] = None
    description: Optional[str] = ""


class PuzzleRead(BaseModel):
    id: UUID
    name: str
    variant: str
    difficulty: Optional[str] = None
    node_count: int
    edge_count: int
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# Serialized graph for drawing
class PuzzleData(BaseModel):
    variant: str
    nodes: List[NodeRead]
    edges: List[EdgeRead]
    land_groups: List[LandGroupRead] = []


class PuzzleAnalysis(BaseModel):
    kind: EulerianKind
    odd_nodes: List[str]
    degrees: Dict[str, int]
    connected: bool
    suggestions: List[Tuple[str, str]] = []
