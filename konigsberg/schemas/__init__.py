from konigsberg.schemas.puzzle_schema import (
    PuzzleCreate, PuzzleGenerate, PuzzleRead, PuzzleData, PuzzleAnalysis, LandGroupCreate, LandGroupRead,
)
from konigsberg.schemas.node_schema import NodeCreate, NodeRead
from konigsberg.schemas.edge_schema import EdgeCreate, EdgeRead
from konigsberg.schemas.game_schema import (
    GameCreate, GameState, NodeSelect, BridgeAdd, NewPuzzleRequest, PlayerRead, ClassificationRead,
)
