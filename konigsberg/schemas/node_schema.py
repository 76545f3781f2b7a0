from pydantic import BaseModel
from typing import Optional


class NodeCreate(BaseModel):
    id: str
    x: float = 0.0
    y: float = 0.0
    land_group: Optional[str] = None # set for land-mass puzzles


class NodeRead(NodeCreate):
    pass
