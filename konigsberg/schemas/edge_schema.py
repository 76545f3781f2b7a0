from pydantic import BaseModel
from typing import Optional


class EdgeCreate(BaseModel):
    id: str
    start: str # node id
    end: str
    label: Optional[int] = None


class EdgeRead(EdgeCreate):
    used: bool = False
