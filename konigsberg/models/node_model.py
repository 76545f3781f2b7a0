from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from konigsberg.core.database import Base
from uuid import uuid4
from sqlalchemy.dialects.postgresql import UUID


class Node(Base):
    __tablename__ = "nodes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    node_key = Column(String, nullable=False)  # id inside the puzzle graph, e.g. "A1"
    node_index = Column(Integer, nullable=False)  # keeps insertion order
    x_position = Column(Float, nullable=False)
    y_position = Column(Float, nullable=False)
    land_group = Column(String)  # key of the land group, grouped puzzles only
    puzzle_id = Column(UUID(as_uuid=True), ForeignKey("puzzles.id"), nullable=False)

    # Relationship
    puzzle = relationship("Puzzle", back_populates="nodes")
