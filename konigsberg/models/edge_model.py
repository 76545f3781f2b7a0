from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from konigsberg.core.database import Base
from uuid import uuid4
from sqlalchemy.dialects.postgresql import UUID


class Edge(Base):
    __tablename__ = "edges"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    edge_key = Column(String, nullable=False)  # bridge id inside the puzzle graph
    edge_index = Column(Integer, nullable=False)
    start_node = Column(String, nullable=False)  # node_key of one end
    end_node = Column(String, nullable=False)
    label = Column(Integer)  # bridge number, fixed topologies only
    puzzle_id = Column(UUID(as_uuid=True), ForeignKey("puzzles.id"), nullable=False)

    # Relationships
    puzzle = relationship("Puzzle", back_populates="edges")
