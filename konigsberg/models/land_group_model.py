from sqlalchemy import Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from konigsberg.core.database import Base
from uuid import uuid4
from sqlalchemy.dialects.postgresql import UUID


class LandGroup(Base):
    __tablename__ = "land_groups"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    group_key = Column(String, nullable=False)  # e.g. "A"
    group_index = Column(Integer, nullable=False)
    x_position = Column(Float)  # land center, display only
    y_position = Column(Float)
    puzzle_id = Column(UUID(as_uuid=True), ForeignKey("puzzles.id"), nullable=False)

    puzzle = relationship("Puzzle", back_populates="land_groups")
