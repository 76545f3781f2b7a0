from sqlalchemy import Column, Integer, String, func, DateTime
from sqlalchemy.orm import relationship
from konigsberg.core.database import Base
from uuid import uuid4
from sqlalchemy.dialects.postgresql import UUID


class Puzzle(Base):
    __tablename__ = "puzzles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    name = Column(String, nullable=False)
    variant = Column(String, nullable=False, default="single")  # 'single' or 'grouped' (land masses)
    difficulty = Column(String)  # set for generated puzzles
    node_count = Column(Integer, nullable=False)
    edge_count = Column(Integer, nullable=False)
    description = Column(String)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # relationship
    nodes = relationship("Node", back_populates="puzzle", cascade="all, delete-orphan")
    edges = relationship("Edge", back_populates="puzzle", cascade="all, delete-orphan")
    land_groups = relationship("LandGroup", back_populates="puzzle", cascade="all, delete-orphan")
