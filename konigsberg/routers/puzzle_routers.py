# import moduls/libraries
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

# import form project
from konigsberg.core.database import get_db
from konigsberg.schemas import PuzzleAnalysis, PuzzleCreate, PuzzleData, PuzzleGenerate, PuzzleRead
from konigsberg.services import PuzzleServices


router = APIRouter()


# Create puzzle
@router.post("/", response_model=PuzzleRead, status_code=201)
async def create_puzzle(puzzle: PuzzleCreate, db: Session = Depends(get_db)):
    """Store a new puzzle definition"""
    services = PuzzleServices(db)
    return services.create_puzzle(puzzle)


# Generate random puzzle
@router.post("/generate", response_model=PuzzleRead, status_code=201)
async def generate_puzzle(puzzle_generate: PuzzleGenerate, db: Session = Depends(get_db)):
    """Generate a random puzzle and store it"""
    services = PuzzleServices(db)
    return services.generate_puzzle(puzzle_generate)


# get a list of puzzle (GET)
@router.get("/", response_model=List[PuzzleRead])
async def get_puzzles(
    db: Session = Depends(get_db),
    name: Optional[str] = Query(None, description="Filter by name"),
    variant: Optional[str] = Query(None, description="Filter by variant (single/grouped)"),
    difficulty: Optional[str] = Query(None, description="Filter by difficulty"),
    sort_by: Optional[str] = Query(None, description="Sort field"),
    order: Optional[str] = Query("asc", description="Sort order")
):
    """Get a list of puzzles, with optional filters and sorting"""
    services = PuzzleServices(db)
    return services.get_all_puzzle(name, variant, difficulty, sort_by, order)


# API Delete Request
@router.delete("/{puzzle_id}/delete", status_code=204)
async def delete_puzzle(puzzle_id: UUID, db: Session = Depends(get_db)):
    """Delete a puzzle"""
    services = PuzzleServices(db)
    services.delete_puzzle(puzzle_id)
    return Response(status_code=204)


# Get puzzle by id
@router.get("/{puzzle_id}", response_model=PuzzleRead)
async def get_puzzle(puzzle_id: UUID, db: Session = Depends(get_db)):
    """Fetch one puzzle by ID"""
    services = PuzzleServices(db)
    return services.get_puzzle_by_id(puzzle_id)


# Serialize puzzle data to JSON for drawing
@router.get("/{puzzle_id}/data", response_model=PuzzleData)
async def get_puzzle_data(puzzle_id: UUID, db: Session = Depends(get_db)):
    """Get puzzle graph as JSON"""
    services = PuzzleServices(db)
    return services.serialize_puzzle(puzzle_id)


@router.get("/{puzzle_id}/analysis", response_model=PuzzleAnalysis)
async def get_puzzle_analysis(puzzle_id: UUID, db: Session = Depends(get_db)):
    """Degrees, odd nodes and Eulerian type of a stored puzzle"""
    services = PuzzleServices(db)
    return services.analyse_puzzle(puzzle_id)
