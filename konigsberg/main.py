from contextlib import asynccontextmanager

from fastapi import FastAPI

from konigsberg.core.database import Base, engine
from konigsberg.routers import game_routers, puzzle_routers
from konigsberg.services import GameServices
from utils.logger_config import configure_logging

# logging first, everything below logs
configure_logging()

# Create database tables
Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one registry of live games per app, playbacks die with it
    app.state.games = GameServices()
    yield
    app.state.games.close_all()


# create FastAPI
app = FastAPI(title="Königsberg Bridges API", version="1.0", lifespan=lifespan)

# get routers
app.include_router(puzzle_routers.router, prefix="/puzzles", tags=["Puzzles"])
app.include_router(game_routers.router, prefix="/games", tags=["Games"])


@app.get("/health")
async def health():
    return {"status": "ok"}
