from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings): # load all key=value pairs from .env
    """ Load settings"""
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'puzzle.db'}"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "app_errors.log"
    AI_STEP_INTERVAL_MS: int = 600 # one AI-solve bridge per tick
    DEFAULT_DIFFICULTY: str = "easy"
    CANVAS_WIDTH: int = 800 # only used to place generated nodes
    CANVAS_HEIGHT: int = 500
    DETECT_STRANDING: bool = True
    MAX_GAMES: int = 200 # live sessions kept in memory, least recently used go first

    model_config = SettingsConfigDict(
        env_file = BASE_DIR/".env",
        env_file_encoding = "utf-8",
        extra = "ignore",
    )

settings = Settings()
