from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from konigsberg.core.config import settings

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

engine_options = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI serves requests from several threads
    engine_options["connect_args"] = {"check_same_thread": False}
    if settings.DATABASE_URL in IN_MEMORY_URLS:
        # every session has to see the same in-memory database
        engine_options["poolclass"] = StaticPool
    else:
        Path(settings.DATABASE_URL.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(settings.DATABASE_URL, **engine_options)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def get_db():
    """ Yield a database session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
