"""Database engine and per-request sessions"""

from typing import Any, Dict
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from history_gateway.config import settings


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool tuning for server databases; SQLite only needs cross-thread access"""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 10,
        "pool_recycle": 3600,  # seconds
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Yield a session for one request and always close it"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
