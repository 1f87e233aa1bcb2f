"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .core.config import MasterpieceSettings
from .db.db_init import init_db


@dataclass(slots=True)
class AppConfig:
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    masterpiece: MasterpieceSettings


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    database_url = os.getenv("DATABASE_URL", "sqlite:///tryon.db")
    engine = create_engine(database_url, future=True)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)

    init_db(engine)

    return AppConfig(
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        masterpiece=MasterpieceSettings(),
    )
