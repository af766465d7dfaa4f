# letter_system/database.py
from __future__ import annotations

from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from letter_system.config import DATABASE_URL, DB_POOL_SIZE, DB_POOL_TIMEOUT


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": 0,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }


engine = create_engine(DATABASE_URL, future=True, **_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)

class Base(DeclarativeBase):
    pass


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_url() -> str:
    """DATABASE_URL with the password masked, for logs."""
    return make_url(DATABASE_URL).render_as_string(hide_password=True)


def db_ping() -> int:
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar_one()
