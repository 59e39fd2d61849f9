"""SQLAlchemy database engine, session factory, and connection management.

Provides the shared engine, session factory, and declarative base for all
ORM models. SQLite connections enable WAL mode and foreign keys via an
event listener.
"""
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from blogai.config import get_settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
    pass


def _get_engine():
    settings = get_settings()
    connect_args = {}
    if settings.DATABASE_URL.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(
        settings.DATABASE_URL,
        connect_args=connect_args,
        echo=settings.DEBUG,
    )
    # Enable WAL mode and foreign keys for SQLite
    if settings.DATABASE_URL.startswith("sqlite"):
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL;")
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()
    return engine


engine = _get_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """FastAPI dependency that yields a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ensure_sqlite_dir() -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = get_settings().DATABASE_URL
    if not url.startswith("sqlite:///"):
        return
    db_path = url.replace("sqlite:///", "")
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)


def create_tables():
    """Create all tables from ORM metadata (dev convenience)."""
    import blogai.models  # noqa: F401  (registers mappers)

    Base.metadata.create_all(bind=engine)
