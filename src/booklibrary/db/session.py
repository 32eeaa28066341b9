"""
Configuración y utilidades para la gestión de la sesión de base de datos SQLAlchemy.

Creates the engine, the session factory and the declarative base for the ORM
models, and provides the request-scoped session dependency plus the commit
helper used by every CRUD write.
"""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from booklibrary.core.config import settings

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """
    Turns on foreign key enforcement for every new SQLite connection so that
    ON DELETE CASCADE holds at the store level. No-op for other dialects.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """
    Proporciona una sesión de base de datos para su uso en dependencias de FastAPI.

    Yields:
        Session: Sesión de base de datos SQLAlchemy.

    Ensures:
        La sesión se cierra al final de la petición; lo que no se haya
        confirmado con commit se descarta.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    """Creates every table that does not exist yet."""
    # Models must be imported so they register on Base.metadata.
    from booklibrary.models import author, book, genre, review  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready.")


def commit_or_rollback(db: Session, action: str) -> None:
    """
    Commits the current unit of work; on failure rolls it back and re-raises.

    Args:
        db (Session): Sesión SQLAlchemy activa.
        action (str): Short description used in the log line.
    """
    try:
        db.commit()
    except Exception:
        logger.exception(f"Error committing {action}. Rolling back.")
        db.rollback()
        raise
