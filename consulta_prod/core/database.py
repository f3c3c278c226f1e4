# consulta_prod/core/database.py
"""Database configuration, session helpers and table initialisation."""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from consulta_prod.core import config

logger = logging.getLogger(__name__)

DATABASE_URL = config.DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


@event.listens_for(Engine, "connect")
def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite leaves foreign keys unenforced unless asked on every connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def new_id() -> str:
    """Server-generated primary key."""
    return str(uuid.uuid4())


# ===== SESSION GENERATORS =====


def get_db():
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(session: Session) -> Iterator[Session]:
    """Commit everything written inside the block, or nothing.

    Mutating services put the entity write and its audit entry in the same
    block so the two can never diverge.
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


# ===== TABLE CREATION =====


def import_models() -> None:
    """Import every model module so the tables are registered on ``Base``."""
    from consulta_prod.auth.models import User  # noqa: F401
    from consulta_prod.resources.models import CBO, Prestador, Procedimento, SRub  # noqa: F401
    from consulta_prod.production.models import ConsultaProd  # noqa: F401
    from consulta_prod.audit.models import AuditLog  # noqa: F401
    from consulta_prod.logging.models import Log  # noqa: F401


def create_all_tables(bind=None) -> None:
    import_models()
    Base.metadata.create_all(bind=bind or engine)


def drop_all_tables(bind=None) -> None:
    """Drop all tables (use with caution!)."""
    import_models()
    Base.metadata.drop_all(bind=bind or engine)


def init_db() -> None:
    """Create tables and, when configured, load the sample data set."""
    create_all_tables()
    logger.info("Database tables ready on %s", engine.url.render_as_string(hide_password=True))

    if config.SEED_SAMPLE_DATA:
        from consulta_prod.core.seed import seed_database

        with SessionLocal() as session:
            seed_database(session)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
