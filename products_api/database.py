import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from products_api.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

IN_MEMORY_SQLITE_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    PostgreSQL gets a pre-pinged connection pool. SQLite is allowed across
    threads, and an in-memory database is pinned to a single connection so
    that every session sees the same tables.
    """
    if url in IN_MEMORY_SQLITE_URLS:
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
    )


# Create SQLAlchemy engine
engine = build_engine(settings.DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """
    Dependency to get database session.
    Yields a database session and closes it after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def connect_db(bind: Engine = None, required: bool = False) -> bool:
    """
    Authenticate against the database and create missing tables.

    Args:
        bind: Engine to connect with (defaults to the application engine)
        required: Re-raise connection failures instead of only logging them

    Returns:
        True if the database is reachable and the schema is in place,
        False if the connection failed and ``required`` is off
    """
    bind = bind if bind is not None else engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        # Only models imported by this point are created
        Base.metadata.create_all(bind=bind)
    except SQLAlchemyError as e:
        logger.error(f"Could not connect to the database: {e}")
        if required:
            raise
        return False

    logger.info("Database connection established")
    return True


def dispose_db(bind: Engine = None) -> None:
    """Close every pooled connection of the engine."""
    bind = bind if bind is not None else engine
    bind.dispose()
    logger.info("Database connections closed")
