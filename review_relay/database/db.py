"""Database connection and session management."""

import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker

from review_relay.config.settings import Settings, settings
from review_relay.models.records import Base

logger = logging.getLogger(__name__)


def build_database_url(config: Settings) -> URL:
    """Combine DATABASE_URL with DATABASE_ACCESS_KEY when one is configured."""
    url = make_url(config.database_url)
    if config.database_access_key:
        url = url.set(password=config.database_access_key)
    return url


def create_db_engine(config: Settings) -> Engine:
    """Create the engine used for processed records and the identity map."""
    url = build_database_url(config)
    kwargs: dict[str, Any] = {"echo": config.debug}  # Log SQL queries in debug mode

    if url.get_backend_name() == "postgresql":
        # Connection pool settings optimized for serverless deployment
        kwargs.update(
            pool_pre_ping=True,  # Verify connections before using them
            pool_size=5,
            max_overflow=10,
            pool_recycle=3600,  # Recycle connections after 1 hour to avoid stale connections
            connect_args={
                "connect_timeout": 10,
                "options": "-c timezone=utc",
            },
        )

    return create_engine(url, **kwargs)


engine = create_db_engine(settings)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    The relay commits explicitly after its single insert, so this only
    guarantees the session is rolled back on errors and always closed.

    Usage:
        @router.post("/endpoint")
        async def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """
    Initialize database tables.

    Creates the relay tables if they don't exist. Called during application
    startup; the identity map is populated outside the relay.
    """
    try:
        logger.info("Initializing database tables...")
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise


def check_db_connection() -> bool:
    """
    Check if database connection is working.

    Returns:
        True if connection successful, False otherwise
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection check successful")
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False
