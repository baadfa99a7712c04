from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool
from typing import Generator
import logging
import redis
from .config import settings

logger = logging.getLogger(__name__)

def build_engine(database_url: str) -> Engine:
    """Create an engine with pool settings suited to the backend in use."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory databases live and die with their connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        new_engine = create_engine(database_url, **kwargs)
        enable_sqlite_foreign_keys(new_engine)
        return new_engine

    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_pre_ping=True,
    )

def enable_sqlite_foreign_keys(target: Engine) -> None:
    """SQLite ships with foreign key enforcement off; switch it on per connection."""
    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

engine = build_engine(settings.get_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Redis is only touched by the rate limiter; the client connects lazily
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

# Database dependency
def get_db() -> Generator[Session, None, None]:
    """Get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Redis dependency
def get_redis():
    """Get Redis client."""
    return redis_client

# Database initialization
def init_db(bind: Engine = None):
    """Initialize database tables."""
    # Register every mapped table on the metadata
    from ..models import (  # noqa: F401
        appointment, billing, doctor, employee, feedback, patient, pharmacy, user, ward
    )

    Base.metadata.create_all(bind=bind or engine)
