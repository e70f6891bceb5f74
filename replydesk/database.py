from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from .config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _create_engine(url: str):
    if url.startswith("sqlite"):
        # In-process databases are shared across threads in tests
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


engine = _create_engine(settings.database_url)
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)


def is_postgres(bind=None) -> bool:
    return (bind or engine).dialect.name == "postgresql"


def init_db() -> None:
    """Create the pgvector extension and all tables."""
    from .models import Base

    if is_postgres():
        with engine.begin() as conn:
            conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", engine.dialect.name)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
