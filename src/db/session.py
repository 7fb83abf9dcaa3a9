from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings
from src.db.models import Base


def get_async_engine(db_url: Optional[str] = None) -> AsyncEngine:
    """Creates an asynchronous SQLAlchemy engine instance."""
    db_url = db_url or settings.database_url
    if db_url.startswith("sqlite"):
        # SQLite pools do not take sizing arguments
        return create_async_engine(db_url, echo=False)
    return create_async_engine(
        db_url,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=1800, # 30 minutes
        echo=False, # Set to True for debugging SQL
    )

def get_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Creates an asynchronous session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

async def create_schema(engine: AsyncEngine) -> None:
    """Creates any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
