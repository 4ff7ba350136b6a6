from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from sqlalchemy import create_engine
from urllib.parse import urlparse, parse_qs, urlunparse
from dotenv import load_dotenv
from app.config import settings

load_dotenv()


def clean_async_url(url: str) -> tuple[str, dict]:
    """
    Normalize a database URL for the async engine.

    postgresql:// becomes postgresql+asyncpg:// with query params stripped
    (asyncpg doesn't accept them) and sslmode moved into connect_args.
    sqlite:// becomes sqlite+aiosqlite://.
    Returns (cleaned_url, connect_args_dict)
    """
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1), {}

    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    if not url.startswith("postgresql+asyncpg://"):
        return url, {}

    parsed = urlparse(url)
    query_params = parse_qs(parsed.query)

    connect_args = {}
    if "sslmode" in query_params:
        sslmode = query_params.pop("sslmode")[0]
        connect_args["ssl"] = sslmode != "disable"

    cleaned_url = urlunparse(parsed._replace(query=""))
    return cleaned_url, connect_args


def sync_url_for(async_url: str) -> str:
    """Derive the synchronous driver URL (Alembic, test schema setup)."""
    if async_url.startswith("postgresql+asyncpg://"):
        return async_url.replace("postgresql+asyncpg://", "postgresql://", 1)
    if async_url.startswith("sqlite+aiosqlite://"):
        return async_url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    return async_url


def build_async_engine(url: str) -> AsyncEngine:
    cleaned_url, connect_args = clean_async_url(url)
    if cleaned_url.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them
        return create_async_engine(cleaned_url, echo=False, future=True, poolclass=NullPool)
    return create_async_engine(
        cleaned_url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        connect_args=connect_args,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


DATABASE_URL, _ = clean_async_url(settings.database_url)
DATABASE_URL_SYNC = settings.database_url_sync or sync_url_for(DATABASE_URL)

# Async engine for FastAPI
async_engine = build_async_engine(settings.database_url)

AsyncSessionLocal = build_session_factory(async_engine)


def build_sync_engine(url: str = DATABASE_URL_SYNC):
    """Sync engine for Alembic and schema bootstrapping."""
    return create_engine(url, echo=False, pool_pre_ping=True)


# Base class for models
Base = declarative_base()


# Dependency for FastAPI to get async database session
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db():
    """Create tables directly (local sqlite; use Alembic elsewhere)."""
    from app.models import product  # noqa: F401 - registers the table

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
