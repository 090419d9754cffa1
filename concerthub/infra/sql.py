from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    create_async_engine, async_sessionmaker, AsyncSession
)


def async_sqlite_url(url: str) -> str:
    """sqlite:///path -> sqlite+aiosqlite:///path; other URLs pass through."""
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return url


def make_async_engine(database_url: str):
    db_url = async_sqlite_url(database_url)
    if not db_url.startswith("sqlite+aiosqlite://"):
        raise ValueError(
            f"unsupported DATABASE_URL {database_url!r}: "
            "expected a sqlite:/// file URL"
        )

    engine = create_async_engine(db_url, future=True, pool_pre_ping=True)

    # foreign_keys stays off: deleting a concert must not touch its orders
    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_pragmas(dbapi_connection, _):
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA journal_mode=WAL;")
        cur.execute("PRAGMA busy_timeout=5000;")
        cur.execute("PRAGMA synchronous=NORMAL;")
        cur.close()

    SessionAsync = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return engine, SessionAsync
