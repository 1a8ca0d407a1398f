"""Engine and session factory for the locations store: SQLite in dev/tests, PostgreSQL or MySQL in prod."""
from collections.abc import Generator
import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL

_IS_SQLITE = DATABASE_URL.startswith("sqlite")
_IS_MEMORY = _IS_SQLITE and ":memory:" in DATABASE_URL

# Runtime safety: when TESTING=true, never point at the dev/prod locations file.
if os.environ.get("TESTING") == "true":
    if "locations.db" in DATABASE_URL or (not _IS_MEMORY and "test" not in DATABASE_URL.lower().split("?")[0]):
        raise RuntimeError(
            "Tests must not run against production. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )

if _IS_SQLITE:
    # One connection shared by every session when in memory; otherwise the table would vanish per checkout.
    _engine_kw = {"connect_args": {"check_same_thread": False}}
    if _IS_MEMORY:
        _engine_kw["poolclass"] = StaticPool
    _engine = create_engine(DATABASE_URL, **_engine_kw)

    # pysqlite never emits BEGIN on its own, so SAVEPOINT/ROLLBACK TO would not be real
    # transactions. Let SQLAlchemy own BEGIN so each write statement is atomic and
    # nested transactions roll back properly.
    @event.listens_for(_engine, "connect")
    def _sqlite_manual_transactions(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None

    @event.listens_for(_engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

else:
    # Long-lived server pool shared by all requests; stale connections are replaced on checkout.
    _engine = create_engine(DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: borrow a session for one request and return it to the pool."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
