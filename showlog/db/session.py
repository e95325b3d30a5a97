# showlog/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from showlog.core.config import settings


def create_db_engine(url: str) -> Engine:
    """
    Builds an engine for the given URL.

    SQLite needs two adjustments: connections are shared with the request
    thread pool, and foreign keys are off unless enabled per connection.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})

        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(url, pool_pre_ping=True)


# The engine owns the connection pool for the configured database.
engine = create_db_engine(settings.DATABASE_URL)

# One session per request; nothing is committed unless a service says so.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        # Always closed, even if the endpoint raised.
        db.close()
