# File: canvas_export/core/database/connection.py

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from canvas_export.core.config.settings import settings

IS_SQLITE = settings.DATABASE_URL.startswith("sqlite")

# Export jobs update their rows from worker threads; SQLite needs to allow that
connect_args = {"check_same_thread": False} if IS_SQLITE else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

if IS_SQLITE:
    @event.listens_for(engine, "connect")
    def _sqlite_busy_timeout(dbapi_connection, connection_record):
        # Concurrent jobs wait for the write lock instead of failing with "database is locked"
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA busy_timeout = 5000")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Creates the export job tables if they don't exist."""
    from .base import Base
    import canvas_export.core.jobs.models  # noqa: F401  (registers the tables)

    Base.metadata.create_all(bind=engine)
