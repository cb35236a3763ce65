# File: tests/conftest.py

import pytest
import os
import sys
import subprocess
import sqlalchemy
from pathlib import Path
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Tests run against SQLite unless told otherwise (must be set before settings import)
os.environ.setdefault("USE_SQLITE", "true")

# 3. Import Settings
from canvas_export.core.config.settings import settings

# 4. Create Test Engine
TEST_ENGINE = create_engine(settings.DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=TEST_ENGINE)


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Ensures DB exists and the export tables are created.
    """
    if not database_exists(TEST_ENGINE.url):
        create_database(TEST_ENGINE.url)

    # Import all models to ensure they are registered
    from canvas_export.core.database.base import Base
    import canvas_export.core.jobs.models

    # Create tables once
    Base.metadata.create_all(bind=TEST_ENGINE)

    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Detects DB type and cleans tables appropriately.
    """
    from canvas_export.core.database.base import Base

    # 1. Safety Check: Ensure tables exist
    Base.metadata.create_all(bind=TEST_ENGINE)

    # 2. Clean Data
    with TEST_ENGINE.connect() as conn:
        trans = conn.begin()

        is_sqlite = "sqlite" in str(TEST_ENGINE.url)

        inspector = sqlalchemy.inspect(TEST_ENGINE)
        table_names = inspector.get_table_names()

        if table_names:
            if is_sqlite:
                conn.execute(text("PRAGMA foreign_keys = OFF;"))
                for table in table_names:
                    conn.execute(text(f'DELETE FROM "{table}";'))
                conn.execute(text("PRAGMA foreign_keys = ON;"))
            else:
                conn.execute(text("SET session_replication_role = 'replica';"))
                for table in table_names:
                    conn.execute(text(f'TRUNCATE TABLE "{table}" CASCADE;'))
                conn.execute(text("SET session_replication_role = 'origin';"))

        trans.commit()

    yield


@pytest.fixture(scope="function")
def db_session():
    """
    Provides a session for the test to use.
    """
    connection = TEST_ENGINE.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


class RecordingReporter:
    """In-memory progress reporter: keeps every (progress, status) pair."""

    def __init__(self):
        self.events = []
        self.flushed = 0
        self.closed = False

    @property
    def last_progress(self) -> int:
        return self.events[-1][0] if self.events else 0

    def report(self, progress, status):
        self.events.append((progress, status))

    def flush(self, timeout=None):
        self.flushed += 1

    def close(self):
        self.closed = True

    @property
    def statuses(self):
        return [status for _, status in self.events]


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def make_video():
    """
    Factory for synthetic lavfi test clips (optionally with a sine soundtrack).
    Only usable where ffmpeg is on PATH.
    """
    def _make(path: Path, duration: float, with_audio: bool = False, size: str = "320x240") -> Path:
        cmd = [
            "ffmpeg", "-y",
            "-f", "lavfi", "-i", f"testsrc=duration={duration}:size={size}:rate=30",
        ]
        if with_audio:
            cmd += ["-f", "lavfi", "-i", f"sine=frequency=1000:duration={duration}", "-c:a", "aac"]
        cmd += ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-shortest", str(path)]
        subprocess.run(cmd, check=True, capture_output=True)
        return path

    return _make
