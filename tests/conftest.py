"""
Pytest configuration and fixtures.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from aclpanel.core.database import Base, get_db
from aclpanel.core.store import SqlStore
from aclpanel.main import app

# Import all models to ensure they register with Base.metadata
from aclpanel.models import AccessEntry  # noqa: F401

# Use file-based SQLite for testing (more reliable than in-memory)
TEST_DATABASE_URL = "sqlite:///./test_aclpanel.db"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    pool_pre_ping=False,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class RecordingStore:
    """Fake backing store that records every call and serves canned rows."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.reads = []
        self.writes = []

    def read(self, query, params=()):
        self.reads.append((query, list(params)))
        return list(self.rows)

    def write(self, query, params=()):
        self.writes.append((query, list(params)))


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """
    Create all tables before tests run and drop them after all tests complete.
    """
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with database override.

    The get_db dependency is overridden to use TestingSessionLocal,
    creating a new session for each request (as FastAPI expects).
    """
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db_session():
    """
    Provide a database session for tests that need direct DB access.
    """
    db = TestingSessionLocal()
    try:
        yield db
        db.rollback()
    finally:
        db.close()


@pytest.fixture(scope="function")
def sql_store(db_session):
    """SqlStore bound to the test database."""
    return SqlStore(db_session)


@pytest.fixture(scope="function")
def recording_store():
    """Fake store counting reads and writes."""
    return RecordingStore()
