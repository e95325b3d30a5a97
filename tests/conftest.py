# tests/conftest.py

import os
import tempfile

# Settings are read at import time, so the test environment goes first.
os.environ["ENV"] = "local"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret"
os.environ["MEDIA_BACKEND"] = "local"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="showlog-media-")

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import create_database, database_exists, drop_database
from starlette.testclient import TestClient

import showlog.models  # noqa: F401
from showlog.api import deps
from showlog.core.storage import LocalMediaStorage, get_storage
from showlog.db.base_class import Base
from showlog.db.session import create_db_engine, get_db
from showlog.main import app


# --- Test Database Setup ---
# A throwaway SQLite file per test, so commits and rollbacks are real.
@pytest.fixture(scope="function")
def db_engine(tmp_path):
    url = f"sqlite:///{tmp_path / 'showlog_test.db'}"
    if database_exists(url):
        drop_database(url)
    create_database(url)
    engine = create_db_engine(url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    drop_database(url)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def media_storage(tmp_path):
    return LocalMediaStorage(str(tmp_path / "uploads"), "/uploads")


# --- Mock Dependencies Setup ---
class MockTokenPayload:
    def __init__(self, sub="admin", exp=4102444800):
        self.sub = sub
        self.exp = exp


def override_get_current_user():
    return MockTokenPayload()


def _override_db(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    return override_get_db


# --- Test Client Fixtures ---
@pytest.fixture(scope="function")
def test_client(session_factory, media_storage):
    """
    TestClient on the per-test database with authentication mocked out.
    """
    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_storage] = lambda: media_storage
    app.dependency_overrides[deps.get_current_user] = override_get_current_user

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def anon_client(session_factory, media_storage):
    """
    TestClient on the per-test database with real token checks.
    """
    app.dependency_overrides[get_db] = _override_db(session_factory)
    app.dependency_overrides[get_storage] = lambda: media_storage

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
