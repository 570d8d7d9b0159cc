"""
Pytest configuration and fixtures for test suite.
"""

import os
import pytest

# Set test environment variables before importing the app
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"
os.environ["LOG_FORMAT"] = "console"
os.environ["API_PREFIX"] = ""

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from taskapi.api.dependencies import get_db
from taskapi.main import app
from taskapi.models.base import Base, build_engine
from taskapi.models.database import create_tables
from taskapi.repositories.task_repository import TaskRepository
from taskapi.services.task_service import TaskService


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repository(db_session):
    return TaskRepository(db_session)


@pytest.fixture
def service(repository):
    return TaskService(repository)


@pytest.fixture
def client(db_session):
    """FastAPI test client bound to the per-test database."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_task_payload():
    return {
        "title": "Test Task",
        "description": "Test Description",
        "completed": False,
    }
