"""Tests for TaskRepository against an in-memory SQLite database."""

import threading
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskapi.core.exceptions import PersistenceError
from taskapi.models.entities.task import Task
from taskapi.repositories.task_repository import TaskRepository


@pytest.mark.asyncio
async def test_save_assigns_id(repository):
    saved = await repository.save(Task(title="Test Task", description="Test Description"))

    assert saved.id is not None
    assert saved.title == "Test Task"
    assert saved.description == "Test Description"
    assert saved.completed is False


@pytest.mark.asyncio
async def test_get_by_id(repository):
    saved = await repository.save(Task(title="Find Task", completed=False))

    found = await repository.get_by_id(saved.id)

    assert found is not None
    assert found.title == "Find Task"


@pytest.mark.asyncio
async def test_get_by_id_missing_returns_none(repository):
    assert await repository.get_by_id(999) is None


@pytest.mark.asyncio
async def test_get_all(repository):
    await repository.save(Task(title="Task 1", completed=False))
    await repository.save(Task(title="Task 2", completed=True))

    tasks = await repository.get_all()

    assert {task.title for task in tasks} == {"Task 1", "Task 2"}


@pytest.mark.asyncio
async def test_update_in_place_keeps_id(repository):
    saved = await repository.save(Task(title="Original", completed=False))
    task_id = saved.id

    saved.title = "Updated Title"
    saved.completed = True
    updated = await repository.save(saved)

    assert updated.id == task_id
    reloaded = await repository.get_by_id(task_id)
    assert reloaded.title == "Updated Title"
    assert reloaded.completed is True


@pytest.mark.asyncio
async def test_exists_by_id(repository):
    saved = await repository.save(Task(title="Exists", completed=False))

    assert await repository.exists_by_id(saved.id) is True
    assert await repository.exists_by_id(999) is False


@pytest.mark.asyncio
async def test_delete_by_id(repository):
    saved = await repository.save(Task(title="Delete Me", completed=False))

    assert await repository.delete_by_id(saved.id) is True
    assert await repository.get_by_id(saved.id) is None
    assert await repository.delete_by_id(saved.id) is False


@pytest.mark.asyncio
async def test_save_failure_rolls_back_and_wraps():
    db = MagicMock(spec=Session)
    db.commit.side_effect = SQLAlchemyError("disk I/O error")
    repository = TaskRepository(db)

    with pytest.raises(PersistenceError) as exc_info:
        await repository.save(Task(title="Doomed", completed=False))

    db.rollback.assert_called_once()
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_query_failure_wraps():
    db = MagicMock(spec=Session)
    db.query.side_effect = SQLAlchemyError("no such table: tasks")
    repository = TaskRepository(db)

    with pytest.raises(PersistenceError):
        await repository.get_all()

    db.rollback.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("call", [
    lambda repository: repository.get_by_id(1),
    lambda repository: repository.exists_by_id(1),
    lambda repository: repository.delete_by_id(1),
])
async def test_read_failure_rolls_back(call):
    db = MagicMock(spec=Session)
    db.query.side_effect = SQLAlchemyError("server closed the connection")
    repository = TaskRepository(db)

    with pytest.raises(PersistenceError) as exc_info:
        await call(repository)

    db.rollback.assert_called_once()
    assert isinstance(exc_info.value.__cause__, SQLAlchemyError)


@pytest.mark.asyncio
async def test_session_calls_leave_the_event_loop(repository):
    loop_thread = threading.get_ident()
    seen = []
    original_query = repository.db.query

    def recording_query(*args, **kwargs):
        seen.append(threading.get_ident())
        return original_query(*args, **kwargs)

    with patch.object(repository.db, "query", side_effect=recording_query):
        await repository.get_all()

    assert seen and loop_thread not in seen
