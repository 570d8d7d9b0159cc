from taskapi.repositories.base_repository import BaseRepository
from taskapi.repositories.task_repository import TaskRepository

__all__ = ["BaseRepository", "TaskRepository"]
