from sqlalchemy.orm import Session

from taskapi.models.entities.task import Task
from taskapi.repositories.base_repository import BaseRepository

class TaskRepository(BaseRepository[Task]):
    def __init__(self, db: Session):
        super().__init__(db, Task)
