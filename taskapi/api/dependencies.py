from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.orm import Session

from taskapi.models.base import SessionLocal
from taskapi.repositories.task_repository import TaskRepository
from taskapi.services.task_service import TaskService


async def get_db() -> AsyncGenerator[Session, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_task_service(db: Annotated[Session, Depends(get_db)]) -> TaskService:
    return TaskService(TaskRepository(db))

# Type alias for cleaner endpoint signatures
TaskServiceDep = Annotated[TaskService, Depends(get_task_service)]
