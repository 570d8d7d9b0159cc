import logging
from typing import List, Optional

from taskapi.mappers.task_mapper import TaskMapper
from taskapi.models.domain.task import TaskDTO
from taskapi.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)

class TaskService:
    """
    Task use cases on top of the repository.

    Lookups by id return ``None`` (or ``False`` for delete) when the task does
    not exist; callers decide how to report that.
    """

    def __init__(self, repository: TaskRepository, mapper: Optional[TaskMapper] = None):
        self.repository = repository
        self.mapper = mapper or TaskMapper()

    async def list_tasks(self) -> List[TaskDTO]:
        tasks = await self.repository.get_all()
        return [self.mapper.to_dto(task) for task in tasks]

    async def get_task(self, task_id: int) -> Optional[TaskDTO]:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            return None
        return self.mapper.to_dto(task)

    async def create_task(self, task_data: TaskDTO) -> TaskDTO:
        task = self.mapper.to_entity(task_data)
        created_task = await self.repository.save(task)

        logger.info(f"Created task {created_task.id}")
        return self.mapper.to_dto(created_task)

    async def update_task(self, task_id: int, task_data: TaskDTO) -> Optional[TaskDTO]:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            return None

        task.title = task_data.title
        task.description = task_data.description
        task.completed = task_data.completed
        updated_task = await self.repository.save(task)

        logger.info(f"Updated task {task_id}")
        return self.mapper.to_dto(updated_task)

    async def delete_task(self, task_id: int) -> bool:
        deleted = await self.repository.delete_by_id(task_id)
        if deleted:
            logger.info(f"Deleted task {task_id}")
        return deleted

    async def toggle_task_completion(self, task_id: int) -> Optional[TaskDTO]:
        task = await self.repository.get_by_id(task_id)
        if task is None:
            return None

        task.completed = not task.completed
        updated_task = await self.repository.save(task)

        logger.info(f"Task {task_id} toggled to completed={updated_task.completed}")
        return self.mapper.to_dto(updated_task)
