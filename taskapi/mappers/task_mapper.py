from taskapi.models.domain.task import TaskDTO
from taskapi.models.entities.task import Task


class TaskMapper:
    """Converts between the persisted Task entity and TaskDTO."""

    def to_dto(self, task: Task) -> TaskDTO:
        return TaskDTO.model_validate(task)

    def to_entity(self, task_dto: TaskDTO) -> Task:
        # id is left to storage
        return Task(
            title=task_dto.title,
            description=task_dto.description,
            completed=task_dto.completed,
        )
