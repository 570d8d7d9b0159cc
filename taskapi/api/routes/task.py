from typing import List

from fastapi import APIRouter, Response, status

from taskapi.api.dependencies import TaskServiceDep
from taskapi.config import settings
from taskapi.core.exceptions import TaskNotFoundError
from taskapi.models.domain.task import TaskDTO


router = APIRouter(prefix=f"{settings.api_prefix}/tasks", tags=["tasks"])


@router.get('', response_model=List[TaskDTO])
async def list_tasks(service: TaskServiceDep):
    return await service.list_tasks()


@router.get('/{task_id}', response_model=TaskDTO)
async def get_task(task_id: int, service: TaskServiceDep):
    task = await service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.post('', response_model=TaskDTO)
async def create_task(task_data: TaskDTO, service: TaskServiceDep):
    return await service.create_task(task_data)


@router.put('/{task_id}', response_model=TaskDTO)
async def update_task(task_id: int, task_data: TaskDTO, service: TaskServiceDep):
    task = await service.update_task(task_id, task_data)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.delete('/{task_id}')
async def delete_task(task_id: int, service: TaskServiceDep):
    if not await service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return Response(status_code=status.HTTP_200_OK)


@router.patch('/{task_id}/toggle', response_model=TaskDTO)
async def toggle_task_completion(task_id: int, service: TaskServiceDep):
    task = await service.toggle_task_completion(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task
