from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskStatusUpdate, TaskResponse
from audit_manager.modules.tasks.service import TaskService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action, require_confirmation
from audit_manager.core.enums import TaskStatus
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_request_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    task_status: Optional[TaskStatus] = None,
    client_id: Optional[str] = None,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    service: TaskService = Depends(get_task_service)
):
    """List tasks with their client"""
    return await service.list_tasks(status=task_status, client_id=client_id)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    task_data: TaskCreate,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    service: TaskService = Depends(get_task_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    task = await service.create_task(task_data, profile.id)
    await activity.record(profile.id, "create", "task", task.id, {"title": task.title})
    return task


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    service: TaskService = Depends(get_task_service)
):
    return await service.get_task_by_id(task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    service: TaskService = Depends(get_task_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    task = await service.update_task(task_id, task_data)
    await activity.record(profile.id, "update", "task", task_id)
    return task


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: str,
    status_data: TaskStatusUpdate,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    service: TaskService = Depends(get_task_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Move a task to another status (409 when the transition is not allowed)"""
    task = await service.update_status(task_id, status_data.status)
    await activity.record(profile.id, "status_change", "task", task_id, {"status": status_data.status.value})
    return task


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    profile: ProfileResponse = Depends(require_action(Action.TASKS)),
    confirmed: bool = Depends(require_confirmation),
    service: TaskService = Depends(get_task_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    if not await service.delete_task(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    await activity.record(profile.id, "delete", "task", task_id)
    return None
