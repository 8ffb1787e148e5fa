from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from audit_manager.core.enums import TaskStatus, check_transition
from typing import List, Optional
from fastapi import HTTPException

TASK_JOINS = ["clients"]


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.tasks = TableRepository(supabase, "tasks")

    async def create_task(self, task_data: TaskCreate, user_id: str) -> TaskResponse:
        """New tasks always start as pending"""
        row = await self.tasks.insert({
            "title": task_data.title,
            "description": task_data.description or None,
            "client_id": task_data.client_id or None,
            "status": TaskStatus.PENDING.value,
            "assigned_to": task_data.assigned_to or None,
            "due_date": task_data.due_date.isoformat() if task_data.due_date else None,
            "created_by": user_id,
        })
        return TaskResponse(**row)

    async def get_task_by_id(self, task_id: str) -> TaskResponse:
        row = await self.tasks.get(task_id, joins=TASK_JOINS)
        if not row:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse(**row)

    async def list_tasks(
        self,
        status: Optional[TaskStatus] = None,
        client_id: Optional[str] = None,
    ) -> List[TaskResponse]:
        """Tasks with their client embedded, newest first"""
        filters = {}
        if status:
            filters["status"] = status.value
        if client_id:
            filters["client_id"] = client_id
        rows = await self.tasks.query(filters=filters, joins=TASK_JOINS, order="created_at", desc=True)
        return [TaskResponse(**row) for row in rows]

    async def update_task(self, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        update_data = task_data.model_dump(exclude_unset=True, mode="json")
        if not update_data:
            return await self.get_task_by_id(task_id)
        update_data["updated_at"] = utc_now()
        row = await self.tasks.update(task_id, update_data)
        if not row:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse(**row)

    async def update_status(self, task_id: str, new_status: TaskStatus) -> TaskResponse:
        """Checked against the transition table; concurrent writers still race, last write wins"""
        current = await self.tasks.get(task_id)
        if not current:
            raise HTTPException(status_code=404, detail="Task not found")
        check_transition(current["status"], new_status)
        row = await self.tasks.update(task_id, {
            "status": new_status.value,
            "updated_at": utc_now(),
        })
        if not row:
            raise HTTPException(status_code=404, detail="Task not found")
        return TaskResponse(**row)

    async def delete_task(self, task_id: str) -> bool:
        return await self.tasks.delete(task_id)
