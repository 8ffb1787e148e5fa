from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from audit_manager.core.enums import TaskStatus
from audit_manager.modules.clients.schemas import ClientResponse


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    client_id: Optional[str] = None
    assigned_to: Optional[List[str]] = None
    due_date: Optional[datetime] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    client_id: Optional[str] = None
    assigned_to: Optional[List[str]] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if v is None:
            raise ValueError("title cannot be null; omit it to keep the current title")
        return v


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    client_id: Optional[str] = None
    status: TaskStatus
    assigned_to: Optional[List[str]] = None
    created_by: Optional[str] = None
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    clients: Optional[ClientResponse] = None  # embedded relation

    class Config:
        from_attributes = True
