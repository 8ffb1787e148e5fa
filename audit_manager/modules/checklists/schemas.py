from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from audit_manager.modules.clients.schemas import ClientResponse


class ChecklistCreate(BaseModel):
    title: str = Field(..., min_length=1)
    client_id: Optional[str] = None


class ChecklistItemCreate(BaseModel):
    description: str = Field(..., min_length=1)


class ChecklistItemResponse(BaseModel):
    id: str
    checklist_id: str
    description: str
    is_checked: bool = False
    checked_by: Optional[str] = None
    checked_at: Optional[datetime] = None
    order_index: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ChecklistProgress(BaseModel):
    completed: int
    total: int
    percentage: int


class ChecklistResponse(BaseModel):
    id: str
    client_id: Optional[str] = None
    title: str
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    clients: Optional[ClientResponse] = None
    items: List[ChecklistItemResponse] = []
    progress: ChecklistProgress

    class Config:
        from_attributes = True
