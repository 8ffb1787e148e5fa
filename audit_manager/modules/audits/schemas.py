from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime

from audit_manager.core.enums import AuditStatus
from audit_manager.modules.clients.schemas import ClientResponse
from audit_manager.modules.form_templates.schemas import FormTemplateResponse


class AuditCreate(BaseModel):
    client_id: Optional[str] = None
    task_id: Optional[str] = None
    form_template_id: Optional[str] = None


class AuditFormDataUpdate(BaseModel):
    form_data: Dict[str, Any]


class AuditStatusUpdate(BaseModel):
    status: AuditStatus


class AuditTask(BaseModel):
    """Embedded task summary; the full task schema embeds its own client"""
    id: str
    title: str
    status: Optional[str] = None
    due_date: Optional[datetime] = None


class AuditResponse(BaseModel):
    id: str
    client_id: Optional[str] = None
    task_id: Optional[str] = None
    form_template_id: Optional[str] = None
    status: AuditStatus
    form_data: Dict[str, Any] = {}
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    clients: Optional[ClientResponse] = None
    tasks: Optional[AuditTask] = None
    form_templates: Optional[FormTemplateResponse] = None

    class Config:
        from_attributes = True
