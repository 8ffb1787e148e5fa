from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.audits.schemas import (
    AuditCreate, AuditFormDataUpdate, AuditStatusUpdate, AuditResponse
)
from audit_manager.modules.audits.service import AuditService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action, require_confirmation
from audit_manager.core.enums import AuditStatus
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/audits", tags=["audits"])


def get_audit_service(supabase: Client = Depends(get_request_supabase)) -> AuditService:
    return AuditService(supabase)


@router.get("", response_model=List[AuditResponse])
async def list_audits(
    audit_status: Optional[AuditStatus] = None,
    client_id: Optional[str] = None,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    service: AuditService = Depends(get_audit_service)
):
    return await service.list_audits(status=audit_status, client_id=client_id)


@router.post("", response_model=AuditResponse, status_code=201)
async def create_audit(
    audit_data: AuditCreate,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    service: AuditService = Depends(get_audit_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Start a new audit in draft status"""
    audit = await service.create_audit(audit_data, profile.id)
    await activity.record(profile.id, "create", "audit", audit.id)
    return audit


@router.get("/{audit_id}", response_model=AuditResponse)
async def get_audit(
    audit_id: str,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    service: AuditService = Depends(get_audit_service)
):
    return await service.get_audit_by_id(audit_id)


@router.put("/{audit_id}/form-data", response_model=AuditResponse)
async def update_form_data(
    audit_id: str,
    body: AuditFormDataUpdate,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    service: AuditService = Depends(get_audit_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    audit = await service.update_form_data(audit_id, body.form_data)
    await activity.record(profile.id, "update", "audit", audit_id)
    return audit


@router.patch("/{audit_id}/status", response_model=AuditResponse)
async def update_audit_status(
    audit_id: str,
    status_data: AuditStatusUpdate,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    service: AuditService = Depends(get_audit_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Move an audit to another status (409 when the transition is not allowed)"""
    audit = await service.update_status(audit_id, status_data.status)
    await activity.record(profile.id, "status_change", "audit", audit_id, {"status": status_data.status.value})
    return audit


@router.delete("/{audit_id}", status_code=204)
async def delete_audit(
    audit_id: str,
    profile: ProfileResponse = Depends(require_action(Action.AUDITS)),
    confirmed: bool = Depends(require_confirmation),
    service: AuditService = Depends(get_audit_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    if not await service.delete_audit(audit_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Audit not found")
    await activity.record(profile.id, "delete", "audit", audit_id)
    return None
