from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.checklists.schemas import (
    ChecklistCreate, ChecklistItemCreate, ChecklistItemResponse, ChecklistResponse
)
from audit_manager.modules.checklists.service import ChecklistService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action, require_confirmation
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/checklists", tags=["checklists"])


def get_checklist_service(supabase: Client = Depends(get_request_supabase)) -> ChecklistService:
    return ChecklistService(supabase)


@router.get("", response_model=List[ChecklistResponse])
async def list_checklists(
    client_id: Optional[str] = None,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    service: ChecklistService = Depends(get_checklist_service)
):
    """Checklists with ordered items, client and progress"""
    return await service.list_checklists(client_id=client_id)


@router.post("", response_model=ChecklistResponse, status_code=201)
async def create_checklist(
    checklist_data: ChecklistCreate,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    service: ChecklistService = Depends(get_checklist_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    checklist = await service.create_checklist(checklist_data, profile.id)
    await activity.record(profile.id, "create", "checklist", checklist.id, {"title": checklist.title})
    return checklist


@router.get("/{checklist_id}", response_model=ChecklistResponse)
async def get_checklist(
    checklist_id: str,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    service: ChecklistService = Depends(get_checklist_service)
):
    return await service.get_checklist_by_id(checklist_id)


@router.delete("/{checklist_id}", status_code=204)
async def delete_checklist(
    checklist_id: str,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    confirmed: bool = Depends(require_confirmation),
    service: ChecklistService = Depends(get_checklist_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    if not await service.delete_checklist(checklist_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist not found")
    await activity.record(profile.id, "delete", "checklist", checklist_id)
    return None


@router.post("/{checklist_id}/items", response_model=ChecklistItemResponse, status_code=201)
async def add_item(
    checklist_id: str,
    item_data: ChecklistItemCreate,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    service: ChecklistService = Depends(get_checklist_service)
):
    return await service.add_item(checklist_id, item_data)


@router.post("/items/{item_id}/toggle", response_model=ChecklistItemResponse)
async def toggle_item(
    item_id: str,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    service: ChecklistService = Depends(get_checklist_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    item = await service.toggle_item(item_id, profile.id)
    action = "check" if item.is_checked else "uncheck"
    await activity.record(profile.id, action, "checklist_item", item_id)
    return item


@router.delete("/items/{item_id}", status_code=204)
async def delete_item(
    item_id: str,
    profile: ProfileResponse = Depends(require_action(Action.CHECKLISTS)),
    confirmed: bool = Depends(require_confirmation),
    service: ChecklistService = Depends(get_checklist_service)
):
    """Remove one item (confirm=true required)"""
    if not await service.delete_item(item_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Checklist item not found")
    return None
