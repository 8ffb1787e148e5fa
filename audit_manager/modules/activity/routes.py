from fastapi import APIRouter, Depends
from audit_manager.modules.activity.schemas import ActivityLogResponse
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/activity", tags=["activity"])


def get_activity_service(supabase: Client = Depends(get_request_supabase)) -> ActivityLogService:
    return ActivityLogService(supabase)


@router.get("", response_model=List[ActivityLogResponse])
async def list_activity(
    entity_type: Optional[str] = None,
    user_id: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
    profile: ProfileResponse = Depends(require_action(Action.VIEW_DASHBOARD)),
    service: ActivityLogService = Depends(get_activity_service)
):
    """Most recent activity entries, newest first"""
    return await service.list_recent(entity_type=entity_type, user_id=user_id, limit=limit, offset=offset)
