from fastapi import APIRouter, Depends
from audit_manager.modules.dashboard.schemas import DashboardStats
from audit_manager.modules.dashboard.service import DashboardService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action
from supabase import Client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_request_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    profile: ProfileResponse = Depends(require_action(Action.VIEW_DASHBOARD)),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Client/user counts and task/audit totals by status"""
    return await service.get_stats()
