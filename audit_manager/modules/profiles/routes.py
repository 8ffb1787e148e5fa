from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.profiles.schemas import (
    ProfileCreate, ProfileUpdate, ProfileRoleUpdate, ProfileResponse
)
from audit_manager.modules.profiles.service import ProfileService
from audit_manager.modules.auth.service import AuthService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, get_auth_service, require_action, require_confirmation
from supabase import Client
from typing import List

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_request_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_USERS)),
    service: ProfileService = Depends(get_profile_service)
):
    """List all users (admin only)"""
    return await service.list_profiles()


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_user(
    user_data: ProfileCreate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_USERS)),
    auth_service: AuthService = Depends(get_auth_service),
    service: ProfileService = Depends(get_profile_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Create an account with a chosen role (admin only)"""
    user = await auth_service.create_user(
        user_data.email, user_data.password, user_data.full_name, user_data.role
    )
    await activity.record(profile.id, "create", "profile", user.id, {"role": user_data.role.value})
    return await service.get_profile_by_id(user.id)


@router.get("/me", response_model=ProfileResponse)
async def get_own_profile(
    profile: ProfileResponse = Depends(require_action(Action.OWN_PROFILE))
):
    return profile


@router.put("/me", response_model=ProfileResponse)
async def update_own_profile(
    profile_data: ProfileUpdate,
    profile: ProfileResponse = Depends(require_action(Action.OWN_PROFILE)),
    service: ProfileService = Depends(get_profile_service)
):
    """Owner may change their full name only"""
    return await service.update_profile(profile.id, profile_data)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_USERS)),
    service: ProfileService = Depends(get_profile_service)
):
    return await service.get_profile_by_id(user_id)


@router.put("/{user_id}/role", response_model=ProfileResponse)
async def update_role(
    user_id: str,
    role_data: ProfileRoleUpdate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_USERS)),
    service: ProfileService = Depends(get_profile_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Change a user's role (admin only)"""
    updated = await service.update_role(user_id, role_data.role)
    await activity.record(profile.id, "update", "profile", user_id, {"role": role_data.role.value})
    return updated


@router.delete("/{user_id}", status_code=204)
async def delete_profile(
    user_id: str,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_USERS)),
    confirmed: bool = Depends(require_confirmation),
    service: ProfileService = Depends(get_profile_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Delete a user's profile (admin only, confirm=true required)"""
    if user_id == profile.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot delete your own account")
    if not await service.delete_profile(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    await activity.record(profile.id, "delete", "profile", user_id)
    return None
