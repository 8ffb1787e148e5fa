"""
Core dependencies for route protection and role checks
"""

from fastapi import Depends, HTTPException, Query, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from audit_manager.config.permissions_config import Action, visible_action
from audit_manager.core.errors import PermissionDenied
from audit_manager.database.supabase_client import (
    ClientFactory, get_admin_supabase, get_client_factory, get_supabase
)
from audit_manager.modules.auth.service import AuthService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.modules.profiles.service import ProfileService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    admin_client: Optional[Client] = Depends(get_admin_supabase),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> AuthService:
    return AuthService(supabase, admin_client, client_factory=client_factory)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def get_request_supabase(
    credentials: HTTPAuthorizationCredentials = Security(security),
    user_data: dict = Depends(get_current_user_id),
    client_factory: ClientFactory = Depends(get_client_factory),
) -> Client:
    """Client for this request only, sending the caller's own token so row-level security applies"""
    return client_factory(credentials.credentials)


async def get_current_profile(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_request_supabase)
) -> ProfileResponse:
    """Profile row of the caller; identities without a usable one get no access"""
    profile = await ProfileService(supabase).get_profile(user_data["id"])
    if profile is None:
        logger.warning(f"Authenticated identity {user_data['id']} has no usable profile")
        raise PermissionDenied("No profile exists for this account")
    return profile


def require_action(action: Action):
    """Factory function to create a role check dependency for one action"""
    async def check_action(profile: ProfileResponse = Depends(get_current_profile)) -> ProfileResponse:
        if not visible_action(profile.role, action):
            raise PermissionDenied(f"Insufficient permissions. Required: {action.value}")
        return profile
    return check_action


def require_confirmation(confirm: bool = Query(False, description="Must be true for destructive actions")) -> bool:
    """Destructive endpoints issue no store call unless the caller confirmed"""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Confirmation required: repeat the request with confirm=true"
        )
    return True
