from fastapi import APIRouter, Depends, Security
from fastapi.security import HTTPAuthorizationCredentials
from audit_manager.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, MeResponse
)
from audit_manager.modules.auth.service import AuthService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.core.dependencies import get_auth_service, get_current_user_id, get_current_profile, security
from audit_manager.core.enums import Role
from audit_manager.config.permissions_config import ROLE_LABELS, visible_menu
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new team member (identity + profile)"""
    response = await service.sign_up(
        register_data.email,
        register_data.password,
        register_data.full_name,
        Role.TEAM,
    )
    return RegisterResponse(
        user_id=response.user.id,
        email=response.user.email or register_data.email,
        role=Role.TEAM,
        message="User registered successfully"
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token"""
    response = await service.sign_in(login_data.email, login_data.password)
    return TokenResponse(
        access_token=response.session.access_token,
        refresh_token=getattr(response.session, "refresh_token", None),
        user_id=response.user.id,
        email=response.user.email or login_data.email
    )


@router.post("/logout", status_code=200)
async def logout(
    credentials: HTTPAuthorizationCredentials = Security(security),
    current_user: Dict = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service)
):
    """Logout: revokes the bearer token. Failures are logged and not reported"""
    await service.revoke(credentials.credentials)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Dict = Depends(get_current_user_id),
    profile: ProfileResponse = Depends(get_current_profile),
):
    """Current identity with its profile and the menu its role may see"""
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        profile=profile,
        role_label=ROLE_LABELS[profile.role],
        menu=visible_menu(profile.role),
    )
