from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from audit_manager.core.enums import Role
from audit_manager.modules.profiles.schemas import ProfileResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: str


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: Role = Role.TEAM
    message: str


class MenuItem(BaseModel):
    id: str
    label: str


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    profile: ProfileResponse
    role_label: str
    menu: List[MenuItem]
