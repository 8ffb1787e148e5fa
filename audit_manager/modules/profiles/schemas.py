from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from audit_manager.core.enums import Role


class ProfileUpdate(BaseModel):
    full_name: str = Field(..., min_length=1)


class ProfileRoleUpdate(BaseModel):
    role: Role


class ProfileCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    role: Role = Role.TEAM


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: Role
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
