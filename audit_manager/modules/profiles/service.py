import logging
from pydantic import ValidationError
from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.profiles.schemas import ProfileResponse, ProfileUpdate
from audit_manager.core.enums import Role
from typing import List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


def _to_profile(row: dict) -> Optional[ProfileResponse]:
    """Rows whose role is outside the known set are treated as missing"""
    try:
        return ProfileResponse(**row)
    except ValidationError as e:
        logger.warning(f"Ignoring unusable profile row {row.get('id')}: {e.errors()[0].get('msg')}")
        return None


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = TableRepository(supabase, "profiles")

    async def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Profile for an identity id, or None when no usable row exists"""
        row = await self.profiles.get(user_id)
        if not row:
            return None
        return _to_profile(row)

    async def get_profile_by_id(self, user_id: str) -> ProfileResponse:
        profile = await self.get_profile(user_id)
        if not profile:
            raise HTTPException(status_code=404, detail="User not found")
        return profile

    async def list_profiles(self) -> List[ProfileResponse]:
        rows = await self.profiles.query(order="created_at", desc=True)
        profiles = [_to_profile(row) for row in rows]
        return [profile for profile in profiles if profile is not None]

    async def create_profile(self, user_id: str, email: str, full_name: str, role: Role = Role.TEAM) -> ProfileResponse:
        """Insert the profile row for a freshly created identity"""
        row = await self.profiles.insert({
            "id": user_id,
            "email": email,
            "full_name": full_name,
            "role": Role(role).value,
        })
        return ProfileResponse(**row)

    async def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Owner edit: only full_name is writable"""
        row = await self.profiles.update(user_id, {
            "full_name": profile_data.full_name,
            "updated_at": utc_now(),
        })
        if not row:
            raise HTTPException(status_code=404, detail="User not found")
        return ProfileResponse(**row)

    async def update_role(self, user_id: str, role: Role) -> ProfileResponse:
        row = await self.profiles.update(user_id, {
            "role": Role(role).value,
            "updated_at": utc_now(),
        })
        if not row:
            raise HTTPException(status_code=404, detail="User not found")
        return ProfileResponse(**row)

    async def delete_profile(self, user_id: str) -> bool:
        """Delete the profile row; the auth identity is left in place"""
        return await self.profiles.delete(user_id)
