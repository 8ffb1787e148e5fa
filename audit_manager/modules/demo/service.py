from supabase import Client
from audit_manager.config import settings
from audit_manager.core.enums import Role
from audit_manager.database.repository import TableRepository, error_message
from audit_manager.modules.demo.seed_data import SEED_TABLES, FALLBACK_USER_ID
from typing import Dict, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)


class DemoSeedService:
    """Seeds the demo admin and a fixed dataset with the service-role client"""

    def __init__(self, admin_client: Client):
        self.supabase = admin_client

    async def seed(self) -> Dict[str, str]:
        user_id = await self._ensure_demo_user() or FALLBACK_USER_ID

        for table, rows_for in SEED_TABLES:
            rows = rows_for(user_id)
            await TableRepository(self.supabase, table).upsert(rows, on_conflict="id")
            logger.info(f"Seeded {len(rows)} row(s) into {table}")

        return {"email": settings.demo_user_email, "password": settings.demo_user_password}

    async def _ensure_demo_user(self) -> Optional[str]:
        """Create the demo identity and its admin profile; failures here are logged only"""
        try:
            response = await asyncio.to_thread(
                self.supabase.auth.admin.create_user,
                {
                    "email": settings.demo_user_email,
                    "password": settings.demo_user_password,
                    "email_confirm": True,
                },
            )
            user = response.user if response else None
        except Exception as e:
            logger.error(f"Demo user creation failed: {error_message(e)}")
            user = None

        if user is None:
            return await self._existing_demo_user_id()

        try:
            await TableRepository(self.supabase, "profiles").upsert([{
                "id": user.id,
                "email": settings.demo_user_email,
                "full_name": settings.demo_user_full_name,
                "role": Role.ADMIN.value,
            }], on_conflict="id")
        except Exception as e:
            logger.error(f"Demo profile upsert failed: {error_message(e)}")
        return user.id

    async def _existing_demo_user_id(self) -> Optional[str]:
        # A second run finds the identity already registered
        try:
            rows = await TableRepository(self.supabase, "profiles").query(
                filters={"email": settings.demo_user_email}, order=None, limit=1
            )
        except Exception as e:
            logger.error(f"Demo profile lookup failed: {error_message(e)}")
            return None
        return rows[0]["id"] if rows else None
