"""
Seed Demo Data Script
Creates the demo admin account and the fixed demo dataset, then signs in
as the demo user to check that the account resolves to an admin profile.
Safe to run repeatedly.
"""

import asyncio
import logging
import sys

from audit_manager.config import settings
from audit_manager.core.errors import AppError
from audit_manager.database.supabase_client import SupabaseClient, get_admin_supabase
from audit_manager.modules.auth.session import AuthState, SessionManager
from audit_manager.modules.demo.service import DemoSeedService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def check_demo_login(manager: SessionManager) -> bool:
    """Sign in with the demo credentials and report the resulting profile"""
    await manager.initialize()
    try:
        await manager.sign_in(settings.demo_user_email, settings.demo_user_password)
    except AppError as e:
        logger.error(f"Demo sign-in failed: {e.message}")
        return False

    snapshot = manager.snapshot
    if snapshot.state != AuthState.AUTHENTICATED or snapshot.profile is None:
        logger.error("Demo sign-in succeeded but no profile was found")
        return False
    logger.info(f"Signed in as {snapshot.profile.email} with role {snapshot.role.value}")
    await manager.sign_out()
    return True


async def main() -> int:
    admin_client = get_admin_supabase()
    if admin_client is None:
        logger.error("SUPABASE_SERVICE_ROLE_KEY is required to seed demo data")
        return 1

    user = await DemoSeedService(admin_client).seed()
    logger.info(f"Demo data seeded; log in as {user['email']}")

    manager = SessionManager(SupabaseClient.create_isolated_client(), admin_client)
    try:
        ok = await check_demo_login(manager)
    finally:
        await manager.close()
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
