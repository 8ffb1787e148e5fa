from fastapi import APIRouter, Depends, Security
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from audit_manager.core.dependencies import security
from audit_manager.core.errors import ConfigError
from audit_manager.database.repository import error_message
from audit_manager.database.supabase_client import get_admin_supabase
from audit_manager.modules.demo.service import DemoSeedService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["demo"])


@router.post("/demo-seed")
async def demo_seed(
    credentials: HTTPAuthorizationCredentials = Security(security),
    admin_client: Optional[Client] = Depends(get_admin_supabase)
):
    """
    Create the demo admin account and the fixed demo dataset.
    Safe to call repeatedly: every row is upserted by a fixed id.
    """
    try:
        if admin_client is None:
            raise ConfigError("Missing environment variables: SUPABASE_SERVICE_ROLE_KEY")
        user = await DemoSeedService(admin_client).seed()
    except Exception as e:
        logger.error(f"Demo seed failed: {e}")
        return JSONResponse(status_code=500, content={"error": error_message(e)})

    return {
        "success": True,
        "message": "Demo user and data created successfully",
        "user": user,
    }
