from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.activity.schemas import ActivityLogResponse
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class ActivityLogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.entries = TableRepository(supabase, "activity_log")

    async def record(
        self,
        user_id: Optional[str],
        action: str,
        entity_type: str,
        entity_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Optional[ActivityLogResponse]:
        """Append an entry. Best effort: a failed write is logged and never breaks the caller."""
        try:
            row = await self.entries.insert({
                "user_id": user_id,
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "details": details or {},
                "created_at": utc_now(),
            })
            return ActivityLogResponse(**row)
        except Exception as e:
            logger.error(f"Activity log write failed ({action} {entity_type} {entity_id}): {e}")
            return None

    async def list_recent(
        self,
        entity_type: Optional[str] = None,
        user_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ActivityLogResponse]:
        filters = {}
        if entity_type:
            filters["entity_type"] = entity_type
        if user_id:
            filters["user_id"] = user_id
        rows = await self.entries.query(filters=filters, limit=limit, offset=offset)
        return [ActivityLogResponse(**row) for row in rows]
