from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.checklists.schemas import (
    ChecklistCreate, ChecklistItemCreate, ChecklistItemResponse,
    ChecklistProgress, ChecklistResponse
)
from typing import Any, Dict, Iterable, List, Optional
from fastapi import HTTPException
import math

CHECKLIST_JOINS = ["checklist_items", "clients"]


def completion_percentage(items: Iterable[Any]) -> int:
    """round(100 * checked / total), half rounded up; 0 for an empty checklist"""
    items = list(items)
    total = len(items)
    if total == 0:
        return 0
    checked = sum(1 for item in items if _is_checked(item))
    return math.floor(100 * checked / total + 0.5)


def checklist_progress(items: Iterable[Any]) -> ChecklistProgress:
    items = list(items)
    return ChecklistProgress(
        completed=sum(1 for item in items if _is_checked(item)),
        total=len(items),
        percentage=completion_percentage(items),
    )


def _is_checked(item) -> bool:
    if isinstance(item, dict):
        return bool(item.get("is_checked"))
    return bool(getattr(item, "is_checked", False))


def _to_checklist(row: Dict[str, Any]) -> ChecklistResponse:
    data = dict(row)
    raw_items = data.pop("checklist_items", None) or []
    items = sorted(
        (ChecklistItemResponse(**item) for item in raw_items),
        key=lambda item: item.order_index,
    )
    return ChecklistResponse(**data, items=items, progress=checklist_progress(items))


class ChecklistService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.checklists = TableRepository(supabase, "checklists")
        self.items = TableRepository(supabase, "checklist_items")

    async def list_checklists(self, client_id: Optional[str] = None) -> List[ChecklistResponse]:
        """Checklists with items and client embedded, newest first"""
        filters = {"client_id": client_id} if client_id else None
        rows = await self.checklists.query(filters=filters, joins=CHECKLIST_JOINS, order="created_at", desc=True)
        return [_to_checklist(row) for row in rows]

    async def get_checklist_by_id(self, checklist_id: str) -> ChecklistResponse:
        row = await self.checklists.get(checklist_id, joins=CHECKLIST_JOINS)
        if not row:
            raise HTTPException(status_code=404, detail="Checklist not found")
        return _to_checklist(row)

    async def create_checklist(self, checklist_data: ChecklistCreate, user_id: str) -> ChecklistResponse:
        row = await self.checklists.insert({
            "title": checklist_data.title,
            "client_id": checklist_data.client_id or None,
            "created_by": user_id,
        })
        return _to_checklist(row)

    async def add_item(self, checklist_id: str, item_data: ChecklistItemCreate) -> ChecklistItemResponse:
        """Append after the current last item"""
        checklist = await self.get_checklist_by_id(checklist_id)
        max_order = max([0] + [item.order_index for item in checklist.items])
        row = await self.items.insert({
            "checklist_id": checklist_id,
            "description": item_data.description.strip(),
            "is_checked": False,
            "order_index": max_order + 1,
        })
        await self._touch(checklist_id)
        return ChecklistItemResponse(**row)

    async def toggle_item(self, item_id: str, user_id: str) -> ChecklistItemResponse:
        """Flip is_checked; checking stamps who and when, unchecking clears both"""
        current = await self.items.get(item_id)
        if not current:
            raise HTTPException(status_code=404, detail="Checklist item not found")
        now_checked = not current.get("is_checked", False)
        row = await self.items.update(item_id, {
            "is_checked": now_checked,
            "checked_by": user_id if now_checked else None,
            "checked_at": utc_now() if now_checked else None,
        })
        if not row:
            raise HTTPException(status_code=404, detail="Checklist item not found")
        await self._touch(row["checklist_id"])
        return ChecklistItemResponse(**row)

    async def delete_item(self, item_id: str) -> bool:
        return await self.items.delete(item_id)

    async def delete_checklist(self, checklist_id: str) -> bool:
        """Items are not removed with their checklist"""
        return await self.checklists.delete(checklist_id)

    async def _touch(self, checklist_id: str) -> None:
        await self.checklists.update(checklist_id, {"updated_at": utc_now()})
