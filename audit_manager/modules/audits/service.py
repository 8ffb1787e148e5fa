from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.audits.schemas import AuditCreate, AuditResponse
from audit_manager.core.enums import AuditStatus, check_transition
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

AUDIT_JOINS = ["clients", "tasks", "form_templates"]


class AuditService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.audits = TableRepository(supabase, "audits")

    async def create_audit(self, audit_data: AuditCreate, user_id: str) -> AuditResponse:
        """Start a draft audit with empty form data"""
        row = await self.audits.insert({
            "client_id": audit_data.client_id or None,
            "task_id": audit_data.task_id or None,
            "form_template_id": audit_data.form_template_id or None,
            "status": AuditStatus.DRAFT.value,
            "form_data": {},
            "created_by": user_id,
        })
        return AuditResponse(**row)

    async def get_audit_by_id(self, audit_id: str) -> AuditResponse:
        row = await self.audits.get(audit_id, joins=AUDIT_JOINS)
        if not row:
            raise HTTPException(status_code=404, detail="Audit not found")
        return AuditResponse(**row)

    async def list_audits(
        self,
        status: Optional[AuditStatus] = None,
        client_id: Optional[str] = None,
    ) -> List[AuditResponse]:
        """Audits with client, task and template embedded in one round trip"""
        filters = {}
        if status:
            filters["status"] = status.value
        if client_id:
            filters["client_id"] = client_id
        rows = await self.audits.query(filters=filters, joins=AUDIT_JOINS, order="created_at", desc=True)
        return [AuditResponse(**row) for row in rows]

    async def update_form_data(self, audit_id: str, form_data: Dict[str, Any]) -> AuditResponse:
        row = await self.audits.update(audit_id, {
            "form_data": form_data,
            "updated_at": utc_now(),
        })
        if not row:
            raise HTTPException(status_code=404, detail="Audit not found")
        return AuditResponse(**row)

    async def update_status(self, audit_id: str, new_status: AuditStatus) -> AuditResponse:
        current = await self.audits.get(audit_id)
        if not current:
            raise HTTPException(status_code=404, detail="Audit not found")
        check_transition(current["status"], new_status)
        row = await self.audits.update(audit_id, {
            "status": new_status.value,
            "updated_at": utc_now(),
        })
        if not row:
            raise HTTPException(status_code=404, detail="Audit not found")
        return AuditResponse(**row)

    async def delete_audit(self, audit_id: str) -> bool:
        return await self.audits.delete(audit_id)
