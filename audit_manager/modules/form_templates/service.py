from supabase import Client
from audit_manager.database.repository import TableRepository, utc_now
from audit_manager.modules.form_templates.schemas import (
    FormTemplateCreate, FormTemplateUpdate, FormTemplateResponse
)
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class FormTemplateService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.templates = TableRepository(supabase, "form_templates")

    async def create_template(self, template_data: FormTemplateCreate, user_id: str) -> FormTemplateResponse:
        """Create a new form template"""
        row = await self.templates.insert({
            "name": template_data.name,
            "template_type": template_data.template_type,
            "content": template_data.content,
            "created_by": user_id,
        })
        return FormTemplateResponse(**row)

    async def get_template_by_id(self, template_id: str) -> FormTemplateResponse:
        row = await self.templates.get(template_id)
        if not row:
            raise HTTPException(status_code=404, detail="Template not found")
        return FormTemplateResponse(**row)

    async def list_templates(self, template_type: Optional[str] = None) -> List[FormTemplateResponse]:
        filters = {"template_type": template_type} if template_type else None
        rows = await self.templates.query(filters=filters, order="created_at", desc=True)
        return [FormTemplateResponse(**row) for row in rows]

    async def update_template(self, template_id: str, template_data: FormTemplateUpdate) -> FormTemplateResponse:
        update_data = {}
        if template_data.name:
            update_data["name"] = template_data.name
        if template_data.template_type:
            update_data["template_type"] = template_data.template_type
        if template_data.content is not None:
            update_data["content"] = template_data.content

        if not update_data:
            return await self.get_template_by_id(template_id)

        update_data["updated_at"] = utc_now()
        row = await self.templates.update(template_id, update_data)
        if not row:
            raise HTTPException(status_code=404, detail="Template not found")
        return FormTemplateResponse(**row)

    async def delete_template(self, template_id: str) -> bool:
        """Audits keep their form_template_id; no cascade"""
        deleted = await self.templates.delete(template_id)
        if deleted:
            logger.info(f"Deleted form template {template_id}")
        return deleted
