from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.form_templates.schemas import (
    FormTemplateCreate, FormTemplateUpdate, FormTemplateResponse
)
from audit_manager.modules.form_templates.service import FormTemplateService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, get_current_profile, require_action, require_confirmation
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/form-templates", tags=["form_templates"])


def get_template_service(supabase: Client = Depends(get_request_supabase)) -> FormTemplateService:
    return FormTemplateService(supabase)


@router.get("", response_model=List[FormTemplateResponse])
async def list_templates(
    template_type: Optional[str] = None,
    profile: ProfileResponse = Depends(get_current_profile),
    service: FormTemplateService = Depends(get_template_service)
):
    """List templates (any signed-in user; audits pick one when created)"""
    return await service.list_templates(template_type=template_type)


@router.post("", response_model=FormTemplateResponse, status_code=201)
async def create_template(
    template_data: FormTemplateCreate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_FORM_TEMPLATES)),
    service: FormTemplateService = Depends(get_template_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Create a form template (admin only)"""
    template = await service.create_template(template_data, profile.id)
    await activity.record(profile.id, "create", "form_template", template.id, {"name": template.name})
    return template


@router.get("/{template_id}", response_model=FormTemplateResponse)
async def get_template(
    template_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    service: FormTemplateService = Depends(get_template_service)
):
    return await service.get_template_by_id(template_id)


@router.put("/{template_id}", response_model=FormTemplateResponse)
async def update_template(
    template_id: str,
    template_data: FormTemplateUpdate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_FORM_TEMPLATES)),
    service: FormTemplateService = Depends(get_template_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Update a form template (admin only)"""
    template = await service.update_template(template_id, template_data)
    await activity.record(profile.id, "update", "form_template", template_id)
    return template


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: str,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_FORM_TEMPLATES)),
    confirmed: bool = Depends(require_confirmation),
    service: FormTemplateService = Depends(get_template_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Delete a form template (admin only, confirm=true required)"""
    if not await service.delete_template(template_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Template not found")
    await activity.record(profile.id, "delete", "form_template", template_id)
    return None
