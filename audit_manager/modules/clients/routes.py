from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.clients.schemas import ClientCreate, ClientUpdate, ClientResponse
from audit_manager.modules.clients.service import ClientService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, get_current_profile, require_action, require_confirmation
from supabase import Client
from typing import List, Literal

router = APIRouter(prefix="/clients", tags=["clients"])


def get_client_service(supabase: Client = Depends(get_request_supabase)) -> ClientService:
    return ClientService(supabase)


@router.get("", response_model=List[ClientResponse])
async def list_clients(
    order_by: Literal["created_at", "name"] = "created_at",
    profile: ProfileResponse = Depends(get_current_profile),
    service: ClientService = Depends(get_client_service)
):
    """List clients (any signed-in user; used by task, audit and document pickers)"""
    return await service.list_clients(order_by=order_by)


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    client_data: ClientCreate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_CLIENTS)),
    service: ClientService = Depends(get_client_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Create a new client (admin only)"""
    client = await service.create_client(client_data, profile.id)
    await activity.record(profile.id, "create", "client", client.id, {"name": client.name})
    return client


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    service: ClientService = Depends(get_client_service)
):
    return await service.get_client_by_id(client_id)


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    client_data: ClientUpdate,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_CLIENTS)),
    service: ClientService = Depends(get_client_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Update client (admin only)"""
    client = await service.update_client(client_id, client_data)
    await activity.record(profile.id, "update", "client", client_id)
    return client


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    client_id: str,
    profile: ProfileResponse = Depends(require_action(Action.MANAGE_CLIENTS)),
    confirmed: bool = Depends(require_confirmation),
    service: ClientService = Depends(get_client_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Delete client (admin only, confirm=true required). Related rows are not removed."""
    if not await service.delete_client(client_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    await activity.record(profile.id, "delete", "client", client_id)
    return None
