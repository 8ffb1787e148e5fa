from fastapi import APIRouter, Depends, HTTPException, status
from audit_manager.modules.documents.schemas import (
    FolderCreate, FolderResponse, FolderTreeResponse, DocumentCreate, DocumentResponse
)
from audit_manager.modules.documents.service import DocumentService
from audit_manager.modules.activity.routes import get_activity_service
from audit_manager.modules.activity.service import ActivityLogService
from audit_manager.modules.profiles.schemas import ProfileResponse
from audit_manager.config.permissions_config import Action
from audit_manager.core.dependencies import get_request_supabase, require_action, require_confirmation
from supabase import Client
from typing import List

router = APIRouter(tags=["documents"])


def get_document_service(supabase: Client = Depends(get_request_supabase)) -> DocumentService:
    return DocumentService(supabase)


@router.get("/clients/{client_id}/folders", response_model=FolderTreeResponse)
async def get_client_folders(
    client_id: str,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    service: DocumentService = Depends(get_document_service)
):
    """Folders of a client grouped by type"""
    return await service.get_folder_tree(client_id)


@router.post("/folders", response_model=FolderResponse, status_code=201)
async def create_folder(
    folder_data: FolderCreate,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    service: DocumentService = Depends(get_document_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    folder = await service.create_folder(folder_data, profile.id)
    await activity.record(profile.id, "create", "folder", folder.id, {"name": folder.name})
    return folder


@router.delete("/folders/{folder_id}", status_code=204)
async def delete_folder(
    folder_id: str,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    confirmed: bool = Depends(require_confirmation),
    service: DocumentService = Depends(get_document_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    if not await service.delete_folder(folder_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Folder not found")
    await activity.record(profile.id, "delete", "folder", folder_id)
    return None


@router.get("/folders/{folder_id}/documents", response_model=List[DocumentResponse])
async def list_documents(
    folder_id: str,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    service: DocumentService = Depends(get_document_service)
):
    return await service.list_documents(folder_id)


@router.post("/documents", response_model=DocumentResponse, status_code=201)
async def register_document(
    document_data: DocumentCreate,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    service: DocumentService = Depends(get_document_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    """Register metadata for a stored file (no upload happens here)"""
    document = await service.register_document(document_data, profile.id)
    await activity.record(profile.id, "create", "document", document.id, {"name": document.name})
    return document


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    profile: ProfileResponse = Depends(require_action(Action.DOCUMENTS)),
    confirmed: bool = Depends(require_confirmation),
    service: DocumentService = Depends(get_document_service),
    activity: ActivityLogService = Depends(get_activity_service)
):
    if not await service.delete_document(document_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    await activity.record(profile.id, "delete", "document", document_id)
    return None
