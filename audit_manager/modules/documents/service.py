from supabase import Client
from audit_manager.database.repository import TableRepository
from audit_manager.modules.documents.schemas import (
    FolderCreate, FolderResponse, FolderTreeResponse, DocumentCreate, DocumentResponse
)
from audit_manager.core.enums import FolderType
from typing import List
from fastapi import HTTPException


class DocumentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.folders = TableRepository(supabase, "folders")
        self.documents = TableRepository(supabase, "documents")

    async def list_folders(self, client_id: str) -> List[FolderResponse]:
        rows = await self.folders.query(
            filters={"client_id": client_id},
            joins=["clients"],
            order="created_at",
            desc=False,
        )
        return [FolderResponse(**row) for row in rows]

    async def get_folder_tree(self, client_id: str) -> FolderTreeResponse:
        """Every folder type is present, empty or not"""
        grouped = {folder_type: [] for folder_type in FolderType}
        for folder in await self.list_folders(client_id):
            grouped[folder.folder_type].append(folder)
        return FolderTreeResponse(client_id=client_id, folders=grouped)

    async def get_folder_by_id(self, folder_id: str) -> FolderResponse:
        row = await self.folders.get(folder_id)
        if not row:
            raise HTTPException(status_code=404, detail="Folder not found")
        return FolderResponse(**row)

    async def create_folder(self, folder_data: FolderCreate, user_id: str) -> FolderResponse:
        if folder_data.parent_id:
            await self.get_folder_by_id(folder_data.parent_id)
        row = await self.folders.insert({
            "client_id": folder_data.client_id,
            "name": folder_data.name,
            "folder_type": folder_data.folder_type.value,
            "parent_id": folder_data.parent_id,
            "created_by": user_id,
        })
        return FolderResponse(**row)

    async def delete_folder(self, folder_id: str) -> bool:
        """Documents inside the folder are left in place"""
        return await self.folders.delete(folder_id)

    async def list_documents(self, folder_id: str) -> List[DocumentResponse]:
        rows = await self.documents.query(filters={"folder_id": folder_id}, order="created_at", desc=True)
        return [DocumentResponse(**row) for row in rows]

    async def register_document(self, document_data: DocumentCreate, user_id: str) -> DocumentResponse:
        """Record metadata for a file already placed in storage; the folder decides the client"""
        folder = await self.get_folder_by_id(document_data.folder_id)
        row = await self.documents.insert({
            "folder_id": folder.id,
            "client_id": folder.client_id,
            "name": document_data.name,
            "file_path": document_data.file_path,
            "file_type": document_data.file_type,
            "file_size": document_data.file_size,
            "uploaded_by": user_id,
        })
        return DocumentResponse(**row)

    async def delete_document(self, document_id: str) -> bool:
        return await self.documents.delete(document_id)
