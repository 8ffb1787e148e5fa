from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime

from audit_manager.core.enums import FolderType
from audit_manager.modules.clients.schemas import ClientResponse


class FolderCreate(BaseModel):
    client_id: str
    name: str = Field(..., min_length=1)
    folder_type: FolderType = FolderType.WORKING_PAPERS
    parent_id: Optional[str] = None


class FolderResponse(BaseModel):
    id: str
    client_id: Optional[str] = None
    name: str
    folder_type: FolderType
    parent_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    clients: Optional[ClientResponse] = None

    class Config:
        from_attributes = True


class FolderTreeResponse(BaseModel):
    """Folders of one client grouped by folder type"""
    client_id: str
    folders: Dict[FolderType, List[FolderResponse]]


class DocumentCreate(BaseModel):
    folder_id: str
    name: str = Field(..., min_length=1)
    file_path: str = Field(..., min_length=1)
    file_type: str
    file_size: int = Field(..., ge=0)


class DocumentResponse(BaseModel):
    id: str
    folder_id: Optional[str] = None
    client_id: Optional[str] = None
    name: str
    file_path: str
    file_type: str
    file_size: int
    uploaded_by: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
