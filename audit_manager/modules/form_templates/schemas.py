from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime


class FormTemplateCreate(BaseModel):
    name: str = Field(..., min_length=1)
    template_type: str = Field(..., min_length=1)
    content: Dict[str, Any] = {}


class FormTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    template_type: Optional[str] = Field(None, min_length=1)
    content: Optional[Dict[str, Any]] = None

    @field_validator("name", "template_type", "content")
    @classmethod
    def validate_not_null(cls, v):
        if v is None:
            raise ValueError("field cannot be null")
        return v


class FormTemplateResponse(BaseModel):
    id: str
    name: str
    template_type: str
    content: Dict[str, Any] = {}
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
