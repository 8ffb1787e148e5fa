from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class ActivityLogResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    details: Dict[str, Any] = {}
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
