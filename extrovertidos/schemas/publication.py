from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from extrovertidos.core.constants import PublicationStatusEnum

class RejectionRequest(BaseModel):
    reason: str = ""

class Event(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    event_date: Optional[datetime] = None
    city: Optional[str] = None
    province: Optional[str] = None
    category_id: Optional[str] = None
    status: PublicationStatusEnum
    rejection_reason: Optional[str] = None
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class Business(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    category_id: Optional[str] = None
    status: PublicationStatusEnum
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[str] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
