from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class NotificationCreate(BaseModel):
    """Payload accepted by the notification writer."""
    user_id: str
    type: str
    title: str
    message: str
    related_event_id: Optional[str] = None
    related_business_id: Optional[str] = None

class Notification(NotificationCreate):
    id: str
    read: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
