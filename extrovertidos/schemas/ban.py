from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

class BanCreate(BaseModel):
    reason: str

class BanInfo(BaseModel):
    id: str
    user_id: str
    ban_reason: str
    banned_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserBan(BanInfo):
    banned_by: str
    is_active: bool
    unbanned_by: Optional[str] = None
    unbanned_at: Optional[datetime] = None

class BanStatus(BaseModel):
    is_banned: bool = False
    reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    ban_id: Optional[str] = None
