from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from extrovertidos.core.constants import RoleEnum
from extrovertidos.schemas.ban import BanInfo

class ProfileSummary(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: RoleEnum = RoleEnum.USER
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ProfileWithBanStatus(ProfileSummary):
    is_banned: bool = False
    ban_info: Optional[BanInfo] = None

class RoleUpdate(BaseModel):
    role: RoleEnum
