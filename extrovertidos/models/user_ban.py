from sqlalchemy import Boolean, Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from extrovertidos.core.database import Base
from extrovertidos.models._ids import new_id

class UserBan(Base):
    __tablename__ = "user_bans"

    id = Column(String, primary_key=True, index=True, default=new_id)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    banned_by = Column(String, ForeignKey("profiles.id"), nullable=False)
    ban_reason = Column(Text, nullable=False)
    is_active = Column(Boolean, default=True, index=True)
    banned_at = Column(DateTime(timezone=True), server_default=func.now())
    unbanned_by = Column(String, ForeignKey("profiles.id"), nullable=True)
    unbanned_at = Column(DateTime(timezone=True), nullable=True)
