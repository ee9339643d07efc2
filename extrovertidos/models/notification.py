from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func

from extrovertidos.core.database import Base
from extrovertidos.models._ids import new_id

class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True, default=new_id)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    type = Column(String, nullable=False)  # e.g. 'publication_approved', 'account_banned'
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    related_event_id = Column(String, ForeignKey("events.id"), nullable=True)
    related_business_id = Column(String, ForeignKey("businesses.id"), nullable=True)
    read = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
