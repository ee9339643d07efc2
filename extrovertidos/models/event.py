from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from extrovertidos.core.constants import PublicationStatusEnum
from extrovertidos.core.database import Base
from extrovertidos.models._ids import new_id

class Event(Base):
    """A published local event ("panorama")."""
    __tablename__ = "events"

    id = Column(String, primary_key=True, index=True, default=new_id)
    user_id = Column(String, ForeignKey("profiles.id"), nullable=False, index=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True)
    city = Column(String, nullable=True)
    province = Column(String, nullable=True)
    status = Column(String, nullable=False, default=PublicationStatusEnum.PENDING.value, index=True)
    rejection_reason = Column(Text, nullable=True)

    published_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
