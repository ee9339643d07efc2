from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from extrovertidos.core.constants import RoleEnum
from extrovertidos.core.database import Base
from extrovertidos.models._ids import new_id

class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, index=True)
    email = Column(String, unique=True, index=True, nullable=True)
    avatar_url = Column(String, nullable=True)
    role = Column(String, nullable=False, default=RoleEnum.USER.value)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
