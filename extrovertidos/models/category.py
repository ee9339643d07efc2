from sqlalchemy import Boolean, Column, Integer, String

from extrovertidos.core.database import Base
from extrovertidos.models._ids import new_id

class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False, unique=True)
    icon = Column(String, nullable=True)
    color = Column(String, nullable=True)
    sort_order = Column(Integer, default=0)
    active = Column(Boolean(), default=True)
