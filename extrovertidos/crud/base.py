from datetime import datetime
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from extrovertidos.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)

class CRUDBase(Generic[ModelType]):
    def __init__(self, model: Type[ModelType]):
        self.model = model

    def _filtered(self, db: Session, filters: Optional[Dict[str, Any]] = None):
        query = db.query(self.model)
        for field, value in (filters or {}).items():
            query = query.filter(getattr(self.model, field) == value)
        return query

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def count(self, db: Session, *, filters: Optional[Dict[str, Any]] = None) -> int:
        return self._filtered(db, filters).count()

    def get_multi(
        self,
        db: Session,
        *,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        skip: int = 0,
        limit: Optional[int] = None,
        created_since: Optional[datetime] = None,
        created_until: Optional[datetime] = None,
    ) -> List[ModelType]:
        query = self._filtered(db, filters)
        if created_since is not None:
            query = query.filter(self.model.created_at >= created_since)
        if created_until is not None:
            query = query.filter(self.model.created_at <= created_until)
        if order_by:
            column = getattr(self.model, order_by)
            query = query.order_by(column.desc() if descending else column.asc())
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, db: Session, *, obj_in: Union[BaseModel, Dict[str, Any]]) -> ModelType:
        obj_in_data = obj_in if isinstance(obj_in, dict) else jsonable_encoder(obj_in)
        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update(
        self, db: Session, *, db_obj: ModelType, obj_in: Union[BaseModel, Dict[str, Any]]
    ) -> ModelType:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_where(self, db: Session, *, filters: Dict[str, Any], values: Dict[str, Any]) -> List[ModelType]:
        objs = self._filtered(db, filters).all()
        for obj in objs:
            for field, value in values.items():
                setattr(obj, field, value)
            db.add(obj)
        db.commit()
        for obj in objs:
            db.refresh(obj)
        return objs

    def update_if(
        self, db: Session, *, id: Any, expected: Dict[str, Any], values: Dict[str, Any]
    ) -> Optional[ModelType]:
        """Single UPDATE ... WHERE id = :id AND <expected>; None when no row matched."""
        updated = self._filtered(db, {"id": id, **expected}).update(values, synchronize_session=False)
        db.commit()
        if not updated:
            return None
        return self.get(db, id)

    def delete_where(self, db: Session, *, filters: Dict[str, Any]) -> int:
        deleted = self._filtered(db, filters).delete(synchronize_session=False)
        db.commit()
        return deleted

    @staticmethod
    def to_dict(obj: ModelType) -> Dict[str, Any]:
        return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
