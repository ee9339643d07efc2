"""Async gateway over the relational backend.

Every call runs its SQLAlchemy work on the thread pool with a session of
its own and comes back as a ``QueryResult`` instead of raising, so callers
decide which failures are fatal.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from extrovertidos.core.config import settings
from extrovertidos.core.constants import TableEnum
from extrovertidos.core.database import SessionLocal
from extrovertidos.crud.base import CRUDBase
from extrovertidos.crud.business import business as crud_business
from extrovertidos.crud.category import category as crud_category
from extrovertidos.crud.event import event as crud_event
from extrovertidos.crud.notification import notification as crud_notification
from extrovertidos.crud.profile import profile as crud_profile
from extrovertidos.crud.user_ban import user_ban as crud_user_ban

logger = logging.getLogger(__name__)

CRUD_REGISTRY: Dict[str, CRUDBase] = {
    TableEnum.PROFILES.value: crud_profile,
    TableEnum.EVENTS.value: crud_event,
    TableEnum.BUSINESSES.value: crud_business,
    TableEnum.CATEGORIES.value: crud_category,
    TableEnum.NOTIFICATIONS.value: crud_notification,
    TableEnum.USER_BANS.value: crud_user_ban,
}


@dataclass
class QueryResult:
    data: Any = None
    count: Optional[int] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _project(row: Dict[str, Any], columns: Optional[Iterable[str]]) -> Dict[str, Any]:
    if not columns:
        return row
    return {column: row[column] for column in columns}


class BackendClient:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        timeout: Optional[float] = None,
        registry: Optional[Mapping[str, CRUDBase]] = None,
    ):
        self.session_factory = session_factory
        self.timeout = settings.BACKEND_QUERY_TIMEOUT if timeout is None else timeout
        self._registry = dict(registry or CRUD_REGISTRY)

    def _crud_for(self, table: str) -> CRUDBase:
        name = getattr(table, "value", table)
        try:
            return self._registry[name]
        except KeyError:
            raise ValueError(f"Unknown table: {name}") from None

    async def _run(
        self,
        table: str,
        operation: str,
        work: Callable[[Session, CRUDBase], QueryResult],
        bounded: bool = True,
    ) -> QueryResult:
        """Run ``work`` on the executor. Reads are bounded by ``self.timeout``;
        writes run to completion under the connection's own timeout."""
        crud = self._crud_for(table)

        def _in_session() -> QueryResult:
            db = self.session_factory()
            try:
                return work(db, crud)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Backend {operation} error on {getattr(table, 'value', table)}: {e}")
                return QueryResult(error=e)
            finally:
                db.close()

        loop = asyncio.get_running_loop()
        if not bounded:
            return await loop.run_in_executor(None, _in_session)
        try:
            return await asyncio.wait_for(loop.run_in_executor(None, _in_session), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"Backend {operation} on {getattr(table, 'value', table)} timed out after {self.timeout}s")
            return QueryResult(error=e)

    async def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> QueryResult:
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            return QueryResult(count=crud.count(db, filters=filters))
        return await self._run(table, "count", work)

    async def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        *,
        columns: Optional[List[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        offset: int = 0,
        limit: Optional[int] = None,
        created_since: Optional[datetime] = None,
        created_until: Optional[datetime] = None,
    ) -> QueryResult:
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            rows = crud.get_multi(
                db, filters=filters, order_by=order_by, descending=descending,
                skip=offset, limit=limit, created_since=created_since, created_until=created_until,
            )
            return QueryResult(data=[_project(crud.to_dict(row), columns) for row in rows])
        return await self._run(table, "select", work)

    async def get(self, table: str, id: Any, *, columns: Optional[List[str]] = None) -> QueryResult:
        """Fetch one row by id; ``data`` is None when it does not exist."""
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            row = crud.get(db, id)
            return QueryResult(data=_project(crud.to_dict(row), columns) if row is not None else None)
        return await self._run(table, "get", work)

    async def insert(self, table: str, values: Dict[str, Any]) -> QueryResult:
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            return QueryResult(data=crud.to_dict(crud.create(db, obj_in=dict(values))))
        return await self._run(table, "insert", work, bounded=False)

    async def update(self, table: str, id: Any, values: Dict[str, Any]) -> QueryResult:
        """Update one row by id; ``data`` is None when it does not exist."""
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            row = crud.get(db, id)
            if row is None:
                return QueryResult(data=None)
            return QueryResult(data=crud.to_dict(crud.update(db, db_obj=row, obj_in=dict(values))))
        return await self._run(table, "update", work, bounded=False)

    async def update_where(self, table: str, filters: Dict[str, Any], values: Dict[str, Any]) -> QueryResult:
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            rows = crud.update_where(db, filters=filters, values=dict(values))
            return QueryResult(data=[crud.to_dict(row) for row in rows], count=len(rows))
        return await self._run(table, "update", work, bounded=False)

    async def update_if(
        self, table: str, id: Any, expected: Dict[str, Any], values: Dict[str, Any]
    ) -> QueryResult:
        """Conditional update of one row; ``count`` is 0 when the row is gone or no
        longer matches ``expected``."""
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            row = crud.update_if(db, id=id, expected=dict(expected), values=dict(values))
            if row is None:
                return QueryResult(data=None, count=0)
            return QueryResult(data=crud.to_dict(row), count=1)
        return await self._run(table, "update", work, bounded=False)

    async def delete(self, table: str, filters: Dict[str, Any]) -> QueryResult:
        def work(db: Session, crud: CRUDBase) -> QueryResult:
            return QueryResult(count=crud.delete_where(db, filters=filters))
        return await self._run(table, "delete", work, bounded=False)
