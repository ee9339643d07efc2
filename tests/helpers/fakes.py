from typing import Dict, Iterable, Optional
from unittest.mock import AsyncMock, Mock

from extrovertidos.core.backend import BackendClient, QueryResult
from extrovertidos.core.constants import TableEnum
from extrovertidos.core.exceptions import AuthorizationError
from extrovertidos.services.notification import NotificationService
from extrovertidos.services.role import RoleService


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_backend() -> Mock:
    backend = Mock(spec=BackendClient)
    for name in ("count", "select", "get", "insert", "update", "update_where", "update_if", "delete"):
        setattr(backend, name, AsyncMock(return_value=QueryResult(data=None)))
    return backend


def stats_counts(values: Dict[str, int], failing: Iterable[str] = (), raising: Iterable[str] = ()):
    """side_effect for ``backend.count`` keyed by event status, or "users" for profiles."""
    failing, raising = set(failing), set(raising)

    async def _count(table, filters: Optional[dict] = None):
        key = "users" if table == TableEnum.PROFILES else filters["status"]
        if key in raising:
            raise RuntimeError(f"{key} query exploded")
        if key in failing:
            return QueryResult(error=RuntimeError(f"{key} query failed"))
        return QueryResult(count=values[key])
    return _count


def make_roles(allowed: bool = True) -> Mock:
    roles = Mock(spec=RoleService)
    side_effect = None if allowed else AuthorizationError()
    roles.require_moderator = AsyncMock(side_effect=side_effect)
    roles.require_admin = AsyncMock(side_effect=side_effect)
    return roles


def make_notifications() -> Mock:
    notifications = Mock(spec=NotificationService)
    notifications.notify = AsyncMock(return_value=None)
    return notifications
