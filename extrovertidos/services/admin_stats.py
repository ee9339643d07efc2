import asyncio
import logging

from extrovertidos.core.backend import BackendClient, QueryResult
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import CACHE_KEYS
from extrovertidos.core.constants import PublicationStatusEnum, TableEnum
from extrovertidos.schemas.stats import AdminStats, EventCounts, MetricResult, UserCounts
from extrovertidos.services.role import RoleService

logger = logging.getLogger(__name__)

class AdminStatsService:
    """Moderation dashboard counters, cached per admin for the adminStats TTL."""

    def __init__(self, backend: BackendClient, cache: TTLCache, roles: RoleService):
        self.backend = backend
        self.cache = cache
        self.roles = roles

    @staticmethod
    def _metric(name: str, result) -> MetricResult:
        if isinstance(result, BaseException):
            logger.warning(f"Stats query {name} raised: {result}")
            return MetricResult.unavailable()
        if not isinstance(result, QueryResult) or result.error is not None:
            logger.warning(f"Stats query {name} failed: {getattr(result, 'error', result)}")
            return MetricResult.unavailable()
        return MetricResult(value=result.count or 0)

    async def get_admin_stats(self, admin_user_id: str) -> AdminStats:
        await self.roles.require_moderator(admin_user_id, "You do not have permission to view statistics.")

        cache_key = CACHE_KEYS["admin_stats"].format(admin_user_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached.model_copy(deep=True)

        pending, published, rejected, users = await asyncio.gather(
            self.backend.count(TableEnum.EVENTS, {"status": PublicationStatusEnum.PENDING.value}),
            self.backend.count(TableEnum.EVENTS, {"status": PublicationStatusEnum.PUBLISHED.value}),
            self.backend.count(TableEnum.EVENTS, {"status": PublicationStatusEnum.REJECTED.value}),
            self.backend.count(TableEnum.PROFILES),
            return_exceptions=True,
        )

        stats = AdminStats(
            events=EventCounts(
                pending=self._metric("events.pending", pending),
                published=self._metric("events.published", published),
                rejected=self._metric("events.rejected", rejected),
            ),
            users=UserCounts(total=self._metric("users.total", users)),
        )

        if stats.degraded:
            logger.warning(f"Returning degraded admin stats, unavailable: {', '.join(stats.unavailable_metrics)}")
        else:
            self.cache.set(cache_key, stats)
            return stats.model_copy(deep=True)
        return stats
