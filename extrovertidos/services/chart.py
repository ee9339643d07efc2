import logging
from datetime import date, datetime, timedelta
from typing import List

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import CACHE_KEYS
from extrovertidos.core.constants import DAY_LABELS, TableEnum
from extrovertidos.schemas.stats import DailyCount
from extrovertidos.services.role import RoleService

logger = logging.getLogger(__name__)

CHART_DAYS = 7

def _day_of(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value)[:10]

class ChartService:
    def __init__(self, backend: BackendClient, cache: TTLCache, roles: RoleService):
        self.backend = backend
        self.cache = cache
        self.roles = roles

    async def _per_day(self, table: TableEnum, cache_key: str, actor_id: str) -> List[DailyCount]:
        await self.roles.require_moderator(actor_id, "You do not have permission to view dashboard charts.")

        cached = self.cache.get(cache_key)
        if cached is not None:
            return [point.model_copy() for point in cached]

        now = datetime.utcnow()
        today = now.date()
        start = datetime.combine(today - timedelta(days=CHART_DAYS - 1), datetime.min.time())

        result = await self.backend.select(table, columns=["created_at"], created_since=start, created_until=now)
        if result.error:
            logger.warning(f"Could not build {table.value} per day chart: {result.error}")
            return []

        days = {}
        for offset in range(CHART_DAYS - 1, -1, -1):
            day: date = today - timedelta(days=offset)
            days[day.isoformat()] = DailyCount(day=DAY_LABELS[day.weekday()], date=day.isoformat())

        for row in result.data:
            bucket = days.get(_day_of(row["created_at"]))
            if bucket is not None:
                bucket.count += 1

        series = list(days.values())
        self.cache.set(cache_key, series)
        return [point.model_copy() for point in series]

    async def get_events_per_day(self, actor_id: str) -> List[DailyCount]:
        return await self._per_day(TableEnum.EVENTS, CACHE_KEYS["events_per_day"], actor_id)

    async def get_users_per_day(self, actor_id: str) -> List[DailyCount]:
        return await self._per_day(TableEnum.PROFILES, CACHE_KEYS["users_per_day"], actor_id)
