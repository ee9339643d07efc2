import logging
from datetime import datetime
from typing import Any, Dict

from extrovertidos.core.cache import TTLCache
from extrovertidos.core.cache_config import CacheNamespace
from extrovertidos.core.exceptions import BadRequestError
from extrovertidos.services.role import RoleService

logger = logging.getLogger(__name__)

class CacheService:
    """Admin-facing view over the process cache."""

    def __init__(self, cache: TTLCache, roles: RoleService):
        self.cache = cache
        self.roles = roles

    async def get_cache_stats(self, actor_id: str) -> Dict[str, Any]:
        await self.roles.require_admin(actor_id)
        return {**self.cache.stats(), "timestamp": datetime.utcnow().isoformat()}

    async def purge_expired(self, actor_id: str) -> int:
        await self.roles.require_admin(actor_id)
        purged = self.cache.purge_expired()
        logger.info(f"Purged {purged} expired cache entries")
        return purged

    async def invalidate_namespace(self, namespace: str, actor_id: str) -> int:
        await self.roles.require_admin(actor_id)
        try:
            namespace = CacheNamespace(namespace)
        except ValueError:
            raise BadRequestError(f"Unknown cache namespace: {namespace}")
        return self.cache.invalidate_namespace(namespace)

    async def clear(self, actor_id: str) -> None:
        await self.roles.require_admin(actor_id)
        self.cache.clear()
        logger.info(f"Cache cleared by {actor_id}")

    def health_check(self) -> bool:
        test_key = "healthCheck_probe"
        test_value = {"timestamp": datetime.utcnow().isoformat()}
        try:
            self.cache.set(test_key, test_value)
            return self.cache.get(test_key) == test_value
        finally:
            self.cache.invalidate_namespace("healthCheck")
