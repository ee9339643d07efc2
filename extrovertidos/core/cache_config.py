"""Cache namespaces, TTL settings and key templates"""
from enum import Enum
from typing import Dict

from extrovertidos.core.config import settings


class CacheNamespace(str, Enum):
    ADMIN_STATS = "adminStats"
    CATEGORIES = "categories"
    CHART_DATA = "chartData"

# Keys are "<namespace><separator><discriminator>"
NAMESPACE_SEPARATOR = "_"

def build_ttl_table() -> Dict[str, float]:
    """TTL (Time To Live) per namespace in seconds."""
    return {
        # Dashboard counters - moderation changes them often
        CacheNamespace.ADMIN_STATS.value: settings.CACHE_TTL_ADMIN_STATS,    # 30 seconds
        # Categories - very stable
        CacheNamespace.CATEGORIES.value: settings.CACHE_TTL_CATEGORIES,      # 5 minutes
        # Per-day chart series
        CacheNamespace.CHART_DATA.value: settings.CACHE_TTL_CHART_DATA,      # 1 minute
    }

# Cache key patterns
CACHE_KEYS = {
    "admin_stats": "adminStats_{}",
    "categories": "categories",
    "events_per_day": "chartData_events",
    "users_per_day": "chartData_users",
}

# Namespaces to clear when data changes
INVALIDATION_PATTERNS = {
    "publication_moderated": [CacheNamespace.ADMIN_STATS],
    "category_update": [CacheNamespace.CATEGORIES],
}
