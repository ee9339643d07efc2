import logging
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Set

from extrovertidos.core.cache_config import NAMESPACE_SEPARATOR, build_ttl_table
from extrovertidos.core.config import settings

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    key: str
    value: Any
    stored_at: float


class TTLCache:
    """In-memory key/value store with one TTL per key namespace.

    The namespace of a key is the text before its first separator
    ("adminStats_42" -> "adminStats"); namespaces missing from the TTL
    table use ``default_ttl``. Expired entries read as misses and stay in
    the store until they are overwritten, invalidated or purged.

    Operations never await, so the store needs no lock on a single event
    loop.
    """

    def __init__(
        self,
        ttl_table: Optional[Mapping[str, float]] = None,
        default_ttl: float = 30,
        separator: str = NAMESPACE_SEPARATOR,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl_table: Dict[str, float] = dict(ttl_table or {})
        self._default_ttl = default_ttl
        self._separator = separator
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._namespaces: Dict[str, Set[str]] = defaultdict(set)
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_settings(cls, clock: Callable[[], float] = time.monotonic) -> "TTLCache":
        return cls(build_ttl_table(), default_ttl=settings.CACHE_DEFAULT_TTL, clock=clock)

    def namespace_of(self, key: str) -> str:
        return key.split(self._separator, 1)[0]

    def ttl_for(self, key: str) -> float:
        return self._ttl_table.get(self.namespace_of(key), self._default_ttl)

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.stored_at < self.ttl_for(entry.key)

    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under ``key`` or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry):
            self._hits += 1
            logger.debug(f"Cache HIT for key: {key}")
            return entry.value
        self._misses += 1
        logger.debug(f"Cache MISS for key: {key}")
        return None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock())
        self._namespaces[self.namespace_of(key)].add(key)

    def _remove(self, key: str) -> None:
        self._entries.pop(key, None)
        namespace = self.namespace_of(key)
        keys = self._namespaces.get(namespace)
        if keys is not None:
            keys.discard(key)
            if not keys:
                del self._namespaces[namespace]

    def invalidate(self, pattern: str) -> int:
        """Remove every entry whose key contains ``pattern``."""
        matched = [key for key in self._entries if pattern in key]
        for key in matched:
            self._remove(key)
        logger.info(f"Invalidated {len(matched)} cache entries for pattern {pattern}")
        return len(matched)

    def invalidate_namespace(self, namespace: str) -> int:
        """Remove every entry of one namespace through the namespace index."""
        keys = self._namespaces.pop(str(getattr(namespace, "value", namespace)), set())
        for key in keys:
            self._entries.pop(key, None)
        logger.info(f"Invalidated {len(keys)} cache entries in namespace {namespace}")
        return len(keys)

    def purge_expired(self) -> int:
        expired = [key for key, entry in self._entries.items() if not self._is_fresh(entry)]
        for key in expired:
            self._remove(key)
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
        self._namespaces.clear()

    def stats(self) -> Dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "backend": "Memory",
            "size": len(self._entries),
            "namespaces": {ns: len(keys) for ns, keys in self._namespaces.items()},
            "ttl_table": dict(self._ttl_table),
            "default_ttl": self._default_ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_ratio": round(self._hits / max(lookups, 1), 4),
        }

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._is_fresh(entry)
