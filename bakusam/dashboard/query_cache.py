import logging

logger = logging.getLogger(__name__)

class QueryCache:
    """Keyed store of fetched API data.

    Keys are tuples such as ``("orders",)`` or ``("drivers", "available")``.
    Invalidating a prefix drops every key that starts with it, so
    ``invalidate(("orders",))`` also drops ``("orders", "pending")``.
    """

    def __init__(self):
        self._entries = {}

    @staticmethod
    def _key(key) -> tuple:
        return key if isinstance(key, tuple) else (key,)

    def get(self, key, default=None):
        return self._entries.get(self._key(key), default)

    def set(self, key, data):
        self._entries[self._key(key)] = data

    def __contains__(self, key) -> bool:
        return self._key(key) in self._entries

    async def fetch(self, key, loader):
        """Return the cached data for ``key``, awaiting ``loader()`` on a miss."""
        key = self._key(key)
        if key in self._entries:
            return self._entries[key]
        data = await loader()
        self._entries[key] = data
        logger.debug(f"Cached {key}")
        return data

    async def refresh(self, key, loader):
        key = self._key(key)
        data = await loader()
        self._entries[key] = data
        return data

    def invalidate(self, prefix) -> int:
        prefix = self._key(prefix)
        stale = [key for key in self._entries if key[:len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cache entr{'y' if len(stale) == 1 else 'ies'} for {prefix}")
        return len(stale)

    def clear(self):
        self._entries.clear()
