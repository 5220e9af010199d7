import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """Small key/value cache whose entries expire after a fixed time."""

    def __init__(self, default_ttl: float = 5 * 60, clock: Callable[[], float] = time.time):
        self.default_ttl = default_ttl
        self.clock = clock
        self._items: Dict[str, Tuple[Any, float]] = {}

    def set(self, key: str, value: Any, ttl: Optional[float] = None):
        ttl = self.default_ttl if ttl is None else ttl
        self._items[key] = (value, self.clock() + ttl)

    def get(self, key: str, default=None):
        item = self._items.get(key)
        if item is None:
            return default
        value, expires_at = item
        if self.clock() > expires_at:
            del self._items[key]
            return default
        return value

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str):
        self._items.pop(key, None)

    def clear(self):
        self._items.clear()

    def cleanup(self) -> int:
        now = self.clock()
        expired = [key for key, (_, expires_at) in self._items.items() if now > expires_at]
        for key in expired:
            del self._items[key]
        return len(expired)

    def __len__(self):
        return len(self._items)


_MISSING = object()
