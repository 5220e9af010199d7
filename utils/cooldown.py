"""Per-user, per-command cooldown tracking.

Cooldowns live in memory only: a restart makes every command usable again.
Expired entries are evicted lazily by `check` and in bulk by `sweep`, which the
rpg cog runs on a timer.
"""

import logging
import math
import time
from typing import Callable, Dict, Optional

from utils.config import COOLDOWNS

logger = logging.getLogger(__name__)


def format_remaining(seconds: int) -> str:
    """Render a cooldown like `1h 2m`, `3m 5s` or `12s`."""
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def get_cooldown_message(command: str, remaining: int) -> str:
    return f"⏰ `{command}` is on cooldown! Please wait {format_remaining(remaining)}."


class CooldownManager:
    """Maps user id -> {command -> expiry timestamp}."""

    def __init__(self, durations: Optional[Dict[str, int]] = None, clock: Callable[[], float] = time.time):
        self.durations = dict(COOLDOWNS if durations is None else durations)
        self.clock = clock
        self._expiries: Dict[str, Dict[str, float]] = {}

    def get_expiry(self, user_id, command: str) -> float:
        return self._expiries.get(str(user_id), {}).get(command, 0)

    def set(self, user_id, command: str, duration: Optional[float] = None) -> float:
        """Start the cooldown for a command and return its expiry time."""
        if duration is None:
            duration = self.durations.get(command, 0)
        expires_at = self.clock() + duration
        self._expiries.setdefault(str(user_id), {})[command] = expires_at
        return expires_at

    def check(self, user_id, command: str) -> bool:
        """True when the command can be used right now."""
        user_id = str(user_id)
        expires_at = self.get_expiry(user_id, command)
        if self.clock() >= expires_at:
            user_cooldowns = self._expiries.get(user_id)
            if user_cooldowns and command in user_cooldowns:
                del user_cooldowns[command]
                if not user_cooldowns:
                    del self._expiries[user_id]
            return True
        return False

    def remaining(self, user_id, command: str) -> int:
        """Whole seconds left, rounded up. Zero when ready."""
        left = self.get_expiry(user_id, command) - self.clock()
        return max(0, math.ceil(left))

    def clear(self, user_id=None):
        if user_id is None:
            self._expiries.clear()
        else:
            self._expiries.pop(str(user_id), None)

    def sweep(self, now: Optional[float] = None) -> int:
        """Evict expired entries; returns how many were removed."""
        now = self.clock() if now is None else now
        removed = 0
        for user_id in list(self._expiries):
            user_cooldowns = self._expiries[user_id]
            for command in [c for c, expires_at in user_cooldowns.items() if now >= expires_at]:
                del user_cooldowns[command]
                removed += 1
            if not user_cooldowns:
                del self._expiries[user_id]
        if removed:
            logger.debug("Swept %d expired cooldowns", removed)
        return removed

    def __len__(self):
        return sum(len(v) for v in self._expiries.values())


# Global instance
cooldowns = CooldownManager()
