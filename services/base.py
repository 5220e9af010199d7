import logging
import random
import time
from typing import Dict

from utils.config import TRANSACTION_HISTORY_LIMIT
from utils.cooldown import cooldowns as shared_cooldowns, get_cooldown_message
from utils.errors import CharacterError, CooldownError


class BaseService:
    """Shared plumbing for the game services: store access, rng, clock and cooldowns."""

    def __init__(self, store, rng=random, cooldowns=None, clock=time.time):
        self.store = store
        self.rng = rng
        self.cooldowns = shared_cooldowns if cooldowns is None else cooldowns
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__module__)

    def require_character(self, user_id) -> Dict:
        character = self.store.get(user_id)
        if character is None:
            raise CharacterError.not_found(str(user_id))
        return character

    def require_target(self, user_id) -> Dict:
        character = self.store.get(user_id)
        if character is None:
            raise CharacterError.target_not_found(str(user_id))
        return character

    def save(self, user_id, character: Dict):
        self.store.put(user_id, character)

    def check_cooldown(self, user_id, command: str):
        if not self.cooldowns.check(user_id, command):
            remaining = self.cooldowns.remaining(user_id, command)
            raise CooldownError(get_cooldown_message(command, remaining), command, remaining)

    def record_transaction(self, character: Dict, amount: int, tx_type: str, description: str):
        """Append to the character's transaction log, keeping only the latest entries."""
        transactions = character.setdefault('transactions', [])
        transactions.append({
            'amount': amount,
            'type': tx_type,
            'description': description,
            'balance': character.get('coins', 0),
            'at': self.clock(),
        })
        del transactions[:-TRANSACTION_HISTORY_LIMIT]
