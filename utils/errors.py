"""Game error types. A GameError's message is safe to show to the player."""

from typing import Any, Dict, Optional


class ConfigError(Exception):
    """Raised at startup when required configuration is missing or malformed."""


class GameError(Exception):
    context = 'GAME'

    def __init__(self, message: str, code: str = 'GAME_ERROR', details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class CommandError(GameError):
    context = 'COMMAND'

    @classmethod
    def unknown(cls, name: str, prefix: str = 'a '):
        return cls(
            f"❌ Command not found! Use `{prefix}help` to see the list of commands.",
            'UNKNOWN_COMMAND',
            {'command': name},
        )

    @classmethod
    def missing_args(cls, usage: str):
        return cls(
            f"❌ This command needs more arguments!\nUsage: `{usage}`",
            'MISSING_ARGS',
            {'usage': usage},
        )

    @classmethod
    def invalid_args(cls, reason: str, usage: Optional[str] = None):
        message = f"❌ {reason}"
        if usage:
            message += f"\nUsage: `{usage}`"
        return cls(message, 'INVALID_ARGS', {'usage': usage})


class CharacterError(GameError):
    context = 'CHARACTER'

    @classmethod
    def not_found(cls, user_id: str):
        return cls(
            "❌ You don't have a character yet! Use `/start` or `a start <name> <mentor>` to create one.",
            'CHARACTER_NOT_FOUND',
            {'user_id': user_id},
        )

    @classmethod
    def target_not_found(cls, user_id: str):
        return cls(
            "❌ That player doesn't have a character yet!",
            'TARGET_NOT_FOUND',
            {'user_id': user_id},
        )

    @classmethod
    def already_exists(cls, user_id: str):
        return cls(
            "❌ You already have a character! Use `a p` to view it.",
            'CHARACTER_ALREADY_EXISTS',
            {'user_id': user_id},
        )

    @classmethod
    def invalid_mentor(cls, mentor: str):
        return cls(
            "❌ Invalid mentor! Choose from: YB, Tierison, LYuka or GarryAng.",
            'INVALID_MENTOR',
            {'mentor': mentor},
        )

    @classmethod
    def invalid_name(cls, name: str):
        return cls(
            "❌ Character names must be 2-32 characters long.",
            'INVALID_NAME',
            {'name': name},
        )

    @classmethod
    def knocked_out(cls):
        return cls(
            "❌ You're too injured to fight! Use a potion or rest a few minutes to regenerate HP.",
            'KNOCKED_OUT',
        )


class EconomyError(GameError):
    context = 'ECONOMY'

    @classmethod
    def insufficient_funds(cls, required: int, current: int):
        return cls(
            f"❌ Not enough coins! You need {required - current:,} more coins.",
            'INSUFFICIENT_FUNDS',
            {'required': required, 'current': current, 'missing': required - current},
        )

    @classmethod
    def invalid_amount(cls, amount):
        return cls(
            "❌ Invalid amount! It must be a whole number greater than 0.",
            'INVALID_AMOUNT',
            {'amount': amount},
        )


class InventoryError(GameError):
    context = 'INVENTORY'

    @classmethod
    def item_not_found(cls, query: str):
        return cls(
            f"❌ Item \"{query}\" was not found in your inventory!",
            'ITEM_NOT_FOUND',
            {'query': query},
        )

    @classmethod
    def not_usable(cls, item_name: str):
        return cls(
            f"❌ {item_name} can't be used. Only consumables can be used.",
            'ITEM_NOT_USABLE',
            {'item': item_name},
        )

    @classmethod
    def not_equippable(cls, item_name: str):
        return cls(
            f"❌ {item_name} can't be equipped.",
            'ITEM_NOT_EQUIPPABLE',
            {'item': item_name},
        )

    @classmethod
    def stack_limit(cls, item_name: str, current: int, limit: int):
        return cls(
            f"❌ You can't carry more {item_name}! ({current}/{limit})",
            'STACK_LIMIT_REACHED',
            {'item': item_name, 'current': current, 'limit': limit},
        )

    @classmethod
    def not_enough(cls, item_name: str, owned: int, requested: int):
        return cls(
            f"❌ You only have {owned}x {item_name}, not {requested}!",
            'NOT_ENOUGH_ITEMS',
            {'item': item_name, 'owned': owned, 'requested': requested},
        )

    @classmethod
    def invalid_slot(cls, slot: str):
        return cls(
            "❌ Invalid slot! Choose weapon, armor or accessory.",
            'INVALID_SLOT',
            {'slot': slot},
        )

    @classmethod
    def slot_empty(cls, slot: str):
        return cls(
            f"❌ Nothing is equipped in your {slot} slot.",
            'SLOT_EMPTY',
            {'slot': slot},
        )


class ShopError(GameError):
    context = 'SHOP'

    @classmethod
    def item_not_found(cls, query: str):
        return cls(
            f"❌ Item \"{query}\" is not sold in the shop!",
            'ITEM_NOT_FOUND',
            {'query': query},
        )

    @classmethod
    def invalid_quantity(cls, quantity):
        return cls(
            "❌ Quantity must be greater than 0!",
            'INVALID_QUANTITY',
            {'quantity': quantity},
        )


class CooldownError(GameError):
    context = 'COOLDOWN'

    def __init__(self, message: str, command: str, remaining: int):
        super().__init__(message, 'ON_COOLDOWN', {'command': command, 'remaining': remaining})
        self.command = command
        self.remaining = remaining
