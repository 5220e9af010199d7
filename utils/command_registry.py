"""
Command registry shared by the slash and free-text command paths.

Every command maps to a method on one of the services held by the
ServiceContainer. Both dispatch paths look commands up here, so an alias
added to the table works the same way in `/a <sub>` and in `a <sub>`.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CommandSpec:
    name: str
    service: str
    method: str
    aliases: Tuple[str, ...] = ()
    requires_args: bool = False
    allow_args: bool = False
    requires_character: bool = True
    category: str = "General"
    usage: str = ""
    description: str = ""


_COMMANDS = [
    # Character
    CommandSpec("start", "character", "handle_start", allow_args=True, requires_character=False,
                category="Character", usage="a start <name> <mentor>",
                description="Create your pirate (YB, Tierison, LYuka or GarryAng)"),
    CommandSpec("profile", "character", "handle_profile", ("p",), allow_args=True,
                category="Character", usage="a p [@user]",
                description="Show your profile or another player's"),
    CommandSpec("reset", "character", "handle_reset", requires_args=True, allow_args=True,
                category="Character", usage="a reset CONFIRM",
                description="Delete your character and start over"),

    # Adventure
    CommandSpec("hunt", "character", "handle_hunt", ("h",),
                category="Adventure", usage="a h",
                description="Hunt a monster for EXP and coins"),
    CommandSpec("daily", "character", "handle_daily", ("d",),
                category="Adventure", usage="a d",
                description="Claim your daily reward"),
    CommandSpec("train", "mentor", "handle_training", ("t",),
                category="Adventure", usage="a t",
                description="Train with your mentor"),
    CommandSpec("map", "location", "handle_map_view", ("m",),
                category="Adventure", usage="a m",
                description="Show the map and your current island"),
    CommandSpec("travel", "location", "handle_travel", ("tr",), requires_args=True, allow_args=True,
                category="Adventure", usage="a tr <island>",
                description="Sail to another island"),
    CommandSpec("quiz", "quiz", "handle_quiz", ("q",), allow_args=True,
                category="Adventure", usage="a q [answer]",
                description="Answer One Piece trivia for EXP and coins"),

    # Economy
    CommandSpec("balance", "character", "handle_balance", ("b", "bal"),
                category="Economy", usage="a b",
                description="Show your coins and recent transactions"),
    CommandSpec("give", "character", "handle_give", requires_args=True, allow_args=True,
                category="Economy", usage="a give @user <amount>",
                description="Give coins to another player"),
    CommandSpec("shop", "shop", "handle_shop", ("s", "sh"), allow_args=True,
                category="Economy", usage="a s [type]",
                description="Browse the shop"),
    CommandSpec("buy", "shop", "handle_buy", requires_args=True, allow_args=True,
                category="Economy", usage="a buy <item> [quantity]",
                description="Buy an item from the shop"),
    CommandSpec("sell", "inventory", "handle_sell_item", requires_args=True, allow_args=True,
                category="Economy", usage="a sell <item> [quantity]",
                description="Sell an item for half its price"),
    CommandSpec("gamble", "gambling", "handle_gamble", ("g",), allow_args=True,
                category="Economy", usage="a g slots [amount]",
                description="Try your luck on the slot machine"),

    # Items
    CommandSpec("inventory", "inventory", "handle_inventory_view", ("i", "inv"),
                category="Items", usage="a i",
                description="Show your inventory"),
    CommandSpec("use", "inventory", "handle_use_item", ("u",), requires_args=True, allow_args=True,
                category="Items", usage="a u <item>",
                description="Use a consumable item"),
    CommandSpec("equip", "equipment", "handle_equip", ("e",), requires_args=True, allow_args=True,
                category="Items", usage="a e <item>",
                description="Equip a weapon, armor or accessory"),
    CommandSpec("unequip", "equipment", "handle_unequip", ("ue",), requires_args=True, allow_args=True,
                category="Items", usage="a ue <weapon|armor|accessory>",
                description="Unequip the item in a slot"),

    # Duels
    CommandSpec("duel", "duel", "handle_duel", ("du",), requires_args=True, allow_args=True,
                category="Duels", usage="a duel @user",
                description="Challenge another player to a duel"),
    CommandSpec("accept", "duel", "handle_accept", ("ac",),
                category="Duels", usage="a accept",
                description="Accept a duel challenge"),
    CommandSpec("reject", "duel", "handle_reject", ("rj",),
                category="Duels", usage="a reject",
                description="Reject or cancel a duel"),

    # Info
    CommandSpec("leaderboard", "leaderboard", "handle_leaderboard", ("lb", "top", "l"), allow_args=True,
                category="Info", usage="a lb [type] [page]",
                description="Show the leaderboard"),
    CommandSpec("help", "help", "handle_help", allow_args=True, requires_character=False,
                category="Info", usage="a help [gamble]",
                description="Show this command list"),
]

COMMANDS: Dict[str, CommandSpec] = {spec.name: spec for spec in _COMMANDS}

ALIASES: Dict[str, str] = {}
for _spec in _COMMANDS:
    for _alias in _spec.aliases:
        if _alias in ALIASES or _alias in COMMANDS:
            raise ValueError(f"Duplicate command alias: {_alias}")
        ALIASES[_alias] = _spec.name

CATEGORY_ORDER = ["Character", "Adventure", "Economy", "Items", "Duels", "Info"]


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


def resolve(name: str) -> Optional[CommandSpec]:
    """Look a command up by canonical name first, then by alias."""
    key = normalize_name(name)
    if not key:
        return None
    if key in COMMANDS:
        return COMMANDS[key]
    canonical = ALIASES.get(key)
    return COMMANDS[canonical] if canonical else None


def commands_by_category() -> Dict[str, List[CommandSpec]]:
    grouped: Dict[str, List[CommandSpec]] = {category: [] for category in CATEGORY_ORDER}
    for spec in _COMMANDS:
        grouped.setdefault(spec.category, []).append(spec)
    return {category: specs for category, specs in grouped.items() if specs}
