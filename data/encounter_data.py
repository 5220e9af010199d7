"""
Encounter table for the hunt command.
Monsters are grouped by rarity; each rarity has a chance of being rolled and
each monster a level range used to match it to the hunter's level.
"""

import random

ENCOUNTERS = {
    "COMMON": {
        "chance": 0.7,
        "monsters": [
            {"name": "🐗 Wild Boar", "level": (1, 3), "exp": 20, "coins": (10, 30)},
            {"name": "🐺 Wolf", "level": (2, 4), "exp": 25, "coins": (15, 35)},
            {"name": "🦊 Fox", "level": (3, 5), "exp": 30, "coins": (20, 40)},
        ]
    },
    "RARE": {
        "chance": 0.2,
        "monsters": [
            {"name": "🐉 Baby Dragon", "level": (4, 6), "exp": 50, "coins": (40, 60)},
            {"name": "🦁 Lion", "level": (5, 7), "exp": 55, "coins": (45, 65)},
            {"name": "🐯 Tiger", "level": (6, 8), "exp": 60, "coins": (50, 70)},
        ]
    },
    "EPIC": {
        "chance": 0.08,
        "monsters": [
            {"name": "🐲 Adult Dragon", "level": (7, 9), "exp": 100, "coins": (80, 120)},
            {"name": "🦅 Giant Eagle", "level": (8, 10), "exp": 110, "coins": (90, 130)},
            {"name": "🐘 War Elephant", "level": (9, 11), "exp": 120, "coins": (100, 140)},
        ]
    },
    "LEGENDARY": {
        "chance": 0.02,
        "monsters": [
            {"name": "🔥 Phoenix", "level": (10, 12), "exp": 200, "coins": (150, 250)},
            {"name": "⚡ Thunder Bird", "level": (11, 13), "exp": 220, "coins": (170, 270)},
            {"name": "🌊 Leviathan", "level": (12, 14), "exp": 240, "coins": (190, 290)},
        ]
    },
}

RARITY_EMOJIS = {
    "COMMON": "⚪",
    "RARE": "🔵",
    "EPIC": "🟣",
    "LEGENDARY": "🟡",
}


def is_level_appropriate(monster: dict, character_level: int) -> bool:
    """A monster fits when its range overlaps [level - 1, level + 3]."""
    min_level, max_level = monster["level"]
    return min_level <= character_level + 3 and max_level >= character_level - 1


def get_random_monster(character_level: int, rng=random) -> dict:
    """Roll a rarity, then pick a level-appropriate monster from it.

    A rolled rarity with no suitable monster falls through to the next rarity.
    When nothing fits at all the first common monster is returned.
    """
    roll = rng.random()
    cumulative_chance = 0

    for rarity, data in ENCOUNTERS.items():
        cumulative_chance += data["chance"]
        if roll <= cumulative_chance:
            candidates = [m for m in data["monsters"] if is_level_appropriate(m, character_level)]
            if not candidates:
                continue
            return dict(rng.choice(candidates), rarity=rarity)

    return dict(ENCOUNTERS["COMMON"]["monsters"][0], rarity="COMMON")


def roll_coins(monster: dict, rng=random) -> int:
    low, high = monster["coins"]
    return rng.randint(low, high)
