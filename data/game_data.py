"""
Static game data: mentors, items, shop stock, islands and slot symbols.
"""

# Mentor stat multipliers applied once at character creation
MENTORS = {
    "YB": {
        "title": "🏴‍☠️ YB (Luffy)",
        "emoji": "🥊",
        "multipliers": {"attack": 1.15, "defense": 0.9, "health": 1.1, "speed": 1.2},
        "summary": "+15% Attack, -10% Defense, +10% Health, +20% Speed\nFor aggressive players who love to attack.",
        "training": "You practiced Gomu Gomu techniques with YB! 🥊",
    },
    "Tierison": {
        "title": "⚔️ Tierison (Zoro)",
        "emoji": "⚔️",
        "multipliers": {"attack": 1.1, "defense": 1.1, "health": 1.0, "speed": 1.1},
        "summary": "+10% Attack, +10% Defense, +10% Speed\nBalanced for every situation.",
        "training": "You practiced sword techniques with Tierison! ⚔️",
    },
    "LYuka": {
        "title": "🎯 LYuka (Usopp)",
        "emoji": "🎯",
        "multipliers": {"attack": 0.9, "defense": 1.2, "health": 1.05, "speed": 1.15},
        "summary": "-10% Attack, +20% Defense, +5% Health, +15% Speed\nFor players who like to hold the line.",
        "training": "You practiced sharpshooting with LYuka! 🎯",
    },
    "GarryAng": {
        "title": "🔥 GarryAng (Sanji)",
        "emoji": "🦵",
        "multipliers": {"attack": 1.05, "defense": 1.15, "health": 1.1, "speed": 1.3},
        "summary": "+5% Attack, +15% Defense, +10% Health, +30% Speed\nFor combo and dodge lovers.",
        "training": "You practiced kicking techniques with GarryAng! 🦵",
    },
}


def normalize_mentor(value):
    """Case-insensitive mentor lookup; returns the canonical key or None."""
    if not value:
        return None
    lowered = value.strip().lower()
    for key in MENTORS:
        if key.lower() == lowered:
            return key
    return None


ITEM_TYPE_EMOJIS = {
    "CONSUMABLE": "🧪",
    "WEAPON": "⚔️",
    "ARMOR": "🛡️",
    "ACCESSORY": "💍",
    "MATERIAL": "📦",
}

EQUIPMENT_SLOTS = {
    "WEAPON": "weapon",
    "ARMOR": "armor",
    "ACCESSORY": "accessory",
}

ITEMS = {
    # Consumables
    "potion": {
        "name": "🧪 Health Potion", "type": "CONSUMABLE", "price": 50, "stack_limit": 99,
        "description": "Restores 50 HP", "effect": {"heal": 50},
    },
    "attack_buff": {
        "name": "⚔️ Attack Boost", "type": "CONSUMABLE", "price": 100, "stack_limit": 20,
        "description": "+5 ATK for one hour", "effect": {"attack": 5},
    },
    "defense_buff": {
        "name": "🛡️ Defense Boost", "type": "CONSUMABLE", "price": 100, "stack_limit": 20,
        "description": "+5 DEF for one hour", "effect": {"defense": 5},
    },
    "combat_ration": {
        "name": "🍖 Combat Ration", "type": "CONSUMABLE", "price": 75, "stack_limit": 20,
        "description": "Restores 100 HP, +3 ATK/DEF for one hour",
        "effect": {"heal": 100, "attack": 3, "defense": 3},
    },
    "meat": {
        "name": "🍖 Super Meat", "type": "CONSUMABLE", "price": 800, "stack_limit": 10,
        "description": "Restores 1000 HP, +20 ATK/DEF for one hour",
        "effect": {"heal": 1000, "attack": 20, "defense": 20},
    },
    "rumble_ball": {
        "name": "💊 Rumble Ball", "type": "CONSUMABLE", "price": 1000, "stack_limit": 5,
        "description": "+50 ATK/DEF for one hour", "effect": {"attack": 50, "defense": 50},
    },
    # Weapons
    "wooden_sword": {
        "name": "🗡️ Wooden Sword", "type": "WEAPON", "price": 100, "stack_limit": 1,
        "description": "A wooden sword for beginners", "stats": {"attack": 5},
    },
    "kitetsu": {
        "name": "🗡️ Kitetsu", "type": "WEAPON", "price": 200000, "stack_limit": 1,
        "description": "A cursed blade", "stats": {"attack": 50, "defense": 10},
    },
    "wado_ichimonji": {
        "name": "⚔️ Wado Ichimonji", "type": "WEAPON", "price": 500000, "stack_limit": 1,
        "description": "Kuina's heirloom sword", "stats": {"attack": 80, "defense": 15},
    },
    # Armor
    "training_gi": {
        "name": "🥋 Training Gi", "type": "ARMOR", "price": 100, "stack_limit": 1,
        "description": "Basic training clothes", "stats": {"defense": 5},
    },
    "pirate_armor": {
        "name": "🥋 Pirate Armor", "type": "ARMOR", "price": 250000, "stack_limit": 1,
        "description": "Elite pirate armor", "stats": {"attack": 10, "defense": 50},
    },
    # Accessories
    "log_pose": {
        "name": "🧭 Eternal Log Pose", "type": "ACCESSORY", "price": 400000, "stack_limit": 1,
        "description": "An eternal compass", "stats": {"attack": 30, "defense": 30},
    },
    # Materials
    "wood": {
        "name": "🪵 Wood", "type": "MATERIAL", "price": 100, "stack_limit": 100,
        "description": "Basic upgrade material",
    },
    "den_den_mushi": {
        "name": "🐌 Den Den Mushi", "type": "MATERIAL", "price": 50000, "stack_limit": 5,
        "description": "A communication snail",
    },
}

SHOP_ITEMS = [
    "potion", "attack_buff", "defense_buff", "combat_ration", "meat", "rumble_ball",
    "wooden_sword", "kitetsu", "wado_ichimonji",
    "training_gi", "pirate_armor",
    "log_pose",
    "wood",
]


def sell_price(item_id):
    return ITEMS[item_id]["price"] // 2


def find_item(query, item_ids=None):
    """Resolve an item id from an id or a fragment of its display name."""
    if not query:
        return None
    item_ids = list(ITEMS) if item_ids is None else list(item_ids)
    normalized = query.strip().lower()
    as_id = normalized.replace(' ', '_')

    if as_id in item_ids:
        return as_id

    for item_id in item_ids:
        name = ITEMS[item_id]["name"].lower()
        if normalized in name or as_id in item_id:
            return item_id
    return None


LOCATIONS = {
    "starter_island": {
        "name": "🏝️ Starter Island", "level": 1,
        "description": "The first island of your adventure",
        "connections": ["foosha"],
    },
    "foosha": {
        "name": "🏝️ Foosha Village", "level": 1,
        "description": "The small village where Luffy grew up",
        "connections": ["starter_island", "syrup_village"],
    },
    "syrup_village": {
        "name": "🏘️ Syrup Village", "level": 5,
        "description": "Usopp's home village",
        "connections": ["foosha", "baratie"],
    },
    "baratie": {
        "name": "🚢 Baratie", "level": 10,
        "description": "Zeff's floating restaurant",
        "connections": ["syrup_village", "arlong_park"],
    },
    "arlong_park": {
        "name": "🏰 Arlong Park", "level": 15,
        "description": "Headquarters of the Arlong Pirates",
        "connections": ["baratie", "loguetown"],
    },
    "loguetown": {
        "name": "🌆 Loguetown", "level": 20,
        "description": "The last town before the Grand Line",
        "connections": ["arlong_park", "drum_island"],
    },
    "drum_island": {
        "name": "❄️ Drum Island", "level": 25,
        "description": "The winter island where Chopper lives",
        "connections": ["loguetown", "cocoyashi"],
    },
    "cocoyashi": {
        "name": "🌊 Cocoyashi Village", "level": 30,
        "description": "Nami's home village",
        "connections": ["drum_island"],
    },
}

TIER_EMOJIS = {
    "STARTER": "🏝️",
    "INTERMEDIATE": "🏰",
    "ADVANCED": "⚔️",
}


def get_location_tier(level):
    if level <= 5:
        return "STARTER"
    if level <= 15:
        return "INTERMEDIATE"
    return "ADVANCED"


# Slot machine symbols: payout multiplier and relative weight
SLOT_SYMBOLS = [
    {"emoji": "🍒", "name": "cherry", "multiplier": 2, "weight": 30},
    {"emoji": "🍊", "name": "orange", "multiplier": 3, "weight": 25},
    {"emoji": "🍇", "name": "grape", "multiplier": 4, "weight": 20},
    {"emoji": "🍎", "name": "apple", "multiplier": 5, "weight": 15},
    {"emoji": "💎", "name": "diamond", "multiplier": 10, "weight": 7},
    {"emoji": "👑", "name": "crown", "multiplier": 15, "weight": 3},
]
MIN_BET = 100
MAX_BET = 50000
DEFAULT_BET = 100
