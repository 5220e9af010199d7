"""Bot configuration loaded from the environment (.env supported)."""

import os
import re

from dotenv import load_dotenv

from utils.errors import ConfigError

# Load environment variables
load_dotenv()

DISCORD_TOKEN = os.getenv('DISCORD_TOKEN', '')
GUILD_ID = os.getenv('GUILD_ID', '')
COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', 'a ')
DATA_FILE = os.getenv('RPG_DATA_FILE', 'characters.json')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Starting stats for every new character, before mentor modifiers
STARTER_STATS = {
    'health': 100,
    'attack': 10,
    'defense': 10,
    'speed': 10,
    'coins': 1000,
    'bank': 0,
}
STARTING_LOCATION = 'starter_island'

BATTLE = {
    'min_damage': 5,
    'crit_chance': 0.1,
    'crit_multiplier': 1.5,
}

# Command cooldowns in seconds
COOLDOWNS = {
    'hunt': 15,
    'battle': 30,
    'daily': 86400,
    'train': 300,
    'gamble': 10,
    'duel': 60,
    'quiz': 300,
}
COOLDOWN_SWEEP_SECONDS = 60

DUEL_TIMEOUT_SECONDS = 5 * 60
QUIZ_TIMEOUT_SECONDS = 30
BUFF_DURATION_SECONDS = 60 * 60
TRANSACTION_HISTORY_LIMIT = 20

# Bot permissions: view channels, send messages, embed links, read history, app commands
PERMISSION_INTEGER = '2147485760'


def get_invite_url(client_id):
    """Build the OAuth2 invite link for the bot."""
    return (
        f"https://discord.com/api/oauth2/authorize?client_id={client_id}"
        f"&permissions={PERMISSION_INTEGER}&scope=bot%20applications.commands"
    )


def validate_config(token=None, guild_id=None):
    """Fail fast on a missing token or a malformed guild id."""
    token = DISCORD_TOKEN if token is None else token
    guild_id = GUILD_ID if guild_id is None else guild_id

    if not token or len(token) < 50:
        raise ConfigError("DISCORD_TOKEN is missing or invalid")

    if guild_id and not re.fullmatch(r'\d{17,19}', guild_id):
        raise ConfigError(f"Invalid Discord ID format for GUILD_ID: {guild_id}")
