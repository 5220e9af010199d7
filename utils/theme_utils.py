"""Theme and reply helpers shared by every service."""

import discord

# Centralized color palette for the bot
THEME_COLORS = {
    'primary': 0x0099FF,      # Sea blue
    'secondary': 0x3B82F6,    # Blue
    'accent': 0xF59E0B,       # Amber
    'success': 0x10B981,      # Emerald
    'error': 0xEF4444,        # Red
    'warning': 0xF59E0B,      # Amber
    'info': 0x3B82F6,         # Blue
    'gold': 0xFFD700,         # Gold
    'dark': 0x1F2937,         # Gray-800
}

RARITY_COLORS = {
    'common': 0x6B7280,     # Gray
    'rare': 0x3B82F6,       # Blue
    'epic': 0x8B5CF6,       # Violet
    'legendary': 0xF59E0B,  # Amber
}

def get_rarity_color(rarity):
    """Get color based on encounter rarity."""
    return RARITY_COLORS.get(rarity.lower(), RARITY_COLORS['common'])

def get_success_embed(title, description=None):
    embed = discord.Embed(
        title=title,
        description=description,
        color=THEME_COLORS['success']
    )
    return embed

def create_progress_bar(current, maximum, length=10):
    """Create a text-based progress bar for Discord messages."""
    if maximum <= 0:
        return f"[{'-' * length}] {current}/{maximum}"
    current = max(0, min(current, maximum))
    filled_length = int(length * current // maximum)
    bar = '█' * filled_length + '-' * (length - filled_length)
    return f"[{bar}] {current}/{maximum}"

def is_interaction(source):
    return hasattr(source, 'response') and hasattr(source, 'followup')

def get_user(source):
    """The member behind a slash interaction or a chat message."""
    return source.user if is_interaction(source) else source.author

def get_user_id(source):
    return str(get_user(source).id)

async def send_response(source, content=None, embed=None, view=None, ephemeral=False):
    """Reply to a slash interaction or a chat message with the same arguments.

    Interactions that were already answered get a followup message instead.
    Returns the sent message when the platform gives one back.
    """
    kwargs = {}
    if content is not None:
        kwargs['content'] = content
    if embed is not None:
        kwargs['embed'] = embed
    if view is not None:
        kwargs['view'] = view

    if is_interaction(source):
        if source.response.is_done():
            return await source.followup.send(ephemeral=ephemeral, **kwargs)
        await source.response.send_message(ephemeral=ephemeral, **kwargs)
        return None

    return await source.reply(**kwargs)

async def sent_message(source, sent):
    """The message behind a reply; first slash responses are fetched from the interaction."""
    if sent is None and is_interaction(source):
        return await source.original_response()
    return sent
