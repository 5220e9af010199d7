import asyncio
import logging

import discord
from discord.ext import commands

from services.container import ServiceContainer
from services.storage import GameStore
from utils.config import COMMAND_PREFIX, DATA_FILE, DISCORD_TOKEN, GUILD_ID, LOG_LEVEL, get_invite_url, validate_config
from utils.dispatcher import handle_message_command
from utils.errors import ConfigError

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

# Bot configuration
intents = discord.Intents.default()
intents.message_content = True
intents.members = True

COGS = ['rpg']


class A4ABot(commands.Bot):
    """Bot that owns the game services; free-text commands bypass discord.ext parsing."""

    def __init__(self, services):
        super().__init__(command_prefix=COMMAND_PREFIX, intents=intents, help_command=None)
        self.services = services

    async def setup_hook(self):
        await load_cogs(self)
        await sync_commands(self)

    async def on_ready(self):
        logger.info("%s has connected to Discord!", self.user)
        logger.info("Bot is in %d guilds", len(self.guilds))
        logger.info("Invite link: %s", get_invite_url(self.user.id))
        await self.change_presence(activity=discord.Game(name="a help"))

    async def on_message(self, message):
        await handle_message_command(message, self.services, COMMAND_PREFIX)


async def load_cogs(bot):
    """Load all cog files from the cogs directory"""
    for cog_name in COGS:
        await bot.load_extension(f'cogs.{cog_name}')
        logger.info("Loaded cog: %s", cog_name)


async def sync_commands(bot):
    """Sync slash commands, instantly to GUILD_ID when it is set"""
    try:
        if GUILD_ID:
            guild = discord.Object(id=int(GUILD_ID))
            bot.tree.copy_global_to(guild=guild)
            synced = await bot.tree.sync(guild=guild)
        else:
            synced = await bot.tree.sync()
        logger.info("Synced %d slash commands", len(synced))
    except discord.HTTPException:
        logger.exception("Failed to sync slash commands")


def create_bot(data_file=DATA_FILE):
    services = ServiceContainer(GameStore(data_file))
    return A4ABot(services)


# Run the bot
async def main():
    try:
        validate_config()
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        return

    bot = create_bot()
    async with bot:
        await bot.start(DISCORD_TOKEN)


if __name__ == "__main__":
    asyncio.run(main())
