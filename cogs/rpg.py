import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands, tasks

from data.game_data import LOCATIONS, MENTORS
from services.leaderboard import LEADERBOARD_TYPES
from utils.config import COOLDOWN_SWEEP_SECONDS
from utils.cooldown import cooldowns
from utils.dispatcher import GENERIC_ERROR, dispatch_slash
from utils.theme_utils import send_response

logger = logging.getLogger(__name__)

MENTOR_CHOICES = [app_commands.Choice(name=m['title'], value=key) for key, m in MENTORS.items()]
SLOT_CHOICES = [app_commands.Choice(name=slot.title(), value=slot) for slot in ('weapon', 'armor', 'accessory')]
LEADERBOARD_CHOICES = [app_commands.Choice(name=name.title(), value=name) for name in LEADERBOARD_TYPES]
SHOP_CHOICES = [
    app_commands.Choice(name=name.title(), value=name)
    for name in ('CONSUMABLE', 'WEAPON', 'ARMOR', 'ACCESSORY', 'MATERIAL')
]
GAME_CHOICES = [
    app_commands.Choice(name="Slots", value="slots"),
    app_commands.Choice(name="Guide", value="help"),
]
ISLAND_CHOICES = [app_commands.Choice(name=loc['name'], value=key) for key, loc in LOCATIONS.items()]
ANSWER_CHOICES = [app_commands.Choice(name=letter.upper(), value=letter) for letter in "abcd"]


class RPG(commands.Cog):
    """Slash commands for the RPG; message commands go through main.on_message."""

    a_group = app_commands.Group(name="a", description="A4A Clan Bot RPG commands")

    def __init__(self, bot):
        self.bot = bot

    @property
    def services(self):
        return self.bot.services

    async def cog_load(self):
        self.cooldown_sweep.start()

    async def cog_unload(self):
        self.cooldown_sweep.cancel()

    @tasks.loop(seconds=COOLDOWN_SWEEP_SECONDS)
    async def cooldown_sweep(self):
        """Evict expired cooldowns and run service housekeeping"""
        try:
            cooldowns.sweep()
            self.services.cleanup()
        except Exception:
            logger.exception("Error in cooldown sweep")

    @cooldown_sweep.before_loop
    async def before_cooldown_sweep(self):
        await self.bot.wait_until_ready()

    async def cog_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        logger.error("Slash command error: %s", error, exc_info=error)
        await send_response(interaction, content=GENERIC_ERROR, ephemeral=True)

    # Top-level commands

    @app_commands.command(name="start", description="Create your pirate character")
    @app_commands.describe(name="Your character's name", mentor="The mentor who trains you")
    @app_commands.choices(mentor=MENTOR_CHOICES)
    async def start(self, interaction: discord.Interaction, name: Optional[str] = None,
                    mentor: Optional[app_commands.Choice[str]] = None):
        await dispatch_slash(interaction, self.services, 'start',
                             name=name, mentor=mentor.value if mentor else None)

    @app_commands.command(name="help", description="Show every command")
    @app_commands.describe(topic="battle or gamble")
    async def help(self, interaction: discord.Interaction, topic: Optional[str] = None):
        await dispatch_slash(interaction, self.services, 'help', topic=topic)

    @app_commands.command(name="reset", description="Delete your character")
    @app_commands.describe(confirm="Type CONFIRM to delete your character")
    async def reset(self, interaction: discord.Interaction, confirm: str):
        await dispatch_slash(interaction, self.services, 'reset', confirm=confirm)

    # /a subcommands

    @a_group.command(name="p", description="Show your profile or another player's")
    @app_commands.describe(user="The player to look at")
    async def profile(self, interaction: discord.Interaction, user: Optional[discord.Member] = None):
        await dispatch_slash(interaction, self.services, 'p', user=user)

    @a_group.command(name="h", description="Hunt a monster")
    async def hunt(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'h')

    @a_group.command(name="d", description="Claim your daily reward")
    async def daily(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'd')

    @a_group.command(name="i", description="Show your inventory")
    async def inventory(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'i')

    @a_group.command(name="u", description="Use a consumable item")
    @app_commands.describe(item="Item name or id")
    async def use(self, interaction: discord.Interaction, item: str):
        await dispatch_slash(interaction, self.services, 'u', item=item)

    @a_group.command(name="b", description="Show your coins")
    async def balance(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'b')

    @a_group.command(name="t", description="Train with your mentor")
    async def train(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 't')

    @a_group.command(name="m", description="Show the map")
    async def map(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'm')

    @a_group.command(name="q", description="Answer One Piece trivia")
    @app_commands.describe(answer="Answer to your open question; leave empty for a new one")
    @app_commands.choices(answer=ANSWER_CHOICES)
    async def quiz(self, interaction: discord.Interaction, answer: Optional[app_commands.Choice[str]] = None):
        await dispatch_slash(interaction, self.services, 'q', answer=answer.value if answer else None)

    @a_group.command(name="tr", description="Sail to another island")
    @app_commands.describe(destination="Island to sail to")
    @app_commands.choices(destination=ISLAND_CHOICES)
    async def travel(self, interaction: discord.Interaction, destination: app_commands.Choice[str]):
        await dispatch_slash(interaction, self.services, 'tr', destination=destination.value)

    @a_group.command(name="s", description="Browse the shop")
    @app_commands.describe(type="Only show one item type")
    @app_commands.choices(type=SHOP_CHOICES)
    async def shop(self, interaction: discord.Interaction, type: Optional[app_commands.Choice[str]] = None):
        await dispatch_slash(interaction, self.services, 's', type=type.value if type else None)

    @a_group.command(name="buy", description="Buy an item from the shop")
    @app_commands.describe(item="Item name or id", quantity="How many to buy")
    async def buy(self, interaction: discord.Interaction, item: str,
                  quantity: Optional[app_commands.Range[int, 1, 99]] = None):
        await dispatch_slash(interaction, self.services, 'buy', item=item, quantity=quantity)

    @a_group.command(name="sell", description="Sell an item for half its price")
    @app_commands.describe(item="Item name or id", quantity="How many to sell")
    async def sell(self, interaction: discord.Interaction, item: str,
                   quantity: Optional[app_commands.Range[int, 1, 100]] = None):
        await dispatch_slash(interaction, self.services, 'sell', item=item, quantity=quantity)

    @a_group.command(name="e", description="Equip an item")
    @app_commands.describe(item="Item name or id")
    async def equip(self, interaction: discord.Interaction, item: str):
        await dispatch_slash(interaction, self.services, 'e', item=item)

    @a_group.command(name="ue", description="Unequip the item in a slot")
    @app_commands.describe(slot="Equipment slot")
    @app_commands.choices(slot=SLOT_CHOICES)
    async def unequip(self, interaction: discord.Interaction, slot: app_commands.Choice[str]):
        await dispatch_slash(interaction, self.services, 'ue', slot=slot.value)

    @a_group.command(name="lb", description="Show the leaderboard")
    @app_commands.describe(type="Ranking to show", page="Page number")
    @app_commands.choices(type=LEADERBOARD_CHOICES)
    async def leaderboard(self, interaction: discord.Interaction,
                          type: Optional[app_commands.Choice[str]] = None,
                          page: Optional[app_commands.Range[int, 1]] = None):
        await dispatch_slash(interaction, self.services, 'lb', type=type.value if type else None, page=page)

    @a_group.command(name="help", description="Show every command")
    @app_commands.describe(topic="battle or gamble")
    async def a_help(self, interaction: discord.Interaction, topic: Optional[str] = None):
        await dispatch_slash(interaction, self.services, 'help', topic=topic)

    @a_group.command(name="duel", description="Challenge another player to a duel")
    @app_commands.describe(user="The player to challenge")
    async def duel(self, interaction: discord.Interaction, user: discord.Member):
        await dispatch_slash(interaction, self.services, 'duel', user=user)

    @a_group.command(name="accept", description="Accept a duel challenge")
    async def accept(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'accept')

    @a_group.command(name="reject", description="Reject or cancel a duel")
    async def reject(self, interaction: discord.Interaction):
        await dispatch_slash(interaction, self.services, 'reject')

    @a_group.command(name="give", description="Give coins to another player")
    @app_commands.describe(user="Who gets the coins", amount="How many coins")
    async def give(self, interaction: discord.Interaction, user: discord.Member,
                   amount: app_commands.Range[int, 1]):
        await dispatch_slash(interaction, self.services, 'give', user=user, amount=amount)

    @a_group.command(name="g", description="Play the slot machine")
    @app_commands.describe(game="Slots or the guide; shows the guide when nothing is given", amount="Your bet")
    @app_commands.choices(game=GAME_CHOICES)
    async def gamble(self, interaction: discord.Interaction,
                     game: Optional[app_commands.Choice[str]] = None,
                     amount: Optional[int] = None):
        await dispatch_slash(interaction, self.services, 'g', game=game.value if game else None, amount=amount)


async def setup(bot):
    await bot.add_cog(RPG(bot))
