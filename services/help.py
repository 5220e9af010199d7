import discord

from services.base import BaseService
from utils.command_registry import COMMANDS, commands_by_category
from utils.config import BATTLE
from utils.errors import GameError
from utils.theme_utils import THEME_COLORS, send_response

CATEGORY_EMOJIS = {
    "Character": "📊",
    "Adventure": "🧭",
    "Economy": "💰",
    "Items": "🎒",
    "Duels": "🤺",
    "Info": "📖",
}


def _short_form(spec):
    """`a p` for commands with an alias, `a give` otherwise."""
    shortest = min((spec.name,) + spec.aliases, key=len)
    return f"a {shortest}"


class HelpService(BaseService):
    """Help embeds built from the command registry."""

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.gambling = None  # wired by the ServiceContainer
        self.topics = {
            'battle': self.battle_embed,
            'gamble': lambda: self.gambling.guide_embed(),
            'slots': lambda: self.gambling.guide_embed(),
        }

    def commands_embed(self):
        embed = discord.Embed(
            title="📚 A4A Clan Bot - Command Help",
            description="Every command works as `/a <command>` or as a message starting with `a `.",
            color=THEME_COLORS['primary'],
        )
        for category, specs in commands_by_category().items():
            lines = [f"`{_short_form(spec)}` - {spec.description}" for spec in specs]
            embed.add_field(
                name=f"{CATEGORY_EMOJIS.get(category, '•')} {category}",
                value="\n".join(lines),
                inline=False,
            )
        embed.set_footer(text=f"{len(COMMANDS)} commands • `a help <topic>` for battle or gamble guides")
        return embed

    def battle_embed(self):
        embed = discord.Embed(
            title="⚔️ Battle Guide",
            description="Hunts and duels trade blows until one side runs out of HP.",
            color=THEME_COLORS['primary'],
        )
        embed.add_field(
            name="💥 Damage",
            value=(
                f"Attack minus half the target's defense, never below {BATTLE['min_damage']}.\n"
                f"{int(BATTLE['crit_chance'] * 100)}% chance of a critical hit for x{BATTLE['crit_multiplier']} damage."
            ),
            inline=False,
        )
        embed.add_field(
            name="💨 Speed",
            value="In duels the faster pirate strikes first.",
            inline=False,
        )
        embed.add_field(
            name="❤️ Recovery",
            value="You regenerate 5% of your max HP every minute. Potions heal instantly.",
            inline=False,
        )
        return embed

    async def handle_help(self, source, topic: str = None):
        if not topic:
            await send_response(source, embed=self.commands_embed())
            return

        builder = self.topics.get(topic)
        if builder is None:
            raise GameError(
                f"❌ Unknown help topic! Choose from: {', '.join(self.topics)}",
                'UNKNOWN_HELP_TOPIC',
                {'topic': topic},
            )
        await send_response(source, embed=builder())
