import discord

from data.game_data import MENTORS
from services.base import BaseService
from utils.theme_utils import THEME_COLORS, get_user_id, send_response


class MentorService(BaseService):
    """Training sessions with the character's mentor."""

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.character = None  # wired by the ServiceContainer

    async def handle_training(self, source):
        user_id = get_user_id(source)
        self.check_cooldown(user_id, 'train')
        character = self.require_character(user_id)

        exp = self.rng.randint(50, 79)
        progress = self.rng.randint(1, 2)
        self.cooldowns.set(user_id, 'train')

        character['mentor_progress'] = character.get('mentor_progress', 0) + progress
        self.save(user_id, character)
        level_data = self.character.add_experience(user_id, exp)

        mentor = MENTORS.get(character['mentor'], {})
        embed = discord.Embed(
            title=f"{mentor.get('emoji', '🎓')} Training complete",
            description=mentor.get('training', "You finished a training session."),
            color=THEME_COLORS['success'],
        )
        embed.add_field(name="⭐ EXP", value=f"+{exp}", inline=True)
        embed.add_field(name="📈 Mentor progress", value=f"+{progress} (total {character['mentor_progress']})", inline=True)
        if level_data['levels_gained']:
            embed.add_field(name="⬆️ Level Up!", value=f"You reached level {level_data['new_level']}!", inline=False)
        await send_response(source, embed=embed)
