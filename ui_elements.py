import logging

import discord

from utils.config import QUIZ_TIMEOUT_SECONDS
from utils.errors import GameError

logger = logging.getLogger(__name__)


class LeaderboardView(discord.ui.View):
    """Previous/next paging for a leaderboard embed"""

    def __init__(self, leaderboard, board_type, page, total_pages):
        super().__init__(timeout=60)
        self.leaderboard = leaderboard
        self.board_type = board_type
        self.page = page
        self.total_pages = total_pages
        self.message = None

        self.add_item(PageButton("Previous", -1, "⬅️"))
        self.add_item(PageButton("Next", 1, "➡️"))
        self.update_buttons()

    def update_buttons(self):
        for item in self.children:
            if isinstance(item, PageButton):
                target = self.page + item.step
                item.disabled = not 1 <= target <= self.total_pages

    async def on_timeout(self):
        """Disable the buttons once the view expires"""
        for item in self.children:
            item.disabled = True
        if self.message is None:
            return
        try:
            await self.message.edit(view=self)
        except discord.HTTPException as e:
            logger.debug("Could not disable leaderboard buttons: %s", e)


class PageButton(discord.ui.Button):
    """Moves the leaderboard one page back or forward"""

    def __init__(self, label, step, emoji):
        super().__init__(label=label, style=discord.ButtonStyle.secondary, emoji=emoji)
        self.step = step

    async def callback(self, interaction: discord.Interaction):
        view = self.view
        embed, view.page, view.total_pages = view.leaderboard.build_page(view.board_type, view.page + self.step)
        view.update_buttons()
        await interaction.response.edit_message(embed=embed, view=view)


class QuizView(discord.ui.View):
    """One button per answer; only the player who started the quiz can answer"""

    def __init__(self, quiz, user_id, options):
        super().__init__(timeout=QUIZ_TIMEOUT_SECONDS)
        self.quiz = quiz
        self.user_id = str(user_id)
        self.message = None

        for key, text in options.items():
            self.add_item(QuizButton(key, text))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if str(interaction.user.id) != self.user_id:
            await interaction.response.send_message("❌ This isn't your quiz!", ephemeral=True)
            return False
        return True

    async def on_timeout(self):
        """Reset the streak of an unanswered quiz and clear the buttons"""
        expired = self.quiz.expire(self.user_id)
        if self.message is None:
            return
        try:
            if expired:
                await self.message.edit(embed=self.quiz.timeout_embed(), view=None)
            else:
                await self.message.edit(view=None)
        except discord.HTTPException as e:
            logger.debug("Could not update quiz message: %s", e)


class QuizButton(discord.ui.Button):
    """A single answer option"""

    def __init__(self, key, text):
        super().__init__(label=f"{key.upper()}. {text}"[:80], style=discord.ButtonStyle.primary)
        self.key = key

    async def callback(self, interaction: discord.Interaction):
        view = self.view
        view.stop()
        try:
            result = view.quiz.answer(view.user_id, self.key)
        except GameError as e:
            await interaction.response.edit_message(content=e.message, embed=None, view=None)
            return
        await interaction.response.edit_message(embed=view.quiz.result_embed(result), view=None)
