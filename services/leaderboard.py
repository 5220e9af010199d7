"""Server leaderboards."""

import math
from typing import Dict, List, Tuple

import discord

from services.base import BaseService
from ui_elements import LeaderboardView
from utils.errors import GameError
from utils.theme_utils import THEME_COLORS, send_response, sent_message

PAGE_SIZE = 10

MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def win_rate(character: Dict) -> float:
    wins = character.get('wins', 0)
    total = wins + character.get('losses', 0)
    return wins / total * 100 if total else 0.0


# type -> (title, sort key, value formatter)
LEADERBOARD_TYPES = {
    'level': (
        "📊 Level Rankings",
        lambda c: (c.get('level', 1), c.get('exp', 0)),
        lambda c: f"Level {c.get('level', 1)} | EXP: {c.get('exp', 0):,}",
    ),
    'coins': (
        "💰 Richest Pirates",
        lambda c: c.get('coins', 0),
        lambda c: f"💰 {c.get('coins', 0):,} coins",
    ),
    'bank': (
        "🏦 Biggest Savings",
        lambda c: c.get('bank', 0),
        lambda c: f"🏦 {c.get('bank', 0):,} coins",
    ),
    'streak': (
        "🔥 Current Win Streaks",
        lambda c: c.get('win_streak', 0),
        lambda c: f"🔥 {c.get('win_streak', 0)} wins in a row",
    ),
    'highstreak': (
        "🏅 Best Win Streaks",
        lambda c: c.get('highest_streak', 0),
        lambda c: f"🏅 {c.get('highest_streak', 0)} wins in a row",
    ),
    'wins': (
        "⚔️ Most Wins",
        lambda c: (c.get('wins', 0), -c.get('losses', 0)),
        lambda c: f"Wins: {c.get('wins', 0)} | Losses: {c.get('losses', 0)}",
    ),
    'winrate': (
        "🎯 Best Win Rate",
        lambda c: (win_rate(c), c.get('wins', 0)),
        lambda c: f"{win_rate(c):.1f}% ({c.get('wins', 0)}W / {c.get('losses', 0)}L)",
    ),
    'gambled': (
        "🎰 Biggest Gamblers",
        lambda c: c.get('total_gambled', 0),
        lambda c: f"🎰 {c.get('total_gambled', 0):,} coins bet",
    ),
    'won': (
        "💎 Biggest Winners",
        lambda c: c.get('total_won', 0),
        lambda c: f"💎 {c.get('total_won', 0):,} coins won",
    ),
}


class LeaderboardService(BaseService):

    def get_rankings(self, board_type: str) -> List[Tuple[str, Dict]]:
        if board_type not in LEADERBOARD_TYPES:
            raise GameError(
                f"❌ Invalid leaderboard type! Choose from: {', '.join(LEADERBOARD_TYPES)}",
                'INVALID_LEADERBOARD_TYPE',
                {'type': board_type},
            )
        _, sort_key, _ = LEADERBOARD_TYPES[board_type]
        entries = list(self.store.all())
        if board_type == 'winrate':
            entries = [(user_id, c) for user_id, c in entries if c.get('wins', 0) > 0]
        return sorted(entries, key=lambda entry: sort_key(entry[1]), reverse=True)

    def build_page(self, board_type: str, page: int = 1) -> Tuple[discord.Embed, int, int]:
        """Embed for one page; returns (embed, page actually shown, total pages)."""
        rankings = self.get_rankings(board_type)
        title, _, format_value = LEADERBOARD_TYPES[board_type]
        total_pages = max(1, math.ceil(len(rankings) / PAGE_SIZE))
        page = min(max(1, page), total_pages)

        embed = discord.Embed(title=title, color=THEME_COLORS['gold'])
        start = (page - 1) * PAGE_SIZE
        for rank, (user_id, character) in enumerate(rankings[start:start + PAGE_SIZE], start + 1):
            medal = MEDALS.get(rank, f"{rank}.")
            embed.add_field(name=f"{medal} {character['name']}", value=format_value(character), inline=False)

        if not rankings:
            embed.description = "No pirates on this leaderboard yet!"
        embed.set_footer(text=f"Page {page}/{total_pages} • {len(rankings)} pirates")
        return embed, page, total_pages

    async def handle_leaderboard(self, source, board_type: str = 'level', page: int = 1):
        embed, page, total_pages = self.build_page(board_type, page)
        if total_pages > 1:
            view = LeaderboardView(self, board_type, page, total_pages)
            sent = await send_response(source, embed=embed, view=view)
            view.message = await sent_message(source, sent)
        else:
            await send_response(source, embed=embed)
