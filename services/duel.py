"""Player-versus-player duel challenges."""

import discord

from services.base import BaseService
from utils.cache import TTLCache
from utils.config import DUEL_TIMEOUT_SECONDS
from utils.errors import CommandError, GameError
from utils.theme_utils import THEME_COLORS, get_user_id, send_response


class DuelService(BaseService):
    """Pending challenges are indexed under both players and expire after five minutes."""

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.battle = None  # wired by the ServiceContainer
        self.pending = TTLCache(DUEL_TIMEOUT_SECONDS, clock=self.clock)

    def get_pending(self, user_id):
        return self.pending.get(str(user_id))

    def _clear(self, duel):
        self.pending.delete(duel['challenger_id'])
        self.pending.delete(duel['challenged_id'])

    def challenge(self, challenger_id, challenged_id) -> dict:
        challenger_id, challenged_id = str(challenger_id), str(challenged_id)
        if challenger_id == challenged_id:
            raise CommandError.invalid_args("You can't duel yourself!")

        self.check_cooldown(challenger_id, 'duel')
        challenger = self.require_character(challenger_id)
        challenged = self.require_target(challenged_id)

        if self.pending.has(challenger_id) or self.pending.has(challenged_id):
            raise GameError("❌ One of the players already has a pending duel!", 'DUEL_PENDING')

        duel = {
            'challenger_id': challenger_id,
            'challenged_id': challenged_id,
            'challenger_name': challenger['name'],
            'challenged_name': challenged['name'],
            'created_at': self.clock(),
        }
        self.pending.set(challenger_id, duel)
        self.pending.set(challenged_id, duel)
        self.cooldowns.set(challenger_id, 'duel')
        self.logger.info("%s challenged %s to a duel", challenger_id, challenged_id)
        return duel

    def accept(self, user_id):
        user_id = str(user_id)
        duel = self.get_pending(user_id)
        if duel is None or duel['challenged_id'] != user_id:
            raise GameError("❌ You don't have a duel challenge to accept!", 'NO_PENDING_DUEL')
        self._clear(duel)
        self.require_target(duel['challenger_id'])

        result = self.battle.simulate_duel(duel['challenger_id'], duel['challenged_id'])

        winner = self.require_character(result.winner_id)
        winner['wins'] = winner.get('wins', 0) + 1
        winner['win_streak'] = winner.get('win_streak', 0) + 1
        winner['highest_streak'] = max(winner.get('highest_streak', 0), winner['win_streak'])
        self.save(result.winner_id, winner)

        loser = self.require_character(result.loser_id)
        loser['losses'] = loser.get('losses', 0) + 1
        loser['win_streak'] = 0
        self.save(result.loser_id, loser)

        self.logger.info("Duel %s vs %s won by %s", duel['challenger_id'], duel['challenged_id'], result.winner_id)
        return duel, result

    def forget(self, user_id) -> bool:
        """Drop any pending duel involving the player."""
        duel = self.get_pending(user_id)
        if duel is None:
            return False
        self._clear(duel)
        return True

    def reject(self, user_id):
        duel = self.get_pending(user_id)
        if duel is None:
            raise GameError("❌ There's no pending duel to reject!", 'NO_PENDING_DUEL')
        self._clear(duel)
        return duel

    def cleanup(self) -> int:
        return self.pending.cleanup()

    async def handle_duel(self, source, target_id: str):
        duel = self.challenge(get_user_id(source), target_id)
        embed = discord.Embed(
            title="⚔️ Duel Challenge!",
            description=(
                f"**{duel['challenger_name']}** challenges <@{duel['challenged_id']}> to a duel!\n"
                "Use `a accept` to accept or `a reject` to decline."
            ),
            color=THEME_COLORS['warning'],
        )
        embed.add_field(name="👤 Challenger", value=duel['challenger_name'], inline=True)
        embed.add_field(name="👥 Challenged", value=duel['challenged_name'], inline=True)
        embed.set_footer(text="The challenge expires in 5 minutes")
        await send_response(source, embed=embed)

    async def handle_accept(self, source):
        duel, result = self.accept(get_user_id(source))
        winner_name = duel['challenger_name'] if result.winner_id == duel['challenger_id'] else duel['challenged_name']
        embed = discord.Embed(
            title="⚔️ Duel Results",
            description="\n".join(result.log[-8:]),
            color=THEME_COLORS['gold'],
        )
        embed.add_field(name="🏆 Winner", value=winner_name, inline=False)
        await send_response(source, embed=embed)

    async def handle_reject(self, source):
        user_id = get_user_id(source)
        duel = self.reject(user_id)
        if user_id == duel['challenger_id']:
            text = f"**{duel['challenger_name']}** withdrew the challenge to **{duel['challenged_name']}**."
        else:
            text = f"**{duel['challenged_name']}** declined the challenge from **{duel['challenger_name']}**."
        embed = discord.Embed(title="❌ Duel cancelled", description=text, color=THEME_COLORS['error'])
        await send_response(source, embed=embed)
