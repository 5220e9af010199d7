"""Slot machine mini-game."""

from dataclasses import dataclass
from typing import Dict, List

import discord

from data.game_data import MAX_BET, MIN_BET, SLOT_SYMBOLS
from services.base import BaseService
from utils.errors import EconomyError, GameError
from utils.theme_utils import THEME_COLORS, get_user_id, send_response


@dataclass
class SlotResult:
    symbols: List[Dict]
    bet: int
    multiplier: int
    payout: int

    @property
    def won(self) -> bool:
        return self.payout > 0


class GamblingService(BaseService):

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.character = None  # wired by the ServiceContainer

    def random_symbol(self) -> Dict:
        total_weight = sum(symbol['weight'] for symbol in SLOT_SYMBOLS)
        roll = self.rng.random() * total_weight
        for symbol in SLOT_SYMBOLS:
            roll -= symbol['weight']
            if roll <= 0:
                return symbol
        return SLOT_SYMBOLS[0]

    def spin(self, bet: int) -> SlotResult:
        symbols = [self.random_symbol() for _ in range(3)]
        all_same = all(symbol['emoji'] == symbols[0]['emoji'] for symbol in symbols)
        multiplier = symbols[0]['multiplier'] if all_same else 0
        return SlotResult(symbols=symbols, bet=bet, multiplier=multiplier, payout=bet * multiplier)

    def play_slots(self, user_id, bet: int) -> SlotResult:
        if bet is None or not MIN_BET <= bet <= MAX_BET:
            raise GameError(
                f"❌ Bet amount must be between {MIN_BET:,} and {MAX_BET:,} coins!",
                'INVALID_BET',
                {'bet': bet},
            )
        self.check_cooldown(user_id, 'gamble')
        character = self.require_character(user_id)
        if character.get('coins', 0) < bet:
            raise EconomyError.insufficient_funds(bet, character.get('coins', 0))

        self.character.remove_coins(user_id, bet, "Slot machine bet", 'GAMBLE_BET')
        result = self.spin(bet)
        if result.won:
            self.character.add_coins(user_id, result.payout, "Slot machine win", 'GAMBLE_WIN')

        character = self.require_character(user_id)
        character['total_gambled'] = character.get('total_gambled', 0) + bet
        character['total_won'] = character.get('total_won', 0) + result.payout
        self.save(user_id, character)
        self.cooldowns.set(user_id, 'gamble')

        self.logger.info("%s bet %d on slots, payout %d", user_id, bet, result.payout)
        return result

    def guide_embed(self):
        embed = discord.Embed(
            title="🎰 Slot Machine Guide",
            description=(
                f"Use `a g slots [amount]` or `/a g` to play.\n"
                f"Bets range from {MIN_BET:,} to {MAX_BET:,} coins. Three matching symbols win!"
            ),
            color=THEME_COLORS['gold'],
        )
        payouts = "\n".join(f"{s['emoji']} {s['emoji']} {s['emoji']} · x{s['multiplier']}" for s in SLOT_SYMBOLS)
        embed.add_field(name="Payouts", value=payouts, inline=False)
        return embed

    async def handle_gamble(self, source, game: str = 'help', amount: int = None):
        if game == 'help':
            await send_response(source, embed=self.guide_embed())
            return
        if game != 'slots':
            raise GameError("❌ Unknown game! Use `a g help` to see the guide.", 'UNKNOWN_GAME', {'game': game})

        user_id = get_user_id(source)
        result = self.play_slots(user_id, amount)
        character = self.require_character(user_id)

        embed = discord.Embed(
            title="🎰 Slot Machine",
            description=" | ".join(symbol['emoji'] for symbol in result.symbols),
            color=THEME_COLORS['success'] if result.won else THEME_COLORS['error'],
        )
        embed.add_field(name="Bet", value=f"{result.bet:,} 💰", inline=True)
        embed.add_field(
            name="Result",
            value=f"Won {result.payout:,} 💰 (x{result.multiplier})" if result.won else "Lost 😢",
            inline=True,
        )
        embed.set_footer(text=f"Balance: {character['coins']:,} coins")
        await send_response(source, embed=embed)
