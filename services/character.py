"""Character lifecycle, progression, economy basics and the hunt loop."""

from typing import Dict, Optional

import discord

from data.encounter_data import RARITY_EMOJIS, get_random_monster, roll_coins
from data.game_data import MENTORS, normalize_mentor
from services.base import BaseService
from utils.config import STARTER_STATS, STARTING_LOCATION
from utils.cooldown import format_remaining
from utils.errors import CharacterError, CommandError, EconomyError
from utils.leveling_system import leveling_system
from utils.theme_utils import (
    THEME_COLORS, create_progress_bar, get_rarity_color, get_success_embed,
    get_user, get_user_id, send_response,
)

# Share of max HP recovered per minute out of combat
REGEN_RATE_PER_MINUTE = 0.05

RESET_CONFIRMATION = "CONFIRM"


class CharacterService(BaseService):

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        # wired by the ServiceContainer
        self.battle = None
        self.duel = None
        self.quiz = None

    def has_character(self, user_id) -> bool:
        return self.store.exists(user_id)

    def get_character(self, user_id) -> Optional[Dict]:
        return self.store.get(user_id)

    def create_character(self, user_id, name: str, mentor: str) -> Dict:
        user_id = str(user_id)
        if self.has_character(user_id):
            raise CharacterError.already_exists(user_id)

        name = (name or "").strip()
        if not 2 <= len(name) <= 32:
            raise CharacterError.invalid_name(name)

        mentor_key = normalize_mentor(mentor)
        if mentor_key is None:
            raise CharacterError.invalid_mentor(mentor)

        multipliers = MENTORS[mentor_key]['multipliers']
        max_hp = int(STARTER_STATS['health'] * multipliers['health'])
        now = self.clock()
        character = {
            'name': name,
            'mentor': mentor_key,
            'level': 1,
            'exp': 0,
            'hp': max_hp,
            'max_hp': max_hp,
            'attack': int(STARTER_STATS['attack'] * multipliers['attack']),
            'defense': int(STARTER_STATS['defense'] * multipliers['defense']),
            'speed': int(STARTER_STATS['speed'] * multipliers['speed']),
            'coins': STARTER_STATS['coins'],
            'bank': STARTER_STATS['bank'],
            'location': STARTING_LOCATION,
            'wins': 0,
            'losses': 0,
            'win_streak': 0,
            'highest_streak': 0,
            'hunt_streak': 0,
            'highest_hunt_streak': 0,
            'total_gambled': 0,
            'total_won': 0,
            'mentor_progress': 0,
            'quiz_streak': 0,
            'inventory': {},
            'equipment': {'weapon': None, 'armor': None, 'accessory': None},
            'active_buffs': [],
            'transactions': [],
            'last_regen_at': now,
            'created_at': now,
        }
        self.save(user_id, character)
        self.logger.info("Created character %s (%s) for %s", name, mentor_key, user_id)
        return character

    def delete_character(self, user_id) -> bool:
        deleted = self.store.delete(user_id)
        self.cooldowns.clear(user_id)
        if self.duel is not None:
            self.duel.forget(user_id)
        if self.quiz is not None:
            self.quiz.forget(user_id)
        return deleted

    def add_experience(self, user_id, amount: int) -> Dict:
        character = self.require_character(user_id)
        result = leveling_system.apply_experience(character, amount)
        self.save(user_id, character)
        if result['levels_gained']:
            self.logger.info("%s reached level %d", user_id, result['new_level'])
        return result

    def add_coins(self, user_id, amount: int, description: str, tx_type: str = 'EARN') -> int:
        character = self.require_character(user_id)
        character['coins'] = character.get('coins', 0) + amount
        self.record_transaction(character, amount, tx_type, description)
        self.save(user_id, character)
        return character['coins']

    def remove_coins(self, user_id, amount: int, description: str, tx_type: str = 'SPEND') -> int:
        character = self.require_character(user_id)
        if character.get('coins', 0) < amount:
            raise EconomyError.insufficient_funds(amount, character.get('coins', 0))
        character['coins'] -= amount
        self.record_transaction(character, -amount, tx_type, description)
        self.save(user_id, character)
        return character['coins']

    def apply_passive_regeneration(self, character: Dict, now: float = None) -> int:
        """Heal 5% of max HP per full minute since the last regeneration tick."""
        now = self.clock() if now is None else now
        last = character.get('last_regen_at', now)
        minutes = int((now - last) // 60)
        if minutes <= 0:
            return 0

        character['last_regen_at'] = last + minutes * 60
        max_hp = character.get('max_hp', STARTER_STATS['health'])
        if character.get('hp', 0) >= max_hp:
            return 0

        heal = int(max_hp * REGEN_RATE_PER_MINUTE * minutes)
        old_hp = character['hp']
        character['hp'] = min(max_hp, old_hp + heal)
        return character['hp'] - old_hp

    # Command handlers

    async def handle_start(self, source, name: str = None, mentor: str = None):
        if not name or not mentor:
            await send_response(source, embed=self.mentor_guide_embed())
            return

        user_id = get_user_id(source)
        character = self.create_character(user_id, name, mentor)
        mentor_data = MENTORS[character['mentor']]

        embed = get_success_embed(
            "🏴‍☠️ A new pirate sets sail!",
            f"Welcome aboard, **{character['name']}**! You start your journey on Starter Island.",
        )
        embed.add_field(name="Mentor", value=mentor_data['title'], inline=True)
        embed.add_field(
            name="Stats",
            value=(
                f"❤️ HP: {character['hp']}/{character['max_hp']}\n"
                f"⚔️ ATK: {character['attack']} | 🛡️ DEF: {character['defense']} | 💨 SPD: {character['speed']}"
            ),
            inline=False,
        )
        embed.add_field(name="Coins", value=f"💰 {character['coins']:,}", inline=True)
        embed.set_footer(text="Use `a h` to hunt and `a help` to see every command")
        await send_response(source, embed=embed)

    def mentor_guide_embed(self):
        embed = discord.Embed(
            title="🏴‍☠️ Choose your mentor",
            description="Create your character with `a start <name> <mentor>` or `/start`.",
            color=THEME_COLORS['primary'],
        )
        for key, mentor in MENTORS.items():
            embed.add_field(name=f"{mentor['title']} `{key}`", value=mentor['summary'], inline=False)
        return embed

    async def handle_profile(self, source, target_id: str = None):
        user_id = get_user_id(source)
        if target_id and target_id != user_id:
            character = self.require_target(target_id)
            profile_id = target_id
        else:
            character = self.require_character(user_id)
            profile_id = user_id

        if self.apply_passive_regeneration(character):
            self.save(profile_id, character)

        stats = self.battle.effective_stats(character)
        exp_done, exp_needed = leveling_system.get_exp_progress(character['exp'], character['level'])
        mentor = MENTORS.get(character['mentor'], {})

        embed = discord.Embed(
            title=f"📊 {character['name']}",
            description=f"Level {character['level']} pirate trained by {mentor.get('title', character['mentor'])}",
            color=THEME_COLORS['primary'],
        )
        embed.add_field(name="❤️ Health", value=create_progress_bar(character['hp'], character['max_hp']), inline=False)
        embed.add_field(name="⭐ EXP", value=create_progress_bar(exp_done, exp_needed), inline=False)
        embed.add_field(
            name="⚔️ Combat",
            value=f"ATK: {stats['attack']}\nDEF: {stats['defense']}\nSPD: {stats['speed']}",
            inline=True,
        )
        embed.add_field(
            name="🏆 Record",
            value=(
                f"Wins: {character['wins']} | Losses: {character['losses']}\n"
                f"Win streak: {character['win_streak']} (best {character['highest_streak']})\n"
                f"Hunt streak: {character['hunt_streak']} (best {character['highest_hunt_streak']})"
            ),
            inline=True,
        )
        embed.add_field(name="💰 Coins", value=f"{character['coins']:,}", inline=True)
        embed.add_field(name="📍 Location", value=character['location'].replace('_', ' ').title(), inline=True)
        await send_response(source, embed=embed)

    async def handle_hunt(self, source):
        user_id = get_user_id(source)
        self.check_cooldown(user_id, 'hunt')
        character = self.require_character(user_id)

        if self.apply_passive_regeneration(character):
            self.save(user_id, character)
        if character['hp'] <= 0:
            raise CharacterError.knocked_out()

        monster = get_random_monster(character['level'], self.rng)
        enemy_level = self.rng.randint(*monster['level'])
        self.cooldowns.set(user_id, 'hunt')

        result = self.battle.process_battle(user_id, enemy_level, monster['name'])
        character = self.require_character(user_id)

        embed = discord.Embed(
            title=f"{RARITY_EMOJIS[monster['rarity']]} {monster['rarity'].title()} encounter: {monster['name']}",
            description="\n".join(result.log[-6:]),
            color=get_rarity_color(monster['rarity']),
        )

        if result.won:
            coins = roll_coins(monster, self.rng)
            level_data = self.add_experience(user_id, monster['exp'])
            self.add_coins(user_id, coins, f"Hunted {monster['name']}", 'HUNT')
            character = self.require_character(user_id)
            character['hunt_streak'] = character.get('hunt_streak', 0) + 1
            character['highest_hunt_streak'] = max(character.get('highest_hunt_streak', 0), character['hunt_streak'])
            self.save(user_id, character)

            embed.add_field(name="🎁 Rewards", value=f"⭐ +{monster['exp']} EXP\n💰 +{coins:,} coins", inline=True)
            embed.add_field(name="🔥 Hunt streak", value=str(character['hunt_streak']), inline=True)
            if level_data['levels_gained']:
                embed.add_field(
                    name="⬆️ Level Up!",
                    value=f"Level: {level_data['old_level']} → {level_data['new_level']}",
                    inline=False,
                )
        else:
            character['hunt_streak'] = 0
            self.save(user_id, character)
            embed.add_field(name="💔 Defeat", value="Rest or use a potion before hunting again.", inline=False)

        embed.add_field(name="❤️ HP", value=f"{character['hp']}/{character['max_hp']}", inline=False)
        await send_response(source, embed=embed)

    async def handle_daily(self, source):
        user_id = get_user_id(source)
        self.check_cooldown(user_id, 'daily')
        self.require_character(user_id)

        exp = self.rng.randint(100, 149)
        coins = self.rng.randint(100, 199)
        self.cooldowns.set(user_id, 'daily')
        level_data = self.add_experience(user_id, exp)
        balance = self.add_coins(user_id, coins, "Daily reward", 'DAILY')

        embed = get_success_embed("🎁 Daily reward claimed!", f"⭐ +{exp} EXP\n💰 +{coins:,} coins")
        embed.add_field(name="Balance", value=f"💰 {balance:,}", inline=True)
        if level_data['levels_gained']:
            embed.add_field(name="⬆️ Level Up!", value=f"You reached level {level_data['new_level']}!", inline=True)
        embed.set_footer(text=f"Come back in {format_remaining(self.cooldowns.remaining(user_id, 'daily'))}")
        await send_response(source, embed=embed)

    async def handle_balance(self, source):
        user_id = get_user_id(source)
        character = self.require_character(user_id)

        embed = discord.Embed(title=f"💰 {character['name']}'s wallet", color=THEME_COLORS['gold'])
        embed.add_field(name="Coins", value=f"{character['coins']:,}", inline=True)
        embed.add_field(name="Bank", value=f"{character.get('bank', 0):,}", inline=True)

        recent = character.get('transactions', [])[-5:]
        if recent:
            lines = [
                f"{'+' if tx['amount'] >= 0 else ''}{tx['amount']:,} · {tx['description']}"
                for tx in reversed(recent)
            ]
            embed.add_field(name="Recent transactions", value="\n".join(lines), inline=False)
        await send_response(source, embed=embed)

    async def handle_give(self, source, target_id: str, amount: int):
        user_id = get_user_id(source)
        if str(target_id) == user_id:
            raise CommandError.invalid_args("You can't give coins to yourself!")
        if amount is None or amount <= 0:
            raise EconomyError.invalid_amount(amount)

        sender = self.require_character(user_id)
        receiver = self.require_target(target_id)
        if sender['coins'] < amount:
            raise EconomyError.insufficient_funds(amount, sender['coins'])

        self.remove_coins(user_id, amount, f"Gift to {receiver['name']}", 'TRANSFER')
        self.add_coins(target_id, amount, f"Gift from {sender['name']}", 'TRANSFER')
        self.logger.info("%s gave %d coins to %s", user_id, amount, target_id)

        embed = get_success_embed(
            "💸 Coins sent!",
            f"{get_user(source).mention} gave **{amount:,}** coins to **{receiver['name']}**.",
        )
        await send_response(source, embed=embed)

    async def handle_reset(self, source, confirmation: str = None):
        user_id = get_user_id(source)
        self.require_character(user_id)
        if confirmation != RESET_CONFIRMATION:
            raise CommandError.invalid_args(
                f"Type `a reset {RESET_CONFIRMATION}` to delete your character. This can't be undone!"
            )

        self.delete_character(user_id)
        self.logger.info("Character for %s was reset", user_id)
        await send_response(
            source,
            embed=get_success_embed("🗑️ Character deleted", "Use `/start` to begin a new adventure."),
        )
