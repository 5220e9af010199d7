"""Battle resolution for hunts and duels."""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from data.game_data import ITEMS
from services.base import BaseService
from utils.config import BATTLE

# Upper bound on exchanged blows; damage is never below the minimum so fights end well before this
MAX_ROUNDS = 200


@dataclass
class BattleResult:
    won: bool
    log: List[str] = field(default_factory=list)
    remaining_health: int = 0
    enemy: Dict = field(default_factory=dict)


@dataclass
class DuelResult:
    winner_id: str
    loser_id: str
    log: List[str] = field(default_factory=list)


def build_enemy(level: int, name: str = "Monster") -> Dict:
    return {
        'name': name,
        'level': level,
        'hp': 50 + level * 10,
        'attack': 5 + level * 2,
        'defense': 5 + level * 2,
    }


class BattleService(BaseService):

    def roll_damage(self, attack: float, defense: float) -> Tuple[int, bool]:
        """Damage for one blow and whether it was a critical hit."""
        damage = max(attack - defense / 2, BATTLE['min_damage'])
        is_crit = self.rng.random() < BATTLE['crit_chance']
        if is_crit:
            damage *= BATTLE['crit_multiplier']
        return math.floor(damage), is_crit

    def calculate_damage(self, attack: float, defense: float) -> int:
        return self.roll_damage(attack, defense)[0]

    def effective_stats(self, character: Dict, now: float = None) -> Dict[str, int]:
        """Base stats plus equipped items plus buffs that haven't expired."""
        now = self.clock() if now is None else now
        stats = {
            'attack': character.get('attack', 0),
            'defense': character.get('defense', 0),
            'speed': character.get('speed', 0),
        }

        for item_id in (character.get('equipment') or {}).values():
            if not item_id or item_id not in ITEMS:
                continue
            for stat, value in ITEMS[item_id].get('stats', {}).items():
                stats[stat] = stats.get(stat, 0) + value

        for buff in character.get('active_buffs', []):
            if buff['expires_at'] > now:
                stats[buff['stat']] = stats.get(buff['stat'], 0) + buff['value']

        return stats

    def _blow(self, attacker_name, defender_name, attack, defense, log):
        damage, is_crit = self.roll_damage(attack, defense)
        crit_text = " **Critical hit!**" if is_crit else ""
        log.append(f"⚔️ {attacker_name} deals {damage} damage to {defender_name}!{crit_text}")
        return damage

    def process_battle(self, user_id, enemy_level: int, enemy_name: str = "Monster") -> BattleResult:
        """Fight a generated enemy and persist the outcome on the character."""
        character = self.require_character(user_id)
        stats = self.effective_stats(character)
        enemy = build_enemy(enemy_level, enemy_name)

        player_hp = character.get('hp', 0)
        enemy_hp = enemy['hp']
        log = [f"🏴‍☠️ {character['name']} engages {enemy_name} (Lv.{enemy_level})!"]
        won = False

        for _ in range(MAX_ROUNDS):
            enemy_hp -= self._blow(character['name'], enemy_name, stats['attack'], enemy['defense'], log)
            if enemy_hp <= 0:
                won = True
                break
            player_hp -= self._blow(enemy_name, character['name'], enemy['attack'], stats['defense'], log)
            if player_hp <= 0:
                break

        character['hp'] = max(0, player_hp)
        if won:
            character['wins'] = character.get('wins', 0) + 1
            log.append(f"🎉 {enemy_name} was defeated!")
        else:
            character['losses'] = character.get('losses', 0) + 1
            log.append(f"💀 {character['name']} was defeated by {enemy_name}...")
        self.save(user_id, character)

        self.logger.info("Battle for %s vs %s Lv.%d: %s", user_id, enemy_name, enemy_level, "won" if won else "lost")
        return BattleResult(won=won, log=log, remaining_health=character['hp'], enemy=enemy)

    def simulate_duel(self, challenger_id, challenged_id) -> DuelResult:
        """Fight two players from full health; the faster one strikes first.

        Duels don't change anybody's HP. Win and loss records are left to the caller.
        """
        fighters = []
        for user_id in (challenger_id, challenged_id):
            character = self.require_character(user_id)
            fighters.append({
                'id': str(user_id),
                'name': character['name'],
                'hp': character.get('max_hp', 100),
                'stats': self.effective_stats(character),
            })

        first, second = fighters
        if second['stats']['speed'] > first['stats']['speed']:
            first, second = second, first

        log = [f"💨 {first['name']} is faster and strikes first!"]
        attacker, defender = first, second
        for _ in range(MAX_ROUNDS * 2):
            defender['hp'] -= self._blow(
                attacker['name'], defender['name'],
                attacker['stats']['attack'], defender['stats']['defense'], log,
            )
            if defender['hp'] <= 0:
                break
            attacker, defender = defender, attacker

        if defender['hp'] <= 0:
            winner, loser = attacker, defender
        else:
            winner, loser = (first, second) if first['hp'] >= second['hp'] else (second, first)
        log.append(f"🏆 {winner['name']} wins the duel!")
        return DuelResult(winner_id=winner['id'], loser_id=loser['id'], log=log)
