"""Experience and leveling rules for A4A pirates."""

from typing import Dict

from utils.config import STARTER_STATS

# Stat growth per level gained
LEVEL_UP_BONUS = {
    'attack': 2,
    'defense': 2,
}

class LevelingSystem:
    """Handles experience thresholds and level-up stat growth."""
    def __init__(self, exp_per_level: int = 1000, hp_per_level: int = 10):
        self.exp_per_level = exp_per_level
        self.hp_per_level = hp_per_level

    def get_exp_needed(self, level: int) -> int:
        """Total EXP required to advance past `level`"""
        return level * self.exp_per_level

    def get_max_health(self, level: int) -> int:
        return STARTER_STATS['health'] + (level - 1) * self.hp_per_level

    def get_level_from_exp(self, total_exp: int, current_level: int = 1) -> int:
        level = current_level
        while total_exp >= self.get_exp_needed(level):
            level += 1
        return level

    def get_exp_progress(self, total_exp: int, current_level: int):
        """EXP earned inside the current level and the size of that level"""
        level_start = self.get_exp_needed(current_level - 1) if current_level > 1 else 0
        needed = self.get_exp_needed(current_level) - level_start
        earned = min(max(0, total_exp - level_start), needed)
        return earned, needed

    def apply_experience(self, character: Dict, amount: int) -> Dict:
        """Add EXP to a character dict in place and apply any level ups"""
        old_level = character.get('level', 1)
        character['exp'] = character.get('exp', 0) + amount
        new_level = self.get_level_from_exp(character['exp'], old_level)
        levels_gained = new_level - old_level

        if levels_gained > 0:
            character['level'] = new_level
            for stat, bonus in LEVEL_UP_BONUS.items():
                character[stat] = character.get(stat, 0) + bonus * levels_gained
            character['max_hp'] = max(character.get('max_hp', 0), self.get_max_health(new_level))
            character['hp'] = character['max_hp']  # Full heal on level up

        return {
            "old_level": old_level,
            "new_level": new_level,
            "exp_gained": amount,
            "total_exp": character['exp'],
            "levels_gained": levels_gained,
        }

# Global instance
leveling_system = LevelingSystem()
