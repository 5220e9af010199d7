import logging
import random
import time

from services.battle import BattleService
from services.character import CharacterService
from services.duel import DuelService
from services.equipment import EquipmentService
from services.gambling import GamblingService
from services.help import HelpService
from services.inventory import InventoryService
from services.leaderboard import LeaderboardService
from services.location import LocationService
from services.mentor import MentorService
from services.quiz import QuizService
from services.shop import ShopService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Builds every game service over one store and wires their references."""

    def __init__(self, store, rng=random, cooldowns=None, clock=time.time):
        self.store = store
        options = {'rng': rng, 'cooldowns': cooldowns, 'clock': clock}

        self.battle = BattleService(store, **options)
        self.character = CharacterService(store, **options)
        self.inventory = InventoryService(store, **options)
        self.equipment = EquipmentService(store, **options)
        self.shop = ShopService(store, **options)
        self.mentor = MentorService(store, **options)
        self.location = LocationService(store, **options)
        self.duel = DuelService(store, **options)
        self.gambling = GamblingService(store, **options)
        self.quiz = QuizService(store, **options)
        self.leaderboard = LeaderboardService(store, **options)
        self.help = HelpService(store, **options)

        self.character.battle = self.battle
        self.character.duel = self.duel
        self.character.quiz = self.quiz
        self.duel.battle = self.battle
        self.equipment.inventory = self.inventory
        self.shop.inventory = self.inventory
        self.mentor.character = self.character
        self.gambling.character = self.character
        self.quiz.character = self.character
        self.help.gambling = self.gambling

    def cleanup(self):
        """Periodic housekeeping: expire stale duels and quizzes, then flush the store."""
        expired = self.duel.cleanup()
        if expired:
            logger.info("Expired %d pending duel entries", expired)
        if self.quiz.cleanup():
            logger.info("Expired unanswered quizzes")
        self.store.save()
