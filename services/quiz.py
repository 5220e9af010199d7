"""One Piece trivia with streak-based rewards."""

from dataclasses import dataclass

import discord

from data.quiz_data import QUIZ_QUESTIONS
from services.base import BaseService
from ui_elements import QuizView
from utils.config import QUIZ_TIMEOUT_SECONDS
from utils.errors import CommandError, GameError
from utils.theme_utils import THEME_COLORS, get_user_id, send_response, sent_message

BASE_REWARD = 50
STREAK_BONUS = 0.1
MAX_MULTIPLIER = 2.0


def reward_multiplier(streak: int) -> float:
    return min(1 + streak * STREAK_BONUS, MAX_MULTIPLIER)


@dataclass
class QuizResult:
    correct: bool
    answer: str
    streak: int
    multiplier: float
    exp: int
    coins: int


class QuizService(BaseService):
    """One open question per player; unanswered questions expire and reset the streak."""

    def __init__(self, store, **kwargs):
        super().__init__(store, **kwargs)
        self.character = None  # wired by the ServiceContainer
        self.active = {}

    def start(self, user_id) -> dict:
        user_id = str(user_id)
        pending = self.active.get(user_id)
        if pending is not None:
            if self.clock() <= pending['expires_at']:
                raise GameError("❌ You already have an active quiz!", 'QUIZ_ACTIVE')
            self.expire(user_id)
        self.check_cooldown(user_id, 'quiz')
        self.require_character(user_id)

        question = self.rng.choice(QUIZ_QUESTIONS)
        self.active[user_id] = {
            'question': question,
            'expires_at': self.clock() + QUIZ_TIMEOUT_SECONDS,
        }
        self.cooldowns.set(user_id, 'quiz')
        return question

    def answer(self, user_id, choice: str) -> QuizResult:
        user_id = str(user_id)
        quiz = self.active.get(user_id)
        if quiz is None:
            raise GameError("❌ No active quiz found. Use `a q` to start a new quiz.", 'NO_ACTIVE_QUIZ')
        if self.clock() > quiz['expires_at']:
            self.expire(user_id)
            raise GameError("⏰ Time's up! Your quiz streak has been reset.", 'QUIZ_EXPIRED')

        question = quiz['question']
        choice = (choice or "").strip().lower()
        if choice not in question['options']:
            raise CommandError.invalid_args(
                f"Answer with one of: {', '.join(key.upper() for key in question['options'])}.",
                "a q <answer>",
            )

        del self.active[user_id]
        character = self.require_character(user_id)
        if choice != question['answer']:
            character['quiz_streak'] = 0
            self.save(user_id, character)
            return QuizResult(False, question['answer'], 0, 1.0, 0, 0)

        streak = character.get('quiz_streak', 0) + 1
        multiplier = reward_multiplier(streak)
        reward = int(round(BASE_REWARD * multiplier))
        character['quiz_streak'] = streak
        self.save(user_id, character)
        self.character.add_experience(user_id, reward)
        self.character.add_coins(user_id, reward, "Quiz reward", 'QUIZ')
        self.logger.info("%s answered a quiz correctly (streak %d)", user_id, streak)
        return QuizResult(True, question['answer'], streak, multiplier, reward, reward)

    def expire(self, user_id) -> bool:
        """Drop an unanswered quiz and reset the streak; False when nothing was pending."""
        user_id = str(user_id)
        if self.active.pop(user_id, None) is None:
            return False
        character = self.store.get(user_id)
        if character is not None:
            character['quiz_streak'] = 0
            self.save(user_id, character)
        return True

    def forget(self, user_id):
        self.active.pop(str(user_id), None)

    def cleanup(self) -> int:
        now = self.clock()
        expired = [user_id for user_id, quiz in self.active.items() if now > quiz['expires_at']]
        for user_id in expired:
            self.expire(user_id)
        return len(expired)

    # Embeds

    def question_embed(self, question: dict, streak: int):
        options = "\n".join(f"**{key.upper()}.** {text}" for key, text in question['options'].items())
        embed = discord.Embed(
            title="📝 Quiz Time!",
            description=f"{question['question']}\n\n{options}",
            color=THEME_COLORS['primary'],
        )
        embed.add_field(name="Current Streak", value=str(streak), inline=True)
        embed.add_field(name="Multiplier", value=f"{reward_multiplier(streak):.1f}x", inline=True)
        embed.set_footer(text=f"Answer with the buttons or `a q <letter>` within {QUIZ_TIMEOUT_SECONDS} seconds")
        return embed

    def result_embed(self, result: QuizResult):
        embed = discord.Embed(
            title="✅ Correct!" if result.correct else "❌ Incorrect!",
            description=f"The correct answer was: {result.answer.upper()}",
            color=THEME_COLORS['success'] if result.correct else THEME_COLORS['error'],
        )
        if result.correct:
            embed.add_field(name="Streak", value=str(result.streak), inline=True)
            embed.add_field(name="Multiplier", value=f"{result.multiplier:.1f}x", inline=True)
            embed.add_field(name="Rewards", value=f"+{result.exp} EXP\n+{result.coins} Coins", inline=True)
        else:
            embed.add_field(name="Streak", value="Reset to 0", inline=True)
        return embed

    def timeout_embed(self):
        embed = discord.Embed(
            title="⏰ Time's Up!",
            description="You took too long to answer. Your streak has been reset.",
            color=THEME_COLORS['error'],
        )
        embed.add_field(name="Streak", value="Reset to 0", inline=True)
        return embed

    async def handle_quiz(self, source, choice: str = None):
        user_id = get_user_id(source)
        if choice:
            result = self.answer(user_id, choice)
            await send_response(source, embed=self.result_embed(result))
            return

        question = self.start(user_id)
        streak = self.require_character(user_id).get('quiz_streak', 0)
        view = QuizView(self, user_id, question['options'])
        sent = await send_response(source, embed=self.question_embed(question, streak), view=view)
        view.message = await sent_message(source, sent)
