import pytest

from services.quiz import reward_multiplier
from ui_elements import QuizView
from utils.dispatcher import handle_message_command
from utils.errors import CommandError, CooldownError, GameError

from tests.conftest import FakeInteraction, FakeMessage, FakeUser


@pytest.mark.parametrize("streak, multiplier", [(0, 1.0), (1, 1.1), (5, 1.5), (10, 2.0), (25, 2.0)])
def test_reward_multiplier_is_capped(streak, multiplier):
    assert reward_multiplier(streak) == pytest.approx(multiplier)


def test_correct_answer_pays_streak_reward(services, player):
    question = services.quiz.start("1")
    assert question["answer"] == "b"

    result = services.quiz.answer("1", "B")

    assert result.correct is True
    assert (result.streak, result.exp, result.coins) == (1, 55, 55)
    character = services.store.get("1")
    assert character["quiz_streak"] == 1
    assert character["exp"] == 55
    assert character["coins"] == 1055
    assert character["transactions"][-1]["type"] == "QUIZ"
    assert "1" not in services.quiz.active


def test_streak_grows_the_reward(services, player):
    services.store.get("1")["quiz_streak"] = 4
    services.quiz.start("1")

    result = services.quiz.answer("1", "b")
    assert result.streak == 5
    assert result.coins == 75


def test_wrong_answer_resets_streak(services, player):
    services.store.get("1")["quiz_streak"] = 3
    services.quiz.start("1")

    result = services.quiz.answer("1", "a")

    assert result.correct is False
    assert result.answer == "b"
    character = services.store.get("1")
    assert character["quiz_streak"] == 0
    assert character["coins"] == 1000


def test_one_open_question_at_a_time(services, player):
    services.quiz.start("1")
    with pytest.raises(GameError) as exc_info:
        services.quiz.start("1")
    assert exc_info.value.code == "QUIZ_ACTIVE"


def test_answer_without_question(services, player):
    with pytest.raises(GameError) as exc_info:
        services.quiz.answer("1", "a")
    assert exc_info.value.code == "NO_ACTIVE_QUIZ"


def test_unknown_letter_keeps_question_open(services, player):
    services.quiz.start("1")
    with pytest.raises(CommandError):
        services.quiz.answer("1", "e")
    assert "1" in services.quiz.active


def test_quiz_cooldown(services, player, clock):
    services.quiz.start("1")
    services.quiz.answer("1", "b")

    with pytest.raises(CooldownError):
        services.quiz.start("1")

    clock.advance(300)
    services.quiz.start("1")


def test_late_answer_resets_streak(services, player, clock):
    services.store.get("1")["quiz_streak"] = 2
    services.quiz.start("1")
    clock.advance(31)

    with pytest.raises(GameError) as exc_info:
        services.quiz.answer("1", "b")
    assert exc_info.value.code == "QUIZ_EXPIRED"
    assert services.store.get("1")["quiz_streak"] == 0
    assert "1" not in services.quiz.active


def test_housekeeping_expires_unanswered_quizzes(services, player, clock):
    services.store.get("1")["quiz_streak"] = 2
    services.quiz.start("1")
    clock.advance(29)
    services.cleanup()
    assert "1" in services.quiz.active

    clock.advance(2)
    services.cleanup()
    assert "1" not in services.quiz.active
    assert services.store.get("1")["quiz_streak"] == 0


def test_reset_drops_open_question(services, player):
    services.quiz.start("1")
    services.character.delete_character("1")
    assert services.quiz.active == {}


@pytest.mark.asyncio
async def test_quiz_through_messages(services, player):
    ask = FakeMessage("a q", player)
    await handle_message_command(ask, services)

    reply = ask.replies[0]
    assert reply["embed"].title == "📝 Quiz Time!"
    view = reply["view"]
    assert isinstance(view, QuizView)
    assert len(view.children) == 4
    assert view.message is ask

    answer = FakeMessage("a q b", player)
    await handle_message_command(answer, services)
    assert answer.replies[0]["embed"].title == "✅ Correct!"
    assert services.store.get("1")["coins"] == 1055


@pytest.mark.asyncio
async def test_answer_button(services, player):
    interaction = FakeInteraction(player)
    await services.quiz.handle_quiz(interaction)
    view = interaction.sent[0]["view"]
    assert view.message is interaction.message

    click = FakeInteraction(player)
    await view.children[1].callback(click)

    assert click.response.edited[0]["embed"].title == "✅ Correct!"
    assert click.response.edited[0]["view"] is None
    assert view.is_finished()
    assert services.store.get("1")["quiz_streak"] == 1


@pytest.mark.asyncio
async def test_buttons_belong_to_the_quiz_owner(services, player):
    message = FakeMessage("a q", player)
    await services.quiz.handle_quiz(message)
    view = message.replies[0]["view"]

    intruder = FakeInteraction(FakeUser(2))
    assert await view.interaction_check(intruder) is False
    assert intruder.sent[0]["ephemeral"] is True
    assert await view.interaction_check(FakeInteraction(player)) is True


@pytest.mark.asyncio
async def test_unanswered_quiz_times_out(services, player):
    services.store.get("1")["quiz_streak"] = 2
    message = FakeMessage("a q", player)
    await services.quiz.handle_quiz(message)
    view = message.replies[0]["view"]

    await view.on_timeout()

    assert message.edits[0]["embed"].title == "⏰ Time's Up!"
    assert message.edits[0]["view"] is None
    assert services.store.get("1")["quiz_streak"] == 0
    assert services.quiz.active == {}
