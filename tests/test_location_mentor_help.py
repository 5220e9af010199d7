import pytest

from data.game_data import get_location_tier
from utils.errors import CooldownError, GameError

from tests.conftest import FakeMessage, FakeUser


@pytest.mark.parametrize("level, tier", [(1, "STARTER"), (5, "STARTER"), (10, "INTERMEDIATE"), (15, "INTERMEDIATE"), (20, "ADVANCED")])
def test_location_tiers(level, tier):
    assert get_location_tier(level) == tier


def test_travel_moves_character(services, player):
    services.store.get("1")["level"] = 5
    location = services.location.travel("1", "syrup_village")

    assert location["level"] == 5
    assert services.store.get("1")["location"] == "syrup_village"


@pytest.mark.parametrize(
    "destination, code",
    [("grand_line", "LOCATION_NOT_FOUND"), ("starter_island", "ALREADY_THERE"), ("baratie", "LEVEL_TOO_LOW")],
)
def test_travel_errors(services, player, destination, code):
    with pytest.raises(GameError) as exc_info:
        services.location.travel("1", destination)
    assert exc_info.value.code == code
    assert services.store.get("1")["location"] == "starter_island"


@pytest.mark.asyncio
async def test_map_marks_current_and_locked_islands(services, player):
    message = FakeMessage("a m", player)
    await services.location.handle_map_view(message)

    embed = message.replies[0]["embed"]
    starter = embed.fields[0].value
    assert "📍 🏝️ Starter Island" in starter
    assert "✅ 🏝️ Foosha Village" in starter
    assert "🔒 🏘️ Syrup Village" in starter


@pytest.mark.asyncio
async def test_training_grants_exp_and_progress(services, player, clock):
    message = FakeMessage("a t", player)
    await services.mentor.handle_training(message)

    character = services.store.get("1")
    assert character["exp"] == 50
    assert character["mentor_progress"] == 1

    with pytest.raises(CooldownError):
        await services.mentor.handle_training(message)

    clock.advance(300)
    await services.mentor.handle_training(message)
    assert services.store.get("1")["mentor_progress"] == 2


@pytest.mark.asyncio
async def test_help_lists_every_category(services):
    message = FakeMessage("a help", FakeUser(77))
    await services.help.handle_help(message)

    embed = message.replies[0]["embed"]
    assert [field.name for field in embed.fields] == [
        "📊 Character", "🧭 Adventure", "💰 Economy", "🎒 Items", "🤺 Duels", "📖 Info",
    ]
    assert "`a p`" in embed.fields[0].value


@pytest.mark.asyncio
async def test_help_topics(services):
    message = FakeMessage("a help battle", FakeUser(77))
    await services.help.handle_help(message, "battle")
    await services.help.handle_help(message, "gamble")
    assert message.replies[0]["embed"].title == "⚔️ Battle Guide"
    assert message.replies[1]["embed"].title == "🎰 Slot Machine Guide"

    with pytest.raises(GameError) as exc_info:
        await services.help.handle_help(message, "cooking")
    assert exc_info.value.code == "UNKNOWN_HELP_TOPIC"
