import pytest

from utils.dispatcher import handle_message_command
from utils.errors import CharacterError, CommandError, CooldownError, GameError

from tests.conftest import FakeMessage


def test_challenge_is_pending_for_both_players(services, player, rival):
    duel = services.duel.challenge("1", "2")

    assert duel["challenger_name"] == "Zoro"
    assert duel["challenged_name"] == "Sanji"
    assert services.duel.get_pending("1") is duel
    assert services.duel.get_pending("2") is duel


def test_cannot_duel_yourself(services, player):
    with pytest.raises(CommandError):
        services.duel.challenge("1", "1")


def test_challenged_player_needs_a_character(services, player):
    with pytest.raises(CharacterError) as exc_info:
        services.duel.challenge("1", "404")
    assert exc_info.value.code == "TARGET_NOT_FOUND"


def test_only_one_pending_duel_per_player(services, player, rival):
    services.character.create_character("3", "Usopp", "LYuka")
    services.duel.challenge("1", "2")

    with pytest.raises(GameError) as exc_info:
        services.duel.challenge("3", "2")
    assert exc_info.value.code == "DUEL_PENDING"


def test_accept_settles_the_duel(services, player, rival):
    services.store.get("1")["win_streak"] = 2
    services.duel.challenge("1", "2")

    duel, result = services.duel.accept("2")

    # Equal speed: the challenger strikes first and lands the last blow
    assert result.winner_id == "1"
    winner = services.store.get("1")
    loser = services.store.get("2")
    assert winner["wins"] == 1
    assert winner["win_streak"] == 3
    assert winner["highest_streak"] == 3
    assert loser["losses"] == 1
    assert loser["win_streak"] == 0
    assert services.duel.get_pending("1") is None
    assert services.duel.get_pending("2") is None


def test_challenger_cannot_accept_own_duel(services, player, rival):
    services.duel.challenge("1", "2")
    with pytest.raises(GameError) as exc_info:
        services.duel.accept("1")
    assert exc_info.value.code == "NO_PENDING_DUEL"
    assert services.duel.get_pending("2") is not None


def test_either_player_can_reject(services, player, rival):
    services.duel.challenge("1", "2")
    services.duel.reject("1")
    assert services.duel.get_pending("2") is None

    with pytest.raises(GameError):
        services.duel.reject("2")


def test_challenge_expires(services, player, rival, clock):
    services.duel.challenge("1", "2")
    clock.advance(301)

    assert services.duel.cleanup() == 2
    with pytest.raises(GameError):
        services.duel.accept("2")


def test_challenge_cooldown(services, player, rival, clock):
    services.duel.challenge("1", "2")
    services.duel.reject("2")

    with pytest.raises(CooldownError):
        services.duel.challenge("1", "2")

    clock.advance(60)
    services.duel.challenge("1", "2")


@pytest.mark.asyncio
async def test_duel_handlers_reply(services, player, rival):
    challenge = FakeMessage("a duel <@2>", player)
    await services.duel.handle_duel(challenge, "2")
    assert challenge.replies[0]["embed"].title == "⚔️ Duel Challenge!"

    answer = FakeMessage("a accept", rival)
    await services.duel.handle_accept(answer)
    embed = answer.replies[0]["embed"]
    assert embed.title == "⚔️ Duel Results"
    assert embed.fields[0].value == "Zoro"


@pytest.mark.asyncio
async def test_reset_drops_pending_duel(services, player, rival):
    services.duel.challenge("1", "2")

    await handle_message_command(FakeMessage("a reset CONFIRM", player), services)
    assert services.duel.get_pending("2") is None

    answer = FakeMessage("a accept", rival)
    await handle_message_command(answer, services)
    assert "don't have a duel challenge" in answer.replies[0]["content"]


def test_accept_after_challenger_vanishes(services, player, rival):
    services.duel.challenge("1", "2")
    services.store.delete("1")

    with pytest.raises(CharacterError) as exc_info:
        services.duel.accept("2")
    assert exc_info.value.code == "TARGET_NOT_FOUND"
    assert services.duel.get_pending("2") is None
