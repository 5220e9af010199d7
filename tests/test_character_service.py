import pytest

from utils.errors import CharacterError, CommandError, CooldownError, EconomyError

from tests.conftest import FakeMessage, FakeUser


def test_create_character_applies_mentor_multipliers(services):
    character = services.character.create_character("10", "Luffy", "yb")

    assert character["mentor"] == "YB"
    assert character["max_hp"] == 110
    assert character["hp"] == 110
    assert character["attack"] == 11
    assert character["defense"] == 9
    assert character["speed"] == 12
    assert character["coins"] == 1000
    assert character["location"] == "starter_island"
    assert services.store.get("10") is not None


@pytest.mark.parametrize(
    "name, mentor, error_code",
    [
        ("Luffy", "Shanks", "INVALID_MENTOR"),
        ("L", "YB", "INVALID_NAME"),
        ("x" * 33, "YB", "INVALID_NAME"),
    ],
)
def test_create_character_validates_input(services, name, mentor, error_code):
    with pytest.raises(CharacterError) as exc_info:
        services.character.create_character("10", name, mentor)
    assert exc_info.value.code == error_code


def test_create_character_twice_fails(services, player):
    with pytest.raises(CharacterError) as exc_info:
        services.character.create_character("1", "Zoro Again", "YB")
    assert exc_info.value.code == "CHARACTER_ALREADY_EXISTS"


def test_add_experience_levels_up(services, player):
    result = services.character.add_experience("1", 1000)
    character = services.character.get_character("1")

    assert result["levels_gained"] == 1
    assert character["level"] == 2
    assert character["attack"] == 13
    assert character["defense"] == 13
    assert character["max_hp"] == 110
    assert character["hp"] == 110


def test_add_experience_can_gain_several_levels(services, player):
    result = services.character.add_experience("1", 2500)
    assert result["new_level"] == 3
    assert services.character.get_character("1")["attack"] == 15


def test_add_experience_below_threshold(services, player):
    result = services.character.add_experience("1", 999)
    assert result["levels_gained"] == 0
    assert services.character.get_character("1")["level"] == 1


def test_coins_and_transaction_log(services, player):
    services.character.add_coins("1", 250, "Found treasure")
    services.character.remove_coins("1", 50, "Bought rope")

    character = services.character.get_character("1")
    assert character["coins"] == 1200
    assert [tx["amount"] for tx in character["transactions"]] == [250, -50]


def test_remove_coins_insufficient(services, player):
    with pytest.raises(EconomyError) as exc_info:
        services.character.remove_coins("1", 5000, "Ship")
    assert exc_info.value.details["missing"] == 4000


def test_transaction_log_keeps_latest_twenty(services, player):
    for i in range(25):
        services.character.add_coins("1", 1, f"tip {i}")
    transactions = services.character.get_character("1")["transactions"]
    assert len(transactions) == 20
    assert transactions[-1]["description"] == "tip 24"


def test_passive_regeneration(services, player, clock):
    character = services.character.get_character("1")
    character["hp"] = 50

    clock.advance(150)
    healed = services.character.apply_passive_regeneration(character)

    assert healed == 10
    assert character["hp"] == 60
    assert character["last_regen_at"] == clock.now - 30


def test_passive_regeneration_caps_at_max(services, player, clock):
    character = services.character.get_character("1")
    character["hp"] = 95
    clock.advance(600)
    assert services.character.apply_passive_regeneration(character) == 5
    assert character["hp"] == 100


@pytest.mark.asyncio
async def test_hunt_win_rewards_and_streak(services, player):
    message = FakeMessage("a h", player)
    await services.character.handle_hunt(message)

    character = services.character.get_character("1")
    # Level 1 Wild Boar: 60 HP, 7 ATK; the hunter wins after taking eight 5-damage hits
    assert character["hp"] == 60
    assert character["wins"] == 1
    assert character["exp"] == 20
    assert character["coins"] == 1010
    assert character["hunt_streak"] == 1
    assert character["highest_hunt_streak"] == 1
    assert "Wild Boar" in message.replies[0]["embed"].title


@pytest.mark.asyncio
async def test_hunt_loss_resets_streak_and_blocks_when_knocked_out(services, player, clock):
    character = services.character.get_character("1")
    character["hp"] = 5
    character["hunt_streak"] = 3

    await services.character.handle_hunt(FakeMessage("a h", player))
    character = services.character.get_character("1")
    assert character["hp"] == 0
    assert character["losses"] == 1
    assert character["hunt_streak"] == 0

    clock.advance(15)
    character["last_regen_at"] = clock.now
    with pytest.raises(CharacterError) as exc_info:
        await services.character.handle_hunt(FakeMessage("a h", player))
    assert exc_info.value.code == "KNOCKED_OUT"


@pytest.mark.asyncio
async def test_hunt_cooldown(services, player, clock):
    await services.character.handle_hunt(FakeMessage("a h", player))
    with pytest.raises(CooldownError) as exc_info:
        await services.character.handle_hunt(FakeMessage("a h", player))
    assert exc_info.value.remaining == 15

    clock.advance(15)
    await services.character.handle_hunt(FakeMessage("a h", player))
    assert services.character.get_character("1")["hunt_streak"] == 2


@pytest.mark.asyncio
async def test_daily_reward_and_cooldown(services, player):
    await services.character.handle_daily(FakeMessage("a d", player))
    character = services.character.get_character("1")
    assert character["exp"] == 100
    assert character["coins"] == 1100

    with pytest.raises(CooldownError):
        await services.character.handle_daily(FakeMessage("a d", player))


@pytest.mark.asyncio
async def test_balance_lists_recent_transactions(services, player):
    for i in range(7):
        services.character.add_coins("1", 10, f"bounty {i}")
    message = FakeMessage("a b", player)
    await services.character.handle_balance(message)

    fields = {field.name: field.value for field in message.replies[0]["embed"].fields}
    assert fields["Coins"] == "1,070"
    lines = fields["Recent transactions"].splitlines()
    assert len(lines) == 5
    assert "bounty 6" in lines[0]


@pytest.mark.asyncio
async def test_give_transfers_coins(services, player, rival):
    await services.character.handle_give(FakeMessage("a give", player), "2", 300)
    assert services.character.get_character("1")["coins"] == 700
    assert services.character.get_character("2")["coins"] == 1300


@pytest.mark.asyncio
async def test_give_rejects_self_and_unknown_target(services, player):
    with pytest.raises(CommandError):
        await services.character.handle_give(FakeMessage("a give", player), "1", 10)
    with pytest.raises(CharacterError) as exc_info:
        await services.character.handle_give(FakeMessage("a give", player), "999", 10)
    assert exc_info.value.code == "TARGET_NOT_FOUND"


@pytest.mark.asyncio
async def test_give_insufficient_funds(services, player, rival):
    with pytest.raises(EconomyError):
        await services.character.handle_give(FakeMessage("a give", player), "2", 5000)
    assert services.character.get_character("2")["coins"] == 1000


@pytest.mark.asyncio
async def test_reset_requires_confirmation(services, player, cooldowns):
    with pytest.raises(CommandError):
        await services.character.handle_reset(FakeMessage("a reset", player), "yes")
    assert services.character.has_character("1")

    cooldowns.set("1", "hunt")
    await services.character.handle_reset(FakeMessage("a reset", player), "CONFIRM")
    assert not services.character.has_character("1")
    assert cooldowns.check("1", "hunt") is True


@pytest.mark.asyncio
async def test_start_without_args_shows_mentor_guide(services):
    message = FakeMessage("a start", FakeUser(20))
    await services.character.handle_start(message)

    embed = message.replies[0]["embed"]
    assert "Choose your mentor" in embed.title
    assert len(embed.fields) == 4
    assert not services.character.has_character("20")


@pytest.mark.asyncio
async def test_profile_of_other_player(services, player, rival):
    message = FakeMessage("a p", player)
    await services.character.handle_profile(message, "2")
    assert message.replies[0]["embed"].title == "📊 Sanji"

    with pytest.raises(CharacterError):
        await services.character.handle_profile(message, "404")
