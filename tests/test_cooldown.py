from utils.cooldown import CooldownManager, format_remaining, get_cooldown_message

from tests.conftest import FakeClock


def test_format_remaining_picks_largest_units():
    assert format_remaining(3725) == "1h 2m"
    assert format_remaining(185) == "3m 5s"
    assert format_remaining(12) == "12s"
    assert format_remaining(-5) == "0s"


def test_cooldown_message_names_the_command():
    message = get_cooldown_message("hunt", 75)
    assert "`hunt`" in message
    assert "1m 15s" in message


def test_set_blocks_until_expiry_then_evicts_lazily():
    clock = FakeClock()
    manager = CooldownManager(durations={"hunt": 15}, clock=clock)

    manager.set("1", "hunt")
    assert manager.check("1", "hunt") is False
    assert manager.remaining("1", "hunt") == 15

    clock.advance(14.5)
    assert manager.remaining("1", "hunt") == 1  # rounded up

    clock.advance(0.5)
    assert manager.check("1", "hunt") is True
    assert manager.remaining("1", "hunt") == 0
    assert len(manager) == 0


def test_cooldowns_are_per_user_and_per_command():
    clock = FakeClock()
    manager = CooldownManager(durations={"hunt": 15, "daily": 86400}, clock=clock)

    manager.set(1, "hunt")
    assert manager.check("1", "hunt") is False
    assert manager.check("1", "daily") is True
    assert manager.check("2", "hunt") is True


def test_explicit_duration_overrides_table():
    clock = FakeClock()
    manager = CooldownManager(durations={"hunt": 15}, clock=clock)
    manager.set("1", "hunt", duration=100)
    assert manager.remaining("1", "hunt") == 100


def test_unknown_command_has_no_cooldown():
    manager = CooldownManager(durations={}, clock=FakeClock())
    manager.set("1", "dance")
    assert manager.check("1", "dance") is True


def test_cooldown_message_uses_remaining_time():
    clock = FakeClock()
    manager = CooldownManager(durations={"train": 300}, clock=clock)
    manager.set("1", "train")
    clock.advance(0.5)

    message = get_cooldown_message("train", manager.remaining("1", "train"))
    assert "5m 0s" in message


def test_sweep_evicts_expired_entries_and_empty_users():
    clock = FakeClock()
    manager = CooldownManager(durations={"hunt": 15, "daily": 86400}, clock=clock)
    manager.set("1", "hunt")
    manager.set("2", "hunt")
    manager.set("2", "daily")

    clock.advance(20)
    removed = manager.sweep()

    assert removed == 2
    assert len(manager) == 1
    assert manager.check("2", "daily") is False
    assert "1" not in manager._expiries


def test_sweep_accepts_explicit_now():
    clock = FakeClock()
    manager = CooldownManager(durations={"hunt": 15}, clock=clock)
    manager.set("1", "hunt")
    assert manager.sweep(now=clock.now + 1) == 0
    assert manager.sweep(now=clock.now + 15) == 1


def test_clear_single_user_and_everyone():
    manager = CooldownManager(durations={"hunt": 15}, clock=FakeClock())
    manager.set("1", "hunt")
    manager.set("2", "hunt")

    manager.clear("1")
    assert manager.check("1", "hunt") is True
    assert manager.check("2", "hunt") is False

    manager.clear()
    assert len(manager) == 0
