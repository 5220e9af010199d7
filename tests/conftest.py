from __future__ import annotations

import itertools

import pytest

from services.container import ServiceContainer
from services.storage import GameStore
from utils.cooldown import CooldownManager


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FixedRandom:
    """Deterministic rng: cycles through `values`, randint gives the low end, choice the first item."""

    def __init__(self, values=(0.5,)) -> None:
        self._values = itertools.cycle(values)

    def random(self) -> float:
        return next(self._values)

    def randint(self, low: int, high: int) -> int:
        return low

    def choice(self, seq):
        return seq[0]


class FakeUser:
    def __init__(self, user_id, name: str = "tester", bot: bool = False) -> None:
        self.id = int(user_id)
        self.name = name
        self.bot = bot
        self.mention = f"<@{user_id}>"


class FakeMessage:
    def __init__(self, content: str, author: FakeUser) -> None:
        self.content = content
        self.author = author
        self.replies: list[dict] = []
        self.edits: list[dict] = []

    async def reply(self, content=None, embed=None, view=None):
        self.replies.append({"content": content, "embed": embed, "view": view})
        return self

    async def edit(self, **kwargs):
        self.edits.append(kwargs)
        return self


class FakeResponse:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.edited: list[dict] = []
        self._done = False

    def is_done(self) -> bool:
        return self._done

    async def send_message(self, content=None, embed=None, view=None, ephemeral=False):
        self._done = True
        self.sent.append({"content": content, "embed": embed, "view": view, "ephemeral": ephemeral})

    async def edit_message(self, content=None, embed=None, view=None):
        self._done = True
        self.edited.append({"content": content, "embed": embed, "view": view})


class FakeFollowup:
    def __init__(self) -> None:
        self.sent: list[dict] = []

    async def send(self, content=None, embed=None, view=None, ephemeral=False):
        self.sent.append({"content": content, "embed": embed, "view": view, "ephemeral": ephemeral})


class FakeInteraction:
    def __init__(self, user: FakeUser) -> None:
        self.user = user
        self.response = FakeResponse()
        self.followup = FakeFollowup()
        self.message = FakeMessage("", user)

    @property
    def sent(self) -> list[dict]:
        return self.response.sent + self.followup.sent

    async def original_response(self) -> FakeMessage:
        return self.message


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture()
def store(tmp_path) -> GameStore:
    return GameStore(str(tmp_path / "characters.json"))


@pytest.fixture()
def cooldowns(clock) -> CooldownManager:
    return CooldownManager(clock=clock)


@pytest.fixture()
def services(store, rng, cooldowns, clock) -> ServiceContainer:
    return ServiceContainer(store, rng=rng, cooldowns=cooldowns, clock=clock)


@pytest.fixture()
def player(services):
    """A level 1 Tierison pirate (11 ATK, 11 DEF, 11 SPD, 100 HP, 1000 coins)."""
    services.character.create_character("1", "Zoro", "Tierison")
    return FakeUser(1, "zoro")


@pytest.fixture()
def rival(services):
    services.character.create_character("2", "Sanji", "Tierison")
    return FakeUser(2, "sanji")
