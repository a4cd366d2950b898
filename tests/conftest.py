import os
import random
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from games import GameSession  # noqa: E402
from settings import Settings  # noqa: E402
from state_machine import GameStateMachine  # noqa: E402
from systems.leaderboard import PlayerRegistry, Scoreboard  # noqa: E402


@pytest.fixture
def session():
    return GameSession(rng=random.Random(1))


@pytest.fixture
def sounds():
    mock = MagicMock()
    mock.enabled = True
    return mock


@pytest.fixture
def machine(sounds):
    return GameStateMachine(
        Settings(),
        sounds,
        PlayerRegistry(["Ann", "Bob", "Cy"]),
        Scoreboard(),
        rng=random.Random(7),
    )
