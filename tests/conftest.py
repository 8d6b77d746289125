import random

import pytest

from flappy_rounds.config import GameConfig
from flappy_rounds.match import FlappyMatch


@pytest.fixture()
def config():
    return GameConfig()


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def make_match(config, rng):
    def _make(num_players=1, num_rounds=1, **kwargs):
        kwargs.setdefault("config", config)
        kwargs.setdefault("rng", rng)
        return FlappyMatch(num_players, num_rounds, **kwargs)
    return _make


@pytest.fixture()
def crash_turn():
    """Tick an active turn with no pipes until the bird falls out of the board."""
    def _crash(match):
        for _ in range(1000):
            match.tick()
            if match.sequencer.turn_ended:
                return
        raise AssertionError("turn never ended")
    return _crash
