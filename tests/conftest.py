import itertools
import random

import pytest
from typefall.session import FallingSession


def make_session(words=("quick",), width=80, height=30, seed=0):
    feed = itertools.cycle(words)
    return FallingSession(
        width=width,
        height=height,
        next_word=lambda: next(feed),
        rng=random.Random(seed),
    )


@pytest.fixture
def session():
    s = make_session()
    # keep the spawner out of the way unless a test wants it
    s.spawn_countdown = 1000
    return s


@pytest.fixture
def new_session():
    return make_session
