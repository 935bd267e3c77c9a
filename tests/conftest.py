"""Shared pytest fixtures for equity tests."""

from random import Random

import matplotlib
import pytest

from config.settings import ExecutionConfig
from poker.cardset import CardSet

matplotlib.use("Agg")


@pytest.fixture
def rng():
    """Provide a reproducible random source."""
    return Random(42)


@pytest.fixture
def full_deck():
    """A fresh 52-card deck."""
    return CardSet.full()


@pytest.fixture
def serial_config():
    """Run chunks inline with a fixed seed."""
    return ExecutionConfig(workers=1, chunk_size=500, seed=1234)


@pytest.fixture(params=[1, 5, 52, 60])
def draw_count(request):
    """Parametrize over draw sizes, including more than the deck holds."""
    return request.param
