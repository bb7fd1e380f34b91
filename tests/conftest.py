"""Pytest configuration and fixtures for RailOptic tests."""

import random

import pytest


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def world(seeded_rng):
    """Default four-train scenario with a deterministic random source."""
    from core.world import RailWorld

    return RailWorld(rng=seeded_rng)


@pytest.fixture
def contention_trains():
    """Two track-1 trains inside the approach zone, A outranking B."""
    from core.trains import Train

    return [
        Train(id="A", name="Alpha", priority=9, position=72, target_position=95, speed=1.0),
        Train(id="B", name="Bravo", priority=5, position=78, target_position=95, speed=1.0),
    ]


@pytest.fixture
def contention_world(contention_trains, seeded_rng):
    from core.world import RailWorld

    return RailWorld(trains=contention_trains, rng=seeded_rng)
