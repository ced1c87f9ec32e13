"""Pytest configuration and fixtures for marble GA tests."""

import random

import pytest

from marble_ga.protocols import Goal, LaunchSite
from tests.fakes.fake_simulation import FakeSimulation


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def fake_simulation():
    """A fake simulation whose agents settle three ticks after launch."""
    return FakeSimulation()


@pytest.fixture
def goal():
    return Goal(650.0, 150.0, diameter=40.0)


@pytest.fixture
def launch_site():
    return LaunchSite(100.0, 500.0, visual_identity="individual", size=20.0)
