"""
Shared fixtures for the navigation core tests.
"""

import logging
import random

import pytest

from fathom.config import EngineConfig
from fathom.debug import LOGGER_NAME
from fathom.drone.drone_model import Drone
from fathom.environment.creatures import Creature, Roster
from fathom.environment.geometry import Coordinate, Vector2D
from fathom.sensing.radar import Radar


@pytest.fixture
def config():
    """Default arena configuration."""
    return EngineConfig()


@pytest.fixture
def seeded_rng():
    """Create a seeded random number generator for deterministic tests."""
    return random.Random(42)


@pytest.fixture
def radar(config):
    """Empty radar history."""
    return Radar(config)


@pytest.fixture
def roster():
    """Scan targets of every tier plus two hostiles."""
    return Roster.from_entries([
        (0, 0, 0),
        (1, 1, 1),
        (2, 2, 2),
        (4, 0, 1),
        (5, 1, 1),
        (16, -1, -1),
        (17, -1, -1),
    ])


@pytest.fixture
def drones():
    """Our two drones near the surface."""
    return [Drone(0, Coordinate(2000, 500)), Drone(2, Coordinate(8000, 500))]


def make_hostile(x, y, vx=0, vy=0, creature_id=16):
    """Hostile creature at a position with a velocity."""
    return Creature(id=creature_id, color=-1, type=-1,
                    position=Coordinate(x, y), velocity=Vector2D(vx, vy))


def make_fish(x, y, vx=0, vy=0, creature_id=0, tier=0):
    """Scan-target creature at a position with a velocity."""
    return Creature(id=creature_id, color=0, type=tier,
                    position=Coordinate(x, y), velocity=Vector2D(vx, vy))


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Leave the package logger as the test found it."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
