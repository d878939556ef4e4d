"""
Collision Prediction for Drone Moves

Implements:
- Contact time between a drone's straight move and a moving creature
- Closing-case short circuit when already inside the radius
- Radius policy (hostile catch radius plus padding, scan-avoidance radius)
"""

import logging
import numpy as np
from typing import Optional

from .creatures import Creature
from .geometry import Coordinate, Vector2D
from ..config import EngineConfig

_logger = logging.getLogger(__name__)


def _log(msg: str):
    _logger.debug(msg)


class CollisionPredictor:
    """
    Predicts whether a creature reaches a drone during one turn of travel.

    The drone moves from its start toward the target at full speed over
    t in [0, 1]; the creature keeps its velocity over the same window.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize collision predictor.

        Args:
            config: Engine configuration (speeds and radii)
        """
        self.config = config or EngineConfig()

    def radius_for(self, creature: Creature, padding: int = 0) -> float:
        """
        Collision radius policy.

        Args:
            creature: Creature being checked
            padding: Extra distance added to the hostile catch radius

        Returns:
            Hostile radius plus padding, or the scan-avoidance radius
        """
        if creature.is_hostile:
            return self.config.hostile_collision_radius + padding
        return self.config.scan_avoidance_radius

    def mover_velocity(self, start: Coordinate, target: Coordinate) -> Vector2D:
        """Full-speed drone velocity toward target (zero when already there)."""
        return Vector2D.between(start, target).normalized().scaled(self.config.drone_max_speed).rounded()

    def contact_time(self,
                     start: Coordinate,
                     creature: Creature,
                     target: Coordinate,
                     radius: float) -> Optional[float]:
        """
        Earliest time the creature enters the radius around the drone.

        Solves |p + t*v|^2 = radius^2 where p is the creature's position
        relative to the drone and v the creature's velocity relative to it.

        Args:
            start: Drone start position
            creature: Creature with current position and velocity
            target: Drone move target
            radius: Collision radius

        Returns:
            The earlier root t, or None when the paths never come that close
        """
        mover = self.mover_velocity(start, target)
        if mover.is_zero() and creature.velocity.is_zero():
            return None

        px = creature.position.x - start.x
        py = creature.position.y - start.y
        vx = creature.velocity.x - mover.x
        vy = creature.velocity.y - mover.y

        # a*t^2 + b*t + c = 0
        a = vx * vx + vy * vy
        if a <= 0.0:
            return None

        b = 2.0 * (px * vx + py * vy)
        c = px * px + py * py - radius * radius
        discriminant = b * b - 4.0 * a * c
        if discriminant < 0.0:
            return None

        return float((-b - np.sqrt(discriminant)) / (2.0 * a))

    def collides(self,
                 start: Coordinate,
                 creature: Creature,
                 target: Coordinate,
                 padding: int = 0,
                 radius: Optional[float] = None) -> bool:
        """
        Check whether moving from start toward target runs into the creature.

        Args:
            start: Drone start position
            creature: Creature to check against
            target: Drone move target
            padding: Extra hostile radius
            radius: Explicit radius overriding the policy

        Returns:
            True if the creature is already within the radius, or enters it
            at some 0 < t <= 1
        """
        if radius is None:
            radius = self.radius_for(creature, padding)

        if start.distance_to(creature.position) <= radius:
            return True

        t = self.contact_time(start, creature, target, radius)
        if t is None:
            return False

        hit = 0.0 < t <= 1.0
        if hit:
            _log(f"collision: creature {creature.id} reaches drone at t={t:.3f} "
                 f"moving ({start.x},{start.y})->({target.x},{target.y})")
        return hit
