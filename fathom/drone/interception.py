"""
Interception targeting - cut a fleeing creature off against a side edge.
"""

import logging
from typing import Optional

from ..config import EngineConfig
from ..environment.creatures import Creature
from ..environment.geometry import Coordinate, Vector2D

_logger = logging.getLogger(__name__)


class InterceptionTargeting:
    """
    Computes lead points that put the drone between a creature and the
    side edge it is closest to, so the creature is pushed off the map
    instead of being chased from behind.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def nearest_side_edge(self, position: Coordinate) -> Coordinate:
        """Point just beyond the closer vertical edge, level with position."""
        if position.x < self.config.map_size // 2:
            return Coordinate(-1, position.y)
        return Coordinate(self.config.map_size + 1, position.y)

    def near_side_edge(self, position: Coordinate) -> bool:
        """True when position is within the side-edge margin of either side."""
        margin = self.config.side_edge_margin
        return position.x <= margin or position.x >= self.config.map_size - margin

    def lead_point(self, target: Creature, pursuer: Coordinate) -> Coordinate:
        """
        Interception point for a creature.

        Projects the creature-to-pursuer vector onto the creature-to-edge
        vector, keeps the sign that points toward the edge, and offsets the
        creature's next position by the standoff distance along it.

        Args:
            target: Creature to intercept
            pursuer: Position of the pursuing drone

        Returns:
            The lead point (may lie off the map; callers decide what to do)
        """
        predicted = target.position + target.velocity
        edge = self.nearest_side_edge(predicted)
        to_edge = Vector2D.between(predicted, edge)

        offset = Vector2D.between(predicted, pursuer).project(to_edge)
        if offset.is_zero():
            offset = to_edge
        elif (predicted + offset).distance_to(edge) > predicted.distance_to(edge):
            offset = -offset

        lead = predicted + offset.normalized().scaled(self.config.standoff_distance)
        _logger.debug(f"lead point for creature {target.id} from ({pursuer.x},{pursuer.y}): "
                      f"({lead.x},{lead.y})")
        return lead
