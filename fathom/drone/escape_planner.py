"""
Escape Planning for Drones

Implements the fallback move when the intended one is predicted to collide:
- Ring of candidate destinations at full drone speed, one per sampled heading
- Single-step filter against the hostiles' current motion
- Two-step filter: the candidate must leave at least one safe move next turn
  against hostiles advanced one turn and re-aimed at the nearest drone
- Goal-minimizing choice, with "stay put" as the last resort
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from ..config import EngineConfig
from ..environment.collision_detection import CollisionPredictor
from ..environment.creatures import Creature, PursuitMotion
from ..environment.geometry import Coordinate, heading_offsets

_logger = logging.getLogger(__name__)


def _log(msg: str):
    _logger.debug(msg)


@dataclass
class EscapeCandidate:
    """A sampled escape destination and how it fared."""
    heading: int
    destination: Coordinate
    distance_to_goal: float
    single_step_safe: bool = False
    two_step_safe: bool = False

    def __repr__(self):
        return (f"Escape(hdg={self.heading}°, to=({self.destination.x},{self.destination.y}), "
                f"safe={self.single_step_safe}/{self.two_step_safe}, d={self.distance_to_goal:.0f})")


class EscapePlanner:
    """
    Searches a fixed set of headings for the safest move closest to a goal.

    The sample count is fixed, so the worst-case cost per call is bounded:
    (360 / escape step) candidates, each with up to (360 / lookahead step)
    continuation checks per hostile.
    """

    def __init__(self,
                 config: Optional[EngineConfig] = None,
                 predictor: Optional[CollisionPredictor] = None,
                 motion_model=None):
        """
        Initialize escape planner.

        Args:
            config: Engine configuration (drone speed, angular steps, map size)
            predictor: Collision predictor (built from config when omitted)
            motion_model: Hostile motion model for the lookahead
                          (pursuit by default)
        """
        self.config = config or EngineConfig()
        self.predictor = predictor or CollisionPredictor(self.config)
        self.motion_model = motion_model or PursuitMotion(self.config.hostile_speed)

        self._escape_offsets = heading_offsets(self.config.drone_max_speed,
                                               self.config.escape_angular_step)
        self._lookahead_offsets = heading_offsets(self.config.drone_max_speed,
                                                  self.config.lookahead_angular_step)

    def _ring(self, center: Coordinate, offsets, step: int):
        for index, (dx, dy) in enumerate(offsets):
            yield index * step, Coordinate(center.x + int(dx), center.y + int(dy))

    def is_move_safe(self, start: Coordinate, hostiles: Sequence[Creature], target: Coordinate) -> bool:
        """No hostile collides with the straight move from start to target."""
        return not any(self.predictor.collides(start, hostile, target) for hostile in hostiles)

    def predict_hostiles(self,
                         hostiles: Sequence[Creature],
                         drone_position: Coordinate,
                         allies: Sequence[Coordinate] = ()) -> List[Creature]:
        """
        Hostile states one turn ahead.

        Args:
            hostiles: Current hostile states
            drone_position: Where our drone will be
            allies: Expected positions of our other drones

        Returns:
            Advanced hostiles, re-aimed at the closest of our drones
        """
        targets = [drone_position, *allies]
        return [self.motion_model.retarget(self.motion_model.advance(hostile), targets)
                for hostile in hostiles]

    def has_safe_continuation(self,
                              position: Coordinate,
                              hostiles: Sequence[Creature],
                              allies: Sequence[Coordinate] = ()) -> bool:
        """
        Check that a drone at position still has a safe move next turn.

        Args:
            position: Candidate drone position after this turn
            hostiles: Current hostile states
            allies: Expected positions of our other drones

        Returns:
            True if at least one coarse heading stays on the map and clear
        """
        predicted = self.predict_hostiles(hostiles, position, allies)
        map_size = self.config.map_size
        for _, following in self._ring(position, self._lookahead_offsets,
                                       self.config.lookahead_angular_step):
            if following.is_on_map(map_size) and self.is_move_safe(position, predicted, following):
                return True
        return False

    def find_safe_path(self,
                       current: Coordinate,
                       hostiles: Sequence[Creature],
                       target: Coordinate,
                       allies: Sequence[Coordinate] = ()) -> Coordinate:
        """
        Best escape destination toward target.

        Args:
            current: Drone position
            hostiles: Creatures to stay clear of
            target: Where the drone wanted to go
            allies: Expected positions of our other drones

        Returns:
            The two-step-safe candidate closest to target, else the closest
            single-step-safe one, else current (stay put)
        """
        map_size = self.config.map_size
        single_escape = None
        two_step_escape = None
        single_distance = float('inf')
        two_step_distance = float('inf')

        for _, candidate in self._ring(current, self._escape_offsets,
                                       self.config.escape_angular_step):
            if not candidate.is_on_map(map_size):
                continue
            if not self.is_move_safe(current, hostiles, candidate):
                continue

            distance = candidate.distance_to(target)
            if distance < single_distance:
                single_escape, single_distance = candidate, distance
            # The continuation check is the expensive part; only run it when
            # the candidate would improve on the best two-step escape.
            if distance < two_step_distance and self.has_safe_continuation(candidate, hostiles, allies):
                two_step_escape, two_step_distance = candidate, distance

        if two_step_escape is not None:
            _log(f"escape from ({current.x},{current.y}) toward ({target.x},{target.y}): "
                 f"two-step safe ({two_step_escape.x},{two_step_escape.y})")
            return two_step_escape
        if single_escape is not None:
            _log(f"escape from ({current.x},{current.y}) toward ({target.x},{target.y}): "
                 f"single-step safe ({single_escape.x},{single_escape.y})")
            return single_escape

        _log(f"escape from ({current.x},{current.y}): no safe heading, staying put")
        return current

    def plan(self,
             current: Coordinate,
             hostiles: Sequence[Creature],
             target: Coordinate,
             allies: Sequence[Coordinate] = ()) -> Tuple[Coordinate, bool]:
        """
        Validate an intended move and replace it when unsafe.

        Args:
            current: Drone position
            hostiles: Creatures to stay clear of
            target: Intended destination
            allies: Expected positions of our other drones

        Returns:
            (destination, avoiding) where avoiding tells whether the intended
            move was replaced by an escape
        """
        avoiding = (not self.is_move_safe(current, hostiles, target)
                    or not self.has_safe_continuation(target, hostiles, allies))
        if not avoiding:
            return target, False
        return self.find_safe_path(current, hostiles, target, allies), True

    def evaluate_candidates(self,
                            current: Coordinate,
                            hostiles: Sequence[Creature],
                            target: Coordinate,
                            allies: Sequence[Coordinate] = ()) -> List[EscapeCandidate]:
        """
        Every on-map candidate with both safety verdicts (for plotting/analysis).
        """
        results = []
        for heading, candidate in self._ring(current, self._escape_offsets,
                                             self.config.escape_angular_step):
            if not candidate.is_on_map(self.config.map_size):
                continue
            entry = EscapeCandidate(heading, candidate, candidate.distance_to(target))
            entry.single_step_safe = self.is_move_safe(current, hostiles, candidate)
            if entry.single_step_safe:
                entry.two_step_safe = self.has_safe_continuation(candidate, hostiles, allies)
            results.append(entry)
        return results
