"""
Radar localization - where can an unseen creature be?

Implements:
- Bearing history (last few quadrant reports per creature)
- Confirmed sightings (exact position and velocity at a turn)
- Maximum-range boxes from elapsed time and speed caps
- Monotonic narrowing of a box by bearings
- Optional mirrored-twin substitution for symmetric openings
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, List, Mapping, Optional

from ..config import EngineConfig
from ..environment.creatures import Creature
from ..environment.geometry import Coordinate, Vector2D

_logger = logging.getLogger(__name__)


def _log(msg: str):
    _logger.debug(msg)


class Quadrant(Enum):
    """Quadrant of a radar blip relative to the observing drone."""
    TOP_LEFT = 'TL'
    TOP_RIGHT = 'TR'
    BOTTOM_LEFT = 'BL'
    BOTTOM_RIGHT = 'BR'
    UNKNOWN = 'NA'

    @classmethod
    def parse(cls, code: str) -> 'Quadrant':
        """Parse a quadrant code such as 'TL'."""
        try:
            return cls(code.strip().upper())
        except ValueError:
            raise ValueError(f"Invalid quadrant code: {code!r}") from None

    @property
    def is_left(self) -> bool:
        return self in (Quadrant.TOP_LEFT, Quadrant.BOTTOM_LEFT)

    @property
    def is_right(self) -> bool:
        return self in (Quadrant.TOP_RIGHT, Quadrant.BOTTOM_RIGHT)

    @property
    def is_up(self) -> bool:
        return self in (Quadrant.TOP_LEFT, Quadrant.TOP_RIGHT)

    @property
    def is_down(self) -> bool:
        return self in (Quadrant.BOTTOM_LEFT, Quadrant.BOTTOM_RIGHT)


@dataclass(frozen=True)
class Bearing:
    """A quadrant report taken from an observer position."""
    observer: Coordinate
    quadrant: Quadrant


@dataclass(frozen=True)
class Sighting:
    """A direct observation of a creature."""
    position: Coordinate
    velocity: Vector2D
    turn: int


@dataclass(frozen=True)
class BoundingRegion:
    """
    Axis-aligned box of positions consistent with what is known.

    Attributes:
        min_x: Left bound (inclusive)
        max_x: Right bound (inclusive)
        min_y: Upper bound (inclusive, smaller depth)
        max_y: Lower bound (inclusive, larger depth)
    """
    min_x: int
    max_x: int
    min_y: int
    max_y: int

    @classmethod
    def point(cls, position: Coordinate) -> 'BoundingRegion':
        return cls(position.x, position.x, position.y, position.y)

    @property
    def is_point(self) -> bool:
        return self.min_x == self.max_x and self.min_y == self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.min_x + self.max_x) // 2, (self.min_y + self.max_y) // 2)

    def contains(self, position: Coordinate) -> bool:
        return self.min_x <= position.x <= self.max_x and self.min_y <= position.y <= self.max_y

    def corners(self) -> List[Coordinate]:
        """The four corners (a single point when fully localized)."""
        if self.is_point:
            return [Coordinate(self.min_x, self.min_y)]
        return [
            Coordinate(self.min_x, self.min_y),
            Coordinate(self.max_x, self.min_y),
            Coordinate(self.min_x, self.max_y),
            Coordinate(self.max_x, self.max_y),
        ]

    def mirrored(self, map_size: int) -> 'BoundingRegion':
        """Box reflected across the vertical centre line of the map."""
        return BoundingRegion(map_size - self.max_x, map_size - self.min_x, self.min_y, self.max_y)

    def __repr__(self):
        return f"BoundingRegion(x=[{self.min_x},{self.max_x}], y=[{self.min_y},{self.max_y}])"


class SymmetryHint:
    """
    Known mirrored creature pairs for the opening turns.

    Creatures spawn in pairs mirrored across the vertical centre line, so
    early on a twin's box, mirrored, also bounds the creature.
    """

    def __init__(self, twins: Mapping[int, int], until_turn: int):
        """
        Args:
            twins: Creature id mapped to its mirrored twin id
            until_turn: Last turn at which the mirroring still holds
        """
        self.twins = dict(twins)
        for creature_id, twin_id in list(self.twins.items()):
            self.twins.setdefault(twin_id, creature_id)
        self.until_turn = until_turn

    def twin_of(self, creature_id: int, turn: int) -> Optional[int]:
        if turn > self.until_turn:
            return None
        return self.twins.get(creature_id)


def _collapse(low: int, high: int):
    """Average crossed bounds into a single cross-section."""
    if low > high:
        middle = (low + high) // 2
        return middle, middle
    return low, high


class Radar:
    """
    Bearing and sighting history with per-query localization.

    Regions are recomputed from history on each query; nothing derived is
    stored here.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize radar.

        Args:
            config: Engine configuration (speeds, margin, memory, bands)
        """
        self.config = config or EngineConfig()
        self._bearings: Dict[int, Deque[Bearing]] = {}
        self._sightings: Dict[int, Sighting] = {}

    def record_bearing(self, creature_id: int, observer: Coordinate, quadrant: Quadrant):
        """Keep a bearing, evicting the oldest beyond the memory size."""
        history = self._bearings.get(creature_id)
        if history is None:
            history = deque(maxlen=self.config.bearing_memory)
            self._bearings[creature_id] = history
        history.append(Bearing(observer, quadrant))

    def record_sighting(self, creature_id: int, position: Coordinate, velocity: Vector2D, turn: int):
        """Replace the last confirmed sighting of a creature."""
        self._sightings[creature_id] = Sighting(position, velocity, turn)

    def bearings(self, creature_id: int) -> List[Bearing]:
        return list(self._bearings.get(creature_id, ()))

    def last_sighting(self, creature_id: int) -> Optional[Sighting]:
        return self._sightings.get(creature_id)

    def depth_band(self, creature: Creature):
        return self.config.depth_band(creature.level.value)

    def level_region(self, creature: Creature) -> BoundingRegion:
        """Full-width strip of the creature's depth band."""
        low, high = self.depth_band(creature)
        return BoundingRegion(0, self.config.map_size, low, high)

    def maximum_range(self, creature: Creature, turn: int) -> BoundingRegion:
        """
        Every position the creature could have reached since its last sighting.

        Args:
            creature: Creature to bound
            turn: Current turn

        Returns:
            A point for fresh sightings, an expanded box otherwise, or the
            depth-band strip when the creature was never seen
        """
        sighting = self._sightings.get(creature.id)
        if sighting is None:
            return self.level_region(creature)

        elapsed = turn - sighting.turn
        if elapsed <= 0:
            return BoundingRegion.point(sighting.position)

        known = (sighting.position + sighting.velocity).clamped(self.config.map_size)
        if elapsed == 1:
            return BoundingRegion.point(known)

        reach = creature.max_speed(self.config) * elapsed
        low, high = self.depth_band(creature)
        map_size = self.config.map_size

        return BoundingRegion(
            min_x=max(0, known.x - reach),
            max_x=min(map_size, known.x + reach),
            min_y=min(high, max(low, known.y - reach)),
            max_y=min(high, max(low, known.y + reach)),
        )

    def narrow(self, region: BoundingRegion, bearings: List[Bearing]) -> BoundingRegion:
        """
        Shrink a box by bearings; bounds only ever move inward.

        Args:
            region: Box to narrow
            bearings: Quadrant reports, oldest first

        Returns:
            Narrowed box, crossed axes collapsed to their midpoint
        """
        margin = self.config.bearing_margin
        min_x, max_x, min_y, max_y = region.min_x, region.max_x, region.min_y, region.max_y

        for bearing in bearings:
            observer, quadrant = bearing.observer, bearing.quadrant
            if quadrant.is_left:
                max_x = min(max_x, observer.x - margin)
            if quadrant.is_right:
                min_x = max(min_x, observer.x + margin)
            if quadrant.is_up:
                max_y = min(max_y, observer.y - margin)
            if quadrant.is_down:
                min_y = max(min_y, observer.y + margin)

        min_x, max_x = _collapse(min_x, max_x)
        min_y, max_y = _collapse(min_y, max_y)
        return BoundingRegion(min_x, max_x, min_y, max_y)

    def locate(self,
               creature: Creature,
               turn: int,
               symmetry: Optional[SymmetryHint] = None,
               twin: Optional[Creature] = None) -> BoundingRegion:
        """
        Bounding region of a creature at the given turn.

        Args:
            creature: Creature to locate
            turn: Current turn
            symmetry: Optional mirrored-pair hint for the opening turns
            twin: The mirrored twin creature (required with symmetry)

        Returns:
            The narrowest box consistent with sightings and bearings
        """
        region = self._locate_own(creature, turn)

        if symmetry is not None and twin is not None and not region.is_point:
            if symmetry.twin_of(creature.id, turn) == twin.id:
                mirrored = self._locate_own(twin, turn).mirrored(self.config.map_size)
                if mirrored.area < region.area:
                    _log(f"creature {creature.id}: using mirrored box of twin {twin.id}")
                    region = mirrored

        _log(f"turn {turn}: creature {creature.id} located in {region}")
        return region

    def _locate_own(self, creature: Creature, turn: int) -> BoundingRegion:
        region = self.maximum_range(creature, turn)
        if region.is_point:
            return region

        bearings = self.bearings(creature.id)
        if not bearings:
            return region

        narrowed = self.narrow(region, bearings)
        low, high = self.depth_band(creature)
        map_size = self.config.map_size
        return BoundingRegion(
            min(map_size, max(0, narrowed.min_x)),
            min(map_size, max(0, narrowed.max_x)),
            min(high, max(low, narrowed.min_y)),
            min(high, max(low, narrowed.max_y)),
        )

    def is_localized(self, region: BoundingRegion) -> bool:
        """True when the box is small enough to head straight for."""
        return region.area < self.config.found_area

    def search_target(self, region: BoundingRegion) -> Coordinate:
        """
        Where to head when looking for a creature.

        Returns:
            The box centre, kept away from the map edges unless localized
        """
        target = region.center
        if self.is_localized(region):
            return target
        low = self.config.exploration_margin
        high = self.config.map_size - self.config.exploration_margin
        return Coordinate(min(high, max(low, target.x)), min(high, max(low, target.y)))
