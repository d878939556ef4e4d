"""
Creatures - the moving entities of the arena.

Includes:
- Creature levels and their depth bands
- Creature state (position and velocity, possibly stale)
- Hostile motion models (passive and pursuit)
- The creature roster built at startup
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .geometry import Coordinate, Vector2D
from ..config import EngineConfig, HOSTILE_SPEED

HOSTILE_TYPE = -1


class UnknownCreatureError(KeyError):
    """Raised when a creature id is not part of the roster."""

    def __init__(self, creature_id: int):
        super().__init__(creature_id)
        self.creature_id = creature_id

    def __str__(self) -> str:
        return f"Unknown creature id {self.creature_id}"


class Level(Enum):
    """Depth level a creature lives in."""
    SAFE = 'safe'
    FIRST = 'first'
    SECOND = 'second'
    THIRD = 'third'
    MONSTER = 'monster'

    @classmethod
    def for_type(cls, creature_type: int) -> 'Level':
        """Level implied by a creature type (-1 hostile, 0..2 scan tiers)."""
        return {
            HOSTILE_TYPE: cls.MONSTER,
            0: cls.FIRST,
            1: cls.SECOND,
            2: cls.THIRD,
        }.get(creature_type, cls.SAFE)


@dataclass
class Creature:
    """
    A creature in the arena.

    Equality and hashing only look at the id, so a creature can be
    replaced by an updated copy inside sets and dicts.

    Attributes:
        id: Unique identifier
        color: Colour group (scan targets only)
        type: -1 for hostile monsters, 0..2 for scan-target tiers
        position: Last believed position
        velocity: Last believed velocity per turn
    """
    id: int
    color: int
    type: int
    position: Coordinate = field(default_factory=Coordinate.zero, compare=False)
    velocity: Vector2D = field(default_factory=Vector2D.zero, compare=False)

    @property
    def is_hostile(self) -> bool:
        return self.type == HOSTILE_TYPE

    @property
    def level(self) -> Level:
        return Level.for_type(self.type)

    def max_speed(self, config: EngineConfig) -> int:
        """Fastest the creature can travel per turn."""
        return config.hostile_speed if self.is_hostile else config.creature_max_speed

    def moved(self) -> 'Creature':
        """Copy advanced by one turn of its current velocity."""
        return replace(self, position=self.position + self.velocity)

    def aimed_at(self, target: Coordinate, speed: float = HOSTILE_SPEED) -> 'Creature':
        """Copy whose velocity points at target with the given speed (rounded)."""
        velocity = Vector2D.between(self.position, target).normalized().scaled(speed).rounded()
        return replace(self, velocity=velocity)

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        kind = 'hostile' if self.is_hostile else f'tier{self.type}'
        return (f"Creature(id={self.id}, {kind}, pos=({self.position.x},{self.position.y}), "
                f"vel=({self.velocity.x:.0f},{self.velocity.y:.0f}))")


def nearest(origin: Coordinate, points: Iterable[Coordinate]) -> Optional[Coordinate]:
    """Closest point to origin, or None for an empty collection."""
    best = None
    best_distance = float('inf')
    for point in points:
        distance = origin.distance_to(point)
        if distance < best_distance:
            best, best_distance = point, distance
    return best


class PassiveMotion:
    """
    Hostiles keep their current heading and speed.
    """

    name = 'passive'

    def __init__(self, speed: float = HOSTILE_SPEED):
        self.speed = speed

    def advance(self, creature: Creature, drones: Sequence[Coordinate] = ()) -> Creature:
        """State one turn ahead."""
        return creature.moved()

    def retarget(self, creature: Creature, targets: Sequence[Coordinate]) -> Creature:
        """Passive hostiles never change heading."""
        return creature


class PursuitMotion:
    """
    Hostiles move, then re-aim at the nearest drone at full speed.

    Matches how monsters chase the closest drone they are aware of.
    """

    name = 'pursuit'

    def __init__(self, speed: float = HOSTILE_SPEED):
        self.speed = speed

    def advance(self, creature: Creature, drones: Sequence[Coordinate] = ()) -> Creature:
        """
        State one turn ahead.

        Args:
            creature: Current creature state
            drones: Drone positions the creature may chase

        Returns:
            Moved creature, re-aimed when any drone is given
        """
        moved = creature.moved()
        if not drones:
            return moved
        return self.retarget(moved, drones)

    def retarget(self, creature: Creature, targets: Sequence[Coordinate]) -> Creature:
        """Aim at the closest target from the creature's position."""
        target = nearest(creature.position, targets)
        if target is None:
            return creature
        return creature.aimed_at(target, self.speed)


MOTION_MODELS = {
    PassiveMotion.name: PassiveMotion,
    PursuitMotion.name: PursuitMotion,
}


def create_motion_model(name: str, speed: float = HOSTILE_SPEED):
    """Build a hostile motion model by name ('passive' or 'pursuit')."""
    try:
        return MOTION_MODELS[name](speed)
    except KeyError:
        raise ValueError(f"Unknown motion model: {name}") from None


class Roster:
    """
    All creatures of the arena, indexed by id.
    """

    def __init__(self, creatures: Iterable[Creature] = ()):
        self._creatures: Dict[int, Creature] = {}
        for creature in creatures:
            self.add(creature)

    @classmethod
    def from_entries(cls, entries: Iterable[Tuple[int, int, int]]) -> 'Roster':
        """
        Build from (id, color, type) triples as announced at startup.
        """
        return cls(Creature(id=cid, color=color, type=ctype) for cid, color, ctype in entries)

    def add(self, creature: Creature):
        self._creatures[creature.id] = creature

    def get(self, creature_id: int) -> Creature:
        try:
            return self._creatures[creature_id]
        except KeyError:
            raise UnknownCreatureError(creature_id) from None

    def update(self, creature_id: int, position: Coordinate, velocity: Vector2D) -> Creature:
        """Store a fresh position and velocity for a creature."""
        creature = replace(self.get(creature_id), position=position, velocity=velocity)
        self._creatures[creature_id] = creature
        return creature

    def hostiles(self) -> List[Creature]:
        return [c for c in self._creatures.values() if c.is_hostile]

    def scan_targets(self) -> List[Creature]:
        return [c for c in self._creatures.values() if not c.is_hostile]

    def __contains__(self, creature_id: int) -> bool:
        return creature_id in self._creatures

    def __iter__(self):
        return iter(self._creatures.values())

    def __len__(self):
        return len(self._creatures)

    def __repr__(self):
        return f"Roster({len(self._creatures)} creatures, {len(self.hostiles())} hostile)"
