"""
Per-turn context - everything a turn's decisions are allowed to see.

A new TurnContext is built each turn from the persistent radar history and
the turn's drone readings. Located regions are cached on the context, so
the cache disappears with it when the turn ends.
"""

import logging
import random
from typing import Dict, List, Optional, Sequence

from .config import EngineConfig
from .drone.drone_model import Drone
from .drone.escape_planner import EscapePlanner
from .drone.interception import InterceptionTargeting
from .environment.collision_detection import CollisionPredictor
from .environment.creatures import Creature, Roster, nearest
from .environment.geometry import Coordinate, Vector2D
from .sensing.radar import BoundingRegion, Quadrant, Radar, SymmetryHint

_logger = logging.getLogger(__name__)

FAULT_MESSAGES = [
    "Help! My brain just went on vacation without me!",
    "SOS: Send caffeine, chocolate, and a rescue team!",
    "Mayday! I'm drowning in a sea of unread emails!",
    "Emergency: I've fallen into the black hole of procrastination!",
    "Calling all wizards: I need a magical solution, ASAP!",
    "911! Lost in the maze of my own to-do list, send guidance!",
    "May the force of assistance be with you, help needed!",
    "Alert! Need a superhero cape and a sidekick for this task!",
    "Warning: Enter at your own risk, help needed to navigate chaos!",
    "Code red: Seeking a rescue squad for this epic mess I've made!",
]
FAULT_MESSAGE_REFRESH = 3


class TurnContext:
    """
    Queries for one turn: localization, collision checks, escapes, leads.

    Attributes:
        turn: Current turn number
        roster: All creatures
        radar: Bearing and sighting history (outlives the context)
        drones: Our drones
        opponent_drones: Opponent drones
        config: Engine configuration
        rng: Seeded random source
        symmetry: Optional mirrored-pair hint
        visible: Ids of creatures seen directly this turn
    """

    def __init__(self,
                 turn: int,
                 roster: Roster,
                 radar: Radar,
                 drones: Sequence[Drone],
                 opponent_drones: Sequence[Drone] = (),
                 config: Optional[EngineConfig] = None,
                 rng: Optional[random.Random] = None,
                 symmetry: Optional[SymmetryHint] = None,
                 planner: Optional[EscapePlanner] = None,
                 fault_messages: Optional[Dict[int, str]] = None):
        """
        Initialize turn context.

        Args:
            turn: Current turn number
            roster: Creature roster
            radar: Radar history shared across turns
            drones: Our drones
            opponent_drones: Opponent drones
            config: Engine configuration (defaults to the radar's)
            rng: Random source for flavour text (seeded for reproducibility)
            symmetry: Mirrored-pair hint for the opening turns
            planner: Escape planner (built from config when omitted)
            fault_messages: Per-drone fault line carried over from last turn
        """
        self.turn = turn
        self.roster = roster
        self.radar = radar
        self.drones = list(drones)
        self.opponent_drones = list(opponent_drones)
        self.config = config or radar.config
        self.rng = rng or random.Random(0)
        self.symmetry = symmetry
        self.predictor = planner.predictor if planner else CollisionPredictor(self.config)
        self.planner = planner or EscapePlanner(self.config, self.predictor)
        self.interception = InterceptionTargeting(self.config)
        self.fault_messages = fault_messages if fault_messages is not None else {}
        self.visible: set = set()
        self._regions: Dict[int, BoundingRegion] = {}

    # Recording observations

    def record_bearing(self, drone_id: int, creature_id: int, quadrant: Quadrant):
        """Store a quadrant report from one of our drones."""
        self.roster.get(creature_id)
        drone = self.drone(drone_id)
        self.radar.record_bearing(creature_id, drone.position, quadrant)
        self._invalidate(creature_id)

    def record_sighting(self, creature_id: int, position: Coordinate, velocity: Vector2D):
        """Store a direct sighting made this turn."""
        self.roster.update(creature_id, position, velocity)
        self.radar.record_sighting(creature_id, position, velocity, self.turn)
        self.visible.add(creature_id)
        self._invalidate(creature_id)

    def _invalidate(self, creature_id: int):
        # A twin's region is mirrored from this creature's history
        self._regions.pop(creature_id, None)
        if self.symmetry is not None:
            twin_id = self.symmetry.twin_of(creature_id, self.turn)
            if twin_id is not None:
                self._regions.pop(twin_id, None)

    # Lookups

    def creature(self, creature_id: int) -> Creature:
        return self.roster.get(creature_id)

    def drone(self, drone_id: int) -> Drone:
        for drone in self.drones:
            if drone.id == drone_id:
                return drone
        raise KeyError(f"Unknown drone id {drone_id}")

    def allies_of(self, drone: Drone) -> List[Coordinate]:
        """Expected next positions of our other drones."""
        return [other.predicted_position() for other in self.drones if other.id != drone.id]

    # Localization

    def locate(self, creature_id: int) -> BoundingRegion:
        """
        Bounding region of a creature this turn (cached for the turn).
        """
        region = self._regions.get(creature_id)
        if region is not None:
            return region

        creature = self.roster.get(creature_id)
        twin = None
        if self.symmetry is not None:
            twin_id = self.symmetry.twin_of(creature_id, self.turn)
            if twin_id is not None:
                twin = self.roster.get(twin_id)
        region = self.radar.locate(creature, self.turn, self.symmetry, twin)
        self._regions[creature_id] = region
        return region

    def promote_localized_hostiles(self) -> List[int]:
        """
        Turn pinpointed but unseen hostiles into sightings.

        A hostile whose region collapses to one point is recorded at that
        point, heading for the nearest known drone at hostile speed.

        Returns:
            Ids of the promoted hostiles
        """
        promoted = []
        all_drones = [d.position for d in self.drones + self.opponent_drones]
        for hostile in self.roster.hostiles():
            if hostile.id in self.visible:
                continue
            region = self.locate(hostile.id)
            if not region.is_point:
                continue
            position = region.center
            chased = nearest(position, all_drones)
            velocity = Vector2D.zero()
            if chased is not None:
                velocity = Vector2D.between(position, chased).normalized() \
                    .scaled(self.config.hostile_speed).rounded()
            self.record_sighting(hostile.id, position, velocity)
            _logger.debug(f"turn {self.turn}: promoted hostile {hostile.id} at ({position.x},{position.y})")
            promoted.append(hostile.id)
        return promoted

    def creatures_in_range(self, drone: Drone) -> List[Creature]:
        """
        Creatures this drone should care about.

        Visible creatures within the drone's sensor radius, plus visible
        hostiles for which this drone is the closest of ours.
        """
        radius = drone.sensor_radius(self.config)
        result = []
        for creature_id in sorted(self.visible):
            creature = self.roster.get(creature_id)
            if creature.position.distance_to(drone.position) <= radius:
                result.append(creature)
            elif creature.is_hostile:
                closest = self._closest_drone(creature.position)
                if closest is not None and closest.id == drone.id:
                    result.append(creature)
        return result

    def visible_hostiles(self, drone: Drone) -> List[Creature]:
        return [c for c in self.creatures_in_range(drone) if c.is_hostile]

    def _closest_drone(self, position: Coordinate) -> Optional[Drone]:
        if not self.drones:
            return None
        return min(self.drones, key=lambda d: d.position.distance_to(position))

    # Navigation

    def collides(self, start: Coordinate, creature_id: int, target: Coordinate, padding: int = 0) -> bool:
        return self.predictor.collides(start, self.roster.get(creature_id), target, padding)

    def find_safe_path(self, drone: Drone, hostiles: Sequence[Creature], target: Coordinate) -> Coordinate:
        return self.planner.find_safe_path(drone.position, hostiles, target, self.allies_of(drone))

    def plan_move(self, drone: Drone, target: Coordinate):
        """Validate a move against the hostiles near this drone."""
        return self.planner.plan(drone.position, self.visible_hostiles(drone), target, self.allies_of(drone))

    def lead_point(self, creature_id: int, pursuer: Coordinate) -> Coordinate:
        return self.interception.lead_point(self.roster.get(creature_id), pursuer)

    # Flavour

    def fault_message(self, drone_id: int) -> str:
        """Flavour line for a drone in emergency, refreshed every few turns."""
        current = self.fault_messages.get(drone_id)
        if not current or self.turn % FAULT_MESSAGE_REFRESH == 0:
            current = self.rng.choice(FAULT_MESSAGES)
            self.fault_messages[drone_id] = current
        return current

    def __repr__(self):
        return (f"TurnContext(turn={self.turn}, drones={len(self.drones)}, "
                f"visible={len(self.visible)}, cached={len(self._regions)})")
