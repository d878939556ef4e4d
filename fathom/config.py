"""
Engine configuration for the drone navigation core.

Holds the arena constants (map size, speeds, radii, sensor margins) and the
EngineConfig dataclass that every component receives through its constructor.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, Tuple


# Arena
MAP_SIZE = 9999
SURFACE_DEPTH = 500

# Creatures
CREATURE_MAX_SPEED = 400
HOSTILE_SPEED = 540
HOSTILE_COLLISION_RADIUS = 500
SCAN_AVOIDANCE_RADIUS = 2000

# Drones
DRONE_SPEED = 600
DRONE_MAX_SPEED = 600
LIGHTS_ON_RADIUS = 2000
LIGHTS_OFF_RADIUS = 800

# Radar
BEARING_MARGIN = 420
BEARING_MEMORY = 4
FOUND_AREA = 1_250_000
EXPLORATION_MARGIN = 800

# Escape search
ESCAPE_ANGULAR_STEP = 1
LOOKAHEAD_ANGULAR_STEP = 10

# Interception
STANDOFF_DISTANCE = 400
SIDE_EDGE_MARGIN = 1500

# Depth bands (inclusive) per creature level name
DEPTH_BANDS: Dict[str, Tuple[int, int]] = {
    'safe': (0, 2499),
    'first': (2500, 4999),
    'second': (5000, 7499),
    'third': (7500, MAP_SIZE),
    'monster': (2500, MAP_SIZE),
}


@dataclass(frozen=True)
class EngineConfig:
    """
    Policy numbers shared by localization, collision prediction and planning.

    Attributes:
        map_size: Largest valid coordinate on both axes
        creature_max_speed: Speed cap of harmless creatures per turn
        hostile_speed: Speed of hostile creatures per turn
        hostile_collision_radius: Distance at which a hostile catches a drone
        scan_avoidance_radius: Keep-away radius used for harmless creatures
        drone_speed: Normal drone step per turn
        drone_max_speed: Largest drone step per turn
        lights_on_radius: Sensor radius with lights on
        lights_off_radius: Sensor radius with lights off
        bearing_margin: Sensor dead-zone margin applied to each bearing
        bearing_memory: Bearings kept per creature
        found_area: Region area below which a creature counts as localized
        exploration_margin: Distance from map edges for search targets
        escape_angular_step: Degrees between escape candidates
        lookahead_angular_step: Degrees between continuation candidates
        standoff_distance: Lead point offset toward the map edge
        side_edge_margin: Distance from the side edges that counts as cornered
        surface_depth: Depth at which a drone has surfaced
        depth_bands: Inclusive vertical range per level name
    """
    map_size: int = MAP_SIZE
    creature_max_speed: int = CREATURE_MAX_SPEED
    hostile_speed: int = HOSTILE_SPEED
    hostile_collision_radius: int = HOSTILE_COLLISION_RADIUS
    scan_avoidance_radius: int = SCAN_AVOIDANCE_RADIUS
    drone_speed: int = DRONE_SPEED
    drone_max_speed: int = DRONE_MAX_SPEED
    lights_on_radius: int = LIGHTS_ON_RADIUS
    lights_off_radius: int = LIGHTS_OFF_RADIUS
    bearing_margin: int = BEARING_MARGIN
    bearing_memory: int = BEARING_MEMORY
    found_area: int = FOUND_AREA
    exploration_margin: int = EXPLORATION_MARGIN
    escape_angular_step: int = ESCAPE_ANGULAR_STEP
    lookahead_angular_step: int = LOOKAHEAD_ANGULAR_STEP
    standoff_distance: int = STANDOFF_DISTANCE
    side_edge_margin: int = SIDE_EDGE_MARGIN
    surface_depth: int = SURFACE_DEPTH
    depth_bands: Dict[str, Tuple[int, int]] = field(default_factory=lambda: dict(DEPTH_BANDS), hash=False)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.map_size <= 0:
            raise ValueError("map_size must be positive")
        for name in ('creature_max_speed', 'hostile_speed', 'drone_speed', 'drone_max_speed'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        for name in ('hostile_collision_radius', 'scan_avoidance_radius',
                     'lights_on_radius', 'lights_off_radius'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.bearing_margin < 0:
            raise ValueError("bearing_margin must not be negative")
        if self.bearing_memory < 1:
            raise ValueError("bearing_memory must keep at least one bearing")
        for name in ('escape_angular_step', 'lookahead_angular_step'):
            step = getattr(self, name)
            if step <= 0 or 360 % step != 0:
                raise ValueError(f"{name} must be a positive divisor of 360")
        for level, (low, high) in self.depth_bands.items():
            if low > high:
                raise ValueError(f"depth band for {level} is inverted")

    @classmethod
    def from_dict(cls, data: dict) -> 'EngineConfig':
        """
        Create a configuration from a plain mapping.

        Args:
            data: Field names mapped to values (e.g. loaded from JSON)

        Returns:
            Configured EngineConfig instance
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        values = dict(data)
        if 'depth_bands' in values:
            values['depth_bands'] = {k: tuple(v) for k, v in values['depth_bands'].items()}
        return cls(**values)

    def depth_band(self, level_name: str) -> Tuple[int, int]:
        """Inclusive vertical range for a level name."""
        return self.depth_bands[level_name]
