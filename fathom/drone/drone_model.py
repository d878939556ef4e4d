"""
Drone model - state of one of our (or the opponent's) drones.
"""

from dataclasses import dataclass, field
from enum import Enum

from ..config import EngineConfig
from ..environment.geometry import Coordinate, Vector2D


class LightsState(Enum):
    OFF = 0
    ON = 1


@dataclass
class Drone:
    """
    A submersible drone.

    Attributes:
        id: Drone identifier
        position: Current position
        emergency: True while the drone is disabled after a hostile hit
        battery: Remaining battery charge
        supposed_velocity: Displacement between the last two positions
        lights: Lights state chosen for the coming turn
    """
    id: int
    position: Coordinate
    emergency: bool = False
    battery: int = 30
    supposed_velocity: Vector2D = field(default_factory=Vector2D.zero)
    lights: LightsState = LightsState.OFF

    def update(self, position: Coordinate, emergency: bool, battery: int):
        """Take this turn's reading; the velocity comes from the position delta."""
        self.supposed_velocity = Vector2D.between(self.position, position)
        self.position = position
        self.emergency = emergency
        self.battery = battery

    def predicted_position(self) -> Coordinate:
        """Where the drone ends up if it keeps its last displacement."""
        return self.position + self.supposed_velocity

    def sensor_radius(self, config: EngineConfig) -> int:
        if self.lights is LightsState.ON:
            return config.lights_on_radius
        return config.lights_off_radius

    def has_surfaced(self, config: EngineConfig) -> bool:
        return self.position.y <= config.surface_depth

    def __repr__(self):
        state = ' EMERGENCY' if self.emergency else ''
        return (f"Drone(id={self.id}, pos=({self.position.x},{self.position.y}), "
                f"lights={self.lights.name}{state})")
