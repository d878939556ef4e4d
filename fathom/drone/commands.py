"""
Drone commands - hold or move, with a lights flag.
"""

from dataclasses import dataclass
from typing import Optional

from .drone_model import LightsState
from ..environment.geometry import Coordinate, Vector2D


@dataclass(frozen=True)
class Command:
    """
    One drone's order for the turn.

    Attributes:
        target: Destination, or None to hold position
        lights: Lights state for the turn
        message: Free text shown next to the drone
    """
    target: Optional[Coordinate] = None
    lights: LightsState = LightsState.OFF
    message: str = ''

    @classmethod
    def hold(cls, lights: LightsState = LightsState.OFF, message: str = '') -> 'Command':
        return cls(None, lights, message)

    @classmethod
    def move(cls, target: Coordinate, lights: LightsState = LightsState.OFF, message: str = '') -> 'Command':
        return cls(target, lights, message)

    @property
    def is_hold(self) -> bool:
        return self.target is None

    def __str__(self) -> str:
        if self.target is None:
            text = f"WAIT {self.lights.value}"
        else:
            text = f"MOVE {self.target.x} {self.target.y} {self.lights.value}"
        return f"{text} {self.message}" if self.message else text


def step_towards(current: Coordinate,
                 target: Coordinate,
                 speed: int,
                 map_size: int,
                 use_max_speed: bool = False) -> Coordinate:
    """
    Next destination when heading for target.

    Args:
        current: Drone position
        target: Desired destination
        speed: Normal step length
        map_size: Largest valid coordinate
        use_max_speed: Go straight for target even beyond the normal step

    Returns:
        Destination at most one normal step away (unless use_max_speed),
        clamped to the map
    """
    move = Vector2D.between(current, target)
    if move.norm() > speed and not use_max_speed:
        move = move.normalized().scaled(speed).rounded()
    return Coordinate(current.x + int(move.x), current.y + int(move.y)).clamped(map_size)
