"""
Arena environment: geometry kernel, creatures and collision prediction.
"""

from .geometry import Coordinate, Vector2D
from .creatures import Creature, Level, PassiveMotion, PursuitMotion, Roster, UnknownCreatureError
from .collision_detection import CollisionPredictor

__all__ = [
    'Coordinate', 'Vector2D',
    'Creature', 'Level', 'PassiveMotion', 'PursuitMotion', 'Roster', 'UnknownCreatureError',
    'CollisionPredictor',
]
