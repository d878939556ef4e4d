"""
Drone side: drone state, escape planning, interception and commands.
"""

from .drone_model import Drone, LightsState
from .escape_planner import EscapeCandidate, EscapePlanner
from .interception import InterceptionTargeting
from .commands import Command, step_towards

__all__ = [
    'Drone', 'LightsState',
    'EscapeCandidate', 'EscapePlanner',
    'InterceptionTargeting',
    'Command', 'step_towards',
]
