"""
Fathom - localization and safe navigation for submersible scan drones.

Two drones share a partially observed arena with scan targets and hostile
monsters. This package turns radar bearings and sightings into bounding
regions, predicts collisions with moving hostiles, finds escape moves and
computes interception points.
"""

from .config import EngineConfig
from .context import TurnContext
from .debug import configure_debug_log

__all__ = ['EngineConfig', 'TurnContext', 'configure_debug_log']
