"""
Radar sensing: bearings, sightings and creature localization.
"""

from .radar import Bearing, BoundingRegion, Quadrant, Radar, Sighting, SymmetryHint

__all__ = ['Bearing', 'BoundingRegion', 'Quadrant', 'Radar', 'Sighting', 'SymmetryHint']
