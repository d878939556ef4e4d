"""
Matplotlib views of the arena for debugging decisions.
"""

from .plotter import SituationPlotter

__all__ = ['SituationPlotter']
