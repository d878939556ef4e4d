"""
Plotter - Visualization of the arena, located creatures and escape candidates.
"""

import logging
import matplotlib.pyplot as plt
from matplotlib.patches import Circle, Rectangle
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import EngineConfig
from ..drone.escape_planner import EscapeCandidate
from ..environment.creatures import Creature
from ..environment.geometry import Coordinate
from ..sensing.radar import BoundingRegion

_logger = logging.getLogger(__name__)

BAND_COLORS = {
    'first': '#d6ecfa',
    'second': '#a9d3f2',
    'third': '#7bb7e6',
}


class SituationPlotter:
    """
    Draws one turn's situation: depth bands, creature regions, hostiles
    with their collision circles, escape candidates and the chosen move.
    """

    def __init__(self, config: Optional[EngineConfig] = None, figsize: Tuple[int, int] = (10, 10)):
        """
        Initialize the plotter.

        Args:
            config: Engine configuration (map size, bands, radii)
            figsize: Figure size in inches (width, height)
        """
        self.config = config or EngineConfig()
        self.figsize = figsize
        self.fig = None
        self.ax = None

    def plot_situation(self,
                       title: str = "Arena",
                       drone: Optional[Coordinate] = None,
                       goal: Optional[Coordinate] = None,
                       regions: Optional[Dict[int, BoundingRegion]] = None,
                       hostiles: Sequence[Creature] = (),
                       candidates: Sequence[EscapeCandidate] = (),
                       chosen: Optional[Coordinate] = None,
                       show: bool = False):
        """
        Plot the arena for one drone decision.

        Args:
            title: Plot title
            drone: Drone position
            goal: Intended destination
            regions: Bounding region per creature id
            hostiles: Hostile creatures (drawn with catch radius)
            candidates: Evaluated escape candidates
            chosen: Destination finally chosen
            show: Whether to display the plot immediately
        """
        size = self.config.map_size
        self.fig, self.ax = plt.subplots(figsize=self.figsize)

        # Depth bands as horizontal strips
        for level, color in BAND_COLORS.items():
            low, high = self.config.depth_band(level)
            self.ax.add_patch(Rectangle((0, low), size, high - low, facecolor=color,
                                        edgecolor='none', alpha=0.6, zorder=0))

        for creature_id, region in (regions or {}).items():
            self.ax.add_patch(Rectangle((region.min_x, region.min_y), max(region.width, 1),
                                        max(region.height, 1), fill=False, edgecolor='purple',
                                        linestyle='--', linewidth=1.5))
            self.ax.annotate(str(creature_id), (region.center.x, region.center.y),
                             color='purple', fontsize=9, ha='center')

        for hostile in hostiles:
            self.ax.add_patch(Circle((hostile.position.x, hostile.position.y),
                                     self.config.hostile_collision_radius,
                                     facecolor='red', alpha=0.25, edgecolor='darkred'))
            self.ax.arrow(hostile.position.x, hostile.position.y,
                          hostile.velocity.x, hostile.velocity.y,
                          width=30, color='darkred', length_includes_head=True)

        self._plot_candidates(candidates)

        if drone is not None:
            self.ax.plot(drone.x, drone.y, 'go', markersize=12, label='Drone',
                         markeredgecolor='darkgreen', markeredgewidth=2)
        if goal is not None:
            self.ax.plot(goal.x, goal.y, 'r*', markersize=18, label='Goal',
                         markeredgecolor='darkred', markeredgewidth=2)
        if chosen is not None:
            self.ax.plot(chosen.x, chosen.y, 'y^', markersize=12, label='Chosen',
                         markeredgecolor='black')

        self.ax.set_xlim(0, size)
        # Depth grows downward
        self.ax.set_ylim(size, 0)
        self.ax.set_xlabel('X', fontsize=12)
        self.ax.set_ylabel('Depth', fontsize=12)
        self.ax.set_title(title, fontsize=14, fontweight='bold')
        if drone is not None or goal is not None or chosen is not None or candidates:
            self.ax.legend(loc='upper right', fontsize=9)
        self.ax.set_aspect('equal')
        plt.tight_layout()

        if show:
            plt.show()

    def _plot_candidates(self, candidates: Sequence[EscapeCandidate]):
        groups: Dict[str, List[Coordinate]] = {'two-step': [], 'single-step': [], 'unsafe': []}
        for candidate in candidates:
            if candidate.two_step_safe:
                groups['two-step'].append(candidate.destination)
            elif candidate.single_step_safe:
                groups['single-step'].append(candidate.destination)
            else:
                groups['unsafe'].append(candidate.destination)

        styles = {'two-step': 'g.', 'single-step': 'y.', 'unsafe': 'k.'}
        for name, points in groups.items():
            if points:
                self.ax.plot([p.x for p in points], [p.y for p in points], styles[name],
                             markersize=3, label=f'{name} ({len(points)})')

    def save_plot(self, filename: str, dpi: int = 150):
        """
        Save the current plot to a file.

        Args:
            filename: Output filename (e.g., 'turn.png')
            dpi: Resolution in dots per inch
        """
        if self.fig is None:
            _logger.warning("No plot to save. Create a plot first.")
            return

        self.fig.savefig(filename, dpi=dpi, bbox_inches='tight')
        _logger.debug(f"Plot saved to {filename}")

    def close(self):
        """Close the current plot."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
