"""
Escape Planning Demo

A drone heading for a scan target with a hostile closing in. Shows the
collision verdict for the intended move, the escape that replaces it and
a plot of every sampled heading.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fathom.config import EngineConfig
from fathom.debug import configure_debug_log
from fathom.drone.escape_planner import EscapePlanner
from fathom.environment.creatures import Creature
from fathom.environment.geometry import Coordinate, Vector2D
from fathom.visualization.plotter import SituationPlotter


def create_scenario():
    """Hostile swimming straight at the drone's intended path."""
    drone = Coordinate(5000, 5000)
    goal = Coordinate(5600, 5000)
    hostile = Creature(id=16, color=-1, type=-1,
                       position=Coordinate(6400, 5000),
                       velocity=Vector2D(-540, 0))
    return drone, goal, [hostile]


def main():
    configure_debug_log()
    config = EngineConfig()
    planner = EscapePlanner(config)

    print("=" * 70)
    print("ESCAPE PLANNING DEMO")
    print("=" * 70)

    drone, goal, hostiles = create_scenario()
    for hostile in hostiles:
        print(f"  {hostile}")

    destination, avoiding = planner.plan(drone, hostiles, goal)
    print(f"\n  Intended move: ({goal.x}, {goal.y})")
    print(f"  Avoiding: {avoiding}")
    print(f"  Chosen destination: ({destination.x}, {destination.y})")

    candidates = planner.evaluate_candidates(drone, hostiles, goal)
    two_step = sum(1 for c in candidates if c.two_step_safe)
    single = sum(1 for c in candidates if c.single_step_safe)
    print(f"  Candidates: {len(candidates)} on map, {single} single-step safe, {two_step} two-step safe")

    plotter = SituationPlotter(config)
    plotter.plot_situation(
        title="Escape from a charging hostile",
        drone=drone,
        goal=goal,
        hostiles=hostiles,
        candidates=candidates,
        chosen=destination,
        show=True
    )
    plotter.close()

    print("\n" + "=" * 70)
    print("✓ Escape demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
