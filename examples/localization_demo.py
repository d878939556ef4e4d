"""
Localization Demo

Feeds a few turns of radar bearings for an unseen creature into the radar
and prints how its bounding region shrinks.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from fathom.config import EngineConfig
from fathom.context import TurnContext
from fathom.drone.drone_model import Drone
from fathom.environment.creatures import Roster
from fathom.environment.geometry import Coordinate
from fathom.sensing.radar import Quadrant, Radar
from fathom.visualization.plotter import SituationPlotter


def main():
    config = EngineConfig()
    roster = Roster.from_entries([(4, 0, 1), (16, -1, -1)])
    radar = Radar(config)
    drones = [Drone(0, Coordinate(2000, 500)), Drone(2, Coordinate(8000, 500))]

    # Drones dive; the creature sits somewhere around (5000, 6000)
    reports = [
        (1, Quadrant.BOTTOM_RIGHT, Quadrant.BOTTOM_LEFT, 1500),
        (2, Quadrant.BOTTOM_RIGHT, Quadrant.BOTTOM_LEFT, 3000),
        (3, Quadrant.BOTTOM_RIGHT, Quadrant.BOTTOM_LEFT, 4500),
        (4, Quadrant.TOP_RIGHT, Quadrant.TOP_LEFT, 7000),
    ]

    print("=" * 70)
    print("LOCALIZATION DEMO")
    print("=" * 70)

    context = None
    for turn, left_zone, right_zone, depth in reports:
        for drone in drones:
            drone.update(Coordinate(drone.position.x, depth), emergency=False, battery=30)
        context = TurnContext(turn, roster, radar, drones, config=config)
        context.record_bearing(0, 4, left_zone)
        context.record_bearing(2, 4, right_zone)
        region = context.locate(4)
        print(f"  Turn {turn}: {region} area={region.area} localized={radar.is_localized(region)}")

    plotter = SituationPlotter(config)
    plotter.plot_situation(title="Creature 4 bounding region",
                           regions={4: context.locate(4)}, show=True)
    plotter.close()


if __name__ == "__main__":
    main()
