"""
Tests for the per-turn context.

Tests cover:
1. Unknown ids
2. Region caching and invalidation
3. Promotion of pinpointed hostiles
4. Creatures in range and the nearest-drone hostile rule
5. Mirrored-twin localization
6. Navigation queries and fault messages
"""

import random

import pytest

from fathom.context import FAULT_MESSAGES, TurnContext
from fathom.drone.drone_model import Drone, LightsState
from fathom.environment.creatures import UnknownCreatureError
from fathom.environment.geometry import Coordinate, Vector2D
from fathom.sensing.radar import BoundingRegion, Quadrant, SymmetryHint


@pytest.fixture
def context(roster, radar, drones, config):
    return TurnContext(1, roster, radar, drones, config=config, rng=random.Random(42))


# =============================================================================
# LOOKUP TESTS
# =============================================================================

class TestLookups:
    """Tests for id validation."""

    def test_unknown_creature(self, context):
        with pytest.raises(UnknownCreatureError):
            context.locate(99)

    def test_unknown_creature_is_key_error(self, context):
        with pytest.raises(KeyError):
            context.creature(99)

    def test_bearing_for_unknown_creature(self, context):
        with pytest.raises(UnknownCreatureError):
            context.record_bearing(0, 99, Quadrant.TOP_LEFT)

    def test_unknown_drone(self, context):
        with pytest.raises(KeyError):
            context.drone(5)

    def test_allies(self, context, drones):
        assert context.allies_of(drones[0]) == [Coordinate(8000, 500)]


# =============================================================================
# CACHE TESTS
# =============================================================================

class TestRegionCache:
    """Tests for per-turn region caching."""

    def test_sighting_gives_point(self, context):
        context.record_sighting(0, Coordinate(3000, 3000), Vector2D(100, 0))
        assert context.locate(0) == BoundingRegion.point(Coordinate(3000, 3000))

    def test_cached_within_turn(self, context):
        assert context.locate(4) is context.locate(4)

    def test_bearing_invalidates(self, context):
        before = context.locate(4)
        assert before == BoundingRegion(0, 9999, 5000, 7499)
        context.record_bearing(0, 4, Quadrant.TOP_LEFT)
        after = context.locate(4)
        assert after is not before
        assert after.max_x == 1580
        assert after.min_y == after.max_y == 5000

    def test_repeated_locate_gives_same_region(self, context, roster, radar):
        context.record_bearing(0, 4, Quadrant.BOTTOM_RIGHT)
        context.record_bearing(2, 4, Quadrant.BOTTOM_LEFT)
        first = radar.locate(roster.get(4), context.turn)
        second = radar.locate(roster.get(4), context.turn)
        assert first == second
        assert context.locate(4) == first

    def test_new_turn_starts_empty(self, roster, radar, drones, config):
        first = TurnContext(1, roster, radar, drones, config=config)
        first.locate(4)
        second = TurnContext(2, roster, radar, drones, config=config)
        assert repr(second).endswith("cached=0)")


# =============================================================================
# PROMOTION TESTS
# =============================================================================

class TestPromotion:
    """Tests for turning pinpointed hostiles into sightings."""

    def test_pinpointed_hostile_is_promoted(self, roster, radar, config):
        drones = [Drone(0, Coordinate(4000, 6000)), Drone(2, Coordinate(8000, 500))]
        first = TurnContext(1, roster, radar, drones, config=config)
        first.record_bearing(0, 16, Quadrant.TOP_LEFT)
        first.record_bearing(0, 16, Quadrant.BOTTOM_RIGHT)

        drones[0].update(Coordinate(4000, 4000), emergency=False, battery=30)
        second = TurnContext(2, roster, radar, drones, config=config)
        assert second.locate(16) == BoundingRegion.point(Coordinate(4000, 6000))

        assert second.promote_localized_hostiles() == [16]
        hostile = roster.get(16)
        assert hostile.position == Coordinate(4000, 6000)
        assert hostile.velocity == Vector2D(0, -540)
        assert 16 in second.visible
        assert radar.last_sighting(16).turn == 2

    def test_visible_hostile_is_not_promoted(self, context):
        context.record_sighting(16, Coordinate(5000, 5000), Vector2D(0, 0))
        assert context.promote_localized_hostiles() == []

    def test_opponent_drone_can_be_chased(self, roster, radar, config):
        drones = [Drone(0, Coordinate(4000, 6000))]
        opponents = [Drone(1, Coordinate(4000, 7000))]
        first = TurnContext(1, roster, radar, drones, opponents, config=config)
        first.record_bearing(0, 16, Quadrant.TOP_LEFT)
        first.record_bearing(0, 16, Quadrant.BOTTOM_RIGHT)

        drones[0].update(Coordinate(4000, 3000), emergency=False, battery=30)
        second = TurnContext(2, roster, radar, drones, opponents, config=config)
        assert second.promote_localized_hostiles() == [16]
        assert roster.get(16).velocity == Vector2D(0, 540)


# =============================================================================
# RANGE TESTS
# =============================================================================

class TestCreaturesInRange:
    """Tests for the per-drone creature filter."""

    @pytest.fixture
    def populated(self, context):
        context.record_sighting(0, Coordinate(2500, 500), Vector2D(0, 0))
        context.record_sighting(1, Coordinate(3500, 500), Vector2D(0, 0))
        context.record_sighting(16, Coordinate(4000, 3000), Vector2D(0, 0))
        return context

    def test_lights_off(self, populated, drones):
        assert [c.id for c in populated.creatures_in_range(drones[0])] == [0, 16]

    def test_lights_on(self, populated, drones):
        drones[0].lights = LightsState.ON
        assert [c.id for c in populated.creatures_in_range(drones[0])] == [0, 1, 16]

    def test_hostile_belongs_to_closest_drone(self, populated, drones):
        assert populated.creatures_in_range(drones[1]) == []
        assert [c.id for c in populated.visible_hostiles(drones[0])] == [16]

    def test_equal_drone_copy_keeps_its_hostiles(self, populated):
        copy = Drone(0, Coordinate(2000, 500))
        assert [c.id for c in populated.creatures_in_range(copy)] == [0, 16]


# =============================================================================
# SYMMETRY TESTS
# =============================================================================

class TestSymmetry:
    """Tests for mirrored-twin substitution."""

    def test_twin_point_is_mirrored(self, roster, radar, drones, config):
        hint = SymmetryHint({4: 5}, until_turn=5)
        context = TurnContext(1, roster, radar, drones, config=config, symmetry=hint)
        context.record_sighting(5, Coordinate(2000, 6000), Vector2D(0, 0))
        assert context.locate(4) == BoundingRegion.point(Coordinate(7999, 6000))

    def test_twin_sighting_refreshes_cached_region(self, roster, radar, drones, config):
        hint = SymmetryHint({4: 5}, until_turn=5)
        context = TurnContext(3, roster, radar, drones, config=config, symmetry=hint)
        assert context.locate(4) == BoundingRegion(0, 9999, 5000, 7499)
        context.record_sighting(5, Coordinate(2000, 6000), Vector2D(0, 0))
        assert context.locate(4) == BoundingRegion.point(Coordinate(7999, 6000))

    def test_twin_bearing_refreshes_cached_region(self, roster, radar, drones, config):
        hint = SymmetryHint({4: 5}, until_turn=5)
        context = TurnContext(3, roster, radar, drones, config=config, symmetry=hint)
        context.locate(4)
        context.record_bearing(0, 5, Quadrant.TOP_LEFT)
        assert context.locate(4) == BoundingRegion(8419, 9999, 5000, 5000)

    def test_hint_expires(self, roster, radar, drones, config):
        hint = SymmetryHint({4: 5}, until_turn=5)
        radar.record_sighting(5, Coordinate(2000, 6000), Vector2D(0, 0), 6)
        context = TurnContext(6, roster, radar, drones, config=config, symmetry=hint)
        assert context.locate(4) == BoundingRegion(0, 9999, 5000, 7499)


# =============================================================================
# NAVIGATION TESTS
# =============================================================================

class TestNavigation:
    """Tests for the collision, escape and lead queries."""

    def test_collides(self, context, drones):
        context.record_sighting(16, Coordinate(2600, 500), Vector2D(0, 0))
        assert context.collides(drones[0].position, 16, Coordinate(2600, 500))
        assert not context.collides(drones[0].position, 16, Coordinate(1400, 500))

    def test_plan_move_without_hostiles(self, context, drones):
        assert context.plan_move(drones[0], Coordinate(2600, 500)) == (Coordinate(2600, 500), False)

    def test_plan_move_avoids_hostile(self, context, drones):
        context.record_sighting(16, Coordinate(3000, 600), Vector2D(-540, 0))
        destination, avoiding = context.plan_move(drones[0], Coordinate(2600, 500))
        assert avoiding
        assert not context.collides(drones[0].position, 16, destination)

    def test_find_safe_path(self, context, drones):
        assert context.find_safe_path(drones[0], [], Coordinate(2600, 500)) == Coordinate(2600, 500)

    def test_lead_point(self, context):
        context.record_sighting(0, Coordinate(1000, 5000), Vector2D(0, 0))
        assert context.lead_point(0, Coordinate(3000, 5000)) == Coordinate(600, 5000)


# =============================================================================
# FAULT MESSAGE TESTS
# =============================================================================

class TestFaultMessages:
    """Tests for the emergency flavour line."""

    def test_message_is_known(self, context):
        assert context.fault_message(0) in FAULT_MESSAGES

    def test_message_kept_between_refreshes(self, roster, radar, drones, config):
        shared = {}
        first = TurnContext(1, roster, radar, drones, config=config,
                            rng=random.Random(42), fault_messages=shared)
        message = first.fault_message(0)
        second = TurnContext(2, roster, radar, drones, config=config,
                             rng=random.Random(7), fault_messages=shared)
        assert second.fault_message(0) == message

    def test_seeded_messages_repeat(self, roster, radar, drones, config):
        messages = [
            TurnContext(1, roster, radar, drones, config=config,
                        rng=random.Random(42)).fault_message(0)
            for _ in range(2)
        ]
        assert messages[0] == messages[1]
