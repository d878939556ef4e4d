"""
Tests for engine configuration.
"""

import dataclasses

import pytest

from fathom.config import DEPTH_BANDS, EngineConfig


class TestDefaults:
    """Tests for the arena defaults."""

    def test_arena_constants(self, config):
        assert config.map_size == 9999
        assert config.drone_max_speed == 600
        assert config.hostile_speed == 540
        assert config.bearing_margin == 420
        assert config.bearing_memory == 4

    @pytest.mark.parametrize("level, band", [
        ('safe', (0, 2499)),
        ('first', (2500, 4999)),
        ('second', (5000, 7499)),
        ('third', (7500, 9999)),
        ('monster', (2500, 9999)),
    ])
    def test_depth_bands(self, config, level, band):
        assert config.depth_band(level) == band

    def test_frozen(self, config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.map_size = 100

    def test_hashable(self):
        assert hash(EngineConfig()) == hash(EngineConfig())
        cache = {EngineConfig(): 'default'}
        assert cache[EngineConfig()] == 'default'

    def test_bands_still_compared(self):
        assert EngineConfig() != EngineConfig(depth_bands={'first': (2000, 4000)})

    def test_bands_not_shared(self):
        assert EngineConfig().depth_bands is not DEPTH_BANDS


class TestFromDict:
    """Tests for building a configuration from plain data."""

    def test_overrides(self):
        config = EngineConfig.from_dict({
            'hostile_speed': 600,
            'depth_bands': {'first': [2000, 4000], 'monster': [2000, 9999]},
        })
        assert config.hostile_speed == 600
        assert config.depth_band('first') == (2000, 4000)

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown configuration keys"):
            EngineConfig.from_dict({'warp_speed': 9})


class TestValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("overrides", [
        {'map_size': 0},
        {'drone_speed': -1},
        {'hostile_collision_radius': 0},
        {'bearing_margin': -5},
        {'bearing_memory': 0},
        {'escape_angular_step': 7},
        {'lookahead_angular_step': 0},
        {'depth_bands': {'first': (10, 5)}},
    ])
    def test_invalid(self, overrides):
        with pytest.raises(ValueError):
            EngineConfig(**overrides)

    def test_coarse_steps_accepted(self):
        config = EngineConfig(escape_angular_step=5, lookahead_angular_step=30)
        assert config.escape_angular_step == 5
