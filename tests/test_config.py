"""Tests for GameConfig validation and derived values."""
from __future__ import annotations

import dataclasses

import pytest

from tick_blocks import GameConfig, InputProfile


class TestValidation:
    def test_defaults_are_valid(self) -> None:
        cfg = GameConfig()
        assert cfg.num_columns == 6
        assert cfg.score_ratio == pytest.approx(5 / 6)

    def test_frozen(self) -> None:
        cfg = GameConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.num_columns = 3  # type: ignore[misc]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"num_columns": 1},
            {"total_levels": 0},
            {"level_duration": 0},
            {"speed_up_every": 0},
            {"spawn_interval_decay": 0.0},
            {"spawn_interval_decay": 1.5},
            {"score_ratio": 1.2},
            {"danger_amount": -1},
            {"min_spawn_interval_limit": 0},
            {"initial_spawn_interval": 0.1, "min_spawn_interval_limit": 0.2},
            {"clear_grace_period": -1},
            {"tps": 0},
            {"level_speed_step": {InputProfile.POINTER: 0.5}},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            GameConfig(**kwargs)


class TestDerived:
    def test_speed_ceiling_lower_below_threshold_level(self) -> None:
        cfg = GameConfig(low_speed_ceiling=4.0, max_speed=9.0, speed_ceiling_level=3)
        assert cfg.speed_ceiling(1) == 4.0
        assert cfg.speed_ceiling(2) == 4.0
        assert cfg.speed_ceiling(3) == 9.0
        assert cfg.speed_ceiling(10) == 9.0

    def test_spawn_interval_floor_shrinks_with_level_to_limit(self) -> None:
        cfg = GameConfig(
            min_spawn_interval=0.5,
            min_spawn_interval_level_step=0.1,
            min_spawn_interval_limit=0.3,
        )
        assert cfg.spawn_interval_floor(1) == pytest.approx(0.5)
        assert cfg.spawn_interval_floor(2) == pytest.approx(0.4)
        assert cfg.spawn_interval_floor(3) == pytest.approx(0.3)
        assert cfg.spawn_interval_floor(9) == pytest.approx(0.3)

    def test_level_speed_differs_by_profile(self) -> None:
        cfg = GameConfig(
            initial_speed=2.0,
            level_speed_step={InputProfile.POINTER: 0.5, InputProfile.TOUCH: 0.25},
            max_initial_speed=100.0,
            low_speed_ceiling=100.0,
            max_speed=100.0,
        )
        assert cfg.level_speed(1, InputProfile.POINTER) == pytest.approx(2.0)
        assert cfg.level_speed(3, InputProfile.POINTER) == pytest.approx(3.0)
        assert cfg.level_speed(3, InputProfile.TOUCH) == pytest.approx(2.5)

    def test_level_speed_capped(self) -> None:
        cfg = GameConfig(initial_speed=2.0, max_initial_speed=3.0, max_speed=10.0)
        assert cfg.level_speed(50, InputProfile.POINTER) == pytest.approx(3.0)

    def test_level_speed_respects_level_ceiling(self) -> None:
        cfg = GameConfig(
            initial_speed=2.0,
            max_initial_speed=8.0,
            low_speed_ceiling=2.5,
            speed_ceiling_level=5,
        )
        assert cfg.level_speed(4, InputProfile.POINTER) == pytest.approx(2.5)
