"""Game configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_blocks.types import InputProfile


def _default_level_speed_step() -> dict[InputProfile, float]:
    return {InputProfile.POINTER: 0.5, InputProfile.TOUCH: 0.3}


@dataclass(frozen=True)
class GameConfig:
    """Immutable tuning for a game session.

    Speeds are in fall-axis units per tick, durations and intervals in
    seconds of engine time.

    Attributes:
        num_columns: Number of columns blocks can spawn in (at least 2).
        total_levels: Levels in a full game; the last one ends in game over.
        level_duration: Length of each level.
        initial_speed: Fall speed at level 1.
        max_initial_speed: Cap for the level-derived starting speed.
        level_speed_step: Extra starting speed per level, per input profile.
        speed_step: Speed added on every ``speed_up_every``-th score hit.
        speed_up_every: Score hits between speed-ups.
        low_speed_ceiling: Speed cap for levels below ``speed_ceiling_level``.
        max_speed: Speed cap from ``speed_ceiling_level`` on.
        speed_ceiling_level: First level that uses ``max_speed``.
        initial_spawn_interval: Delay between spawns when a level starts.
        min_spawn_interval: Spawn interval floor at level 1.
        min_spawn_interval_level_step: Floor reduction per level.
        min_spawn_interval_limit: Absolute floor regardless of level.
        spawn_interval_decay: Factor applied to the interval per score hit.
        score_ratio: Probability that a spawn is a score block.
        score_amount: Points gained for a score block hit.
        danger_amount: Points lost for a danger block hit.
        spawn_position: Fall-axis offset new blocks start at.
        threshold_position: Default danger-zone offset until the layout sets one.
        pool_size: Blocks preallocated per variant.
        clear_grace_period: Time leaving blocks stay visible after a level.
        tps: Engine ticks per second.
    """

    num_columns: int = 6
    total_levels: int = 5
    level_duration: float = 60.0
    initial_speed: float = 2.0
    max_initial_speed: float = 6.0
    level_speed_step: dict[InputProfile, float] = field(
        default_factory=_default_level_speed_step
    )
    speed_step: float = 0.2
    speed_up_every: int = 5
    low_speed_ceiling: float = 6.0
    max_speed: float = 10.0
    speed_ceiling_level: int = 3
    initial_spawn_interval: float = 1.0
    min_spawn_interval: float = 0.5
    min_spawn_interval_level_step: float = 0.05
    min_spawn_interval_limit: float = 0.25
    spawn_interval_decay: float = 0.98
    score_ratio: float = 5 / 6
    score_amount: int = 10
    danger_amount: int = 30
    spawn_position: float = 0.0
    threshold_position: float = 600.0
    pool_size: int = 10
    clear_grace_period: float = 1.0
    tps: int = 60

    def __post_init__(self) -> None:
        if self.num_columns < 2:
            raise ValueError(f"num_columns must be >= 2, got {self.num_columns}")
        if self.total_levels < 1:
            raise ValueError(f"total_levels must be >= 1, got {self.total_levels}")
        if self.level_duration <= 0:
            raise ValueError(f"level_duration must be > 0, got {self.level_duration}")
        if self.initial_speed < 0 or self.speed_step < 0:
            raise ValueError("speeds must be >= 0")
        if self.speed_up_every < 1:
            raise ValueError(f"speed_up_every must be >= 1, got {self.speed_up_every}")
        if self.min_spawn_interval_limit <= 0:
            raise ValueError(
                f"min_spawn_interval_limit must be > 0, got {self.min_spawn_interval_limit}"
            )
        if self.initial_spawn_interval < self.min_spawn_interval_limit:
            raise ValueError("initial_spawn_interval is below min_spawn_interval_limit")
        if not 0.0 < self.spawn_interval_decay <= 1.0:
            raise ValueError(
                f"spawn_interval_decay must be in (0, 1], got {self.spawn_interval_decay}"
            )
        if not 0.0 <= self.score_ratio <= 1.0:
            raise ValueError(f"score_ratio must be in [0, 1], got {self.score_ratio}")
        if self.score_amount < 0 or self.danger_amount < 0:
            raise ValueError("score deltas must be >= 0")
        if self.clear_grace_period < 0:
            raise ValueError(
                f"clear_grace_period must be >= 0, got {self.clear_grace_period}"
            )
        if self.tps <= 0:
            raise ValueError("tps must be positive")
        missing = set(InputProfile) - set(self.level_speed_step)
        if missing:
            raise ValueError(f"level_speed_step missing profiles: {sorted(missing)}")

    def speed_ceiling(self, level: int) -> float:
        if level < self.speed_ceiling_level:
            return self.low_speed_ceiling
        return self.max_speed

    def spawn_interval_floor(self, level: int) -> float:
        reduced = self.min_spawn_interval - (level - 1) * self.min_spawn_interval_level_step
        return max(self.min_spawn_interval_limit, reduced)

    def level_speed(self, level: int, profile: InputProfile) -> float:
        """Starting fall speed for ``level`` on ``profile``."""
        ramp = self.initial_speed + (level - 1) * self.level_speed_step[profile]
        return max(0.0, min(ramp, self.max_initial_speed, self.speed_ceiling(level)))
