"""Falling-block simulation: spawning, advancing, and retiring pooled entities."""
from __future__ import annotations

import logging
import random
from typing import Any

from tick_blocks import topics
from tick_blocks.bus import SignalBus
from tick_blocks.config import GameConfig
from tick_blocks.pool import Pool
from tick_blocks.schedule import Scheduler, Timer
from tick_blocks.types import Entity, InputProfile, InvariantViolation, Variant

logger = logging.getLogger(__name__)

_CLICK_SIGNALS = {
    Variant.SCORE: topics.ENTITY_SCORE_CLICKED,
    Variant.DANGER: topics.ENTITY_DANGER_CLICKED,
}


class EntitySimulator:
    """Owns the live blocks, the spawn timer, and the difficulty curve.

    Difficulty within a level only ever goes up: speed is non-decreasing and
    capped by :meth:`GameConfig.speed_ceiling`, the spawn interval is
    non-increasing and floored by :meth:`GameConfig.spawn_interval_floor`.
    Only :meth:`set_level` resets both.
    """

    def __init__(
        self,
        bus: SignalBus,
        scheduler: Scheduler,
        config: GameConfig | None = None,
        rng: random.Random | None = None,
        profile: InputProfile = InputProfile.POINTER,
    ) -> None:
        self._bus = bus
        self._scheduler = scheduler
        self._config = config if config is not None else GameConfig()
        self._rng = rng if rng is not None else random.Random()
        self._profile = profile

        self._pools: dict[Variant, Pool[Entity]] = {
            variant: Pool(lambda v=variant: Entity(variant=v), name=f"{variant.value}-pool")
            for variant in Variant
        }
        for pool in self._pools.values():
            pool.add(self._config.pool_size)

        self._active: list[Entity] = []
        self._leaving: list[Entity] = []
        self._running = False
        self._spawn_timer: Timer | None = None
        self._clear_timer: Timer | None = None

        self._level = 1
        self._threshold = self._config.threshold_position
        self._last_column: int | None = None
        self._speed = 0.0
        self._spawn_interval = 0.0
        self._speed_up_count = 0
        self.set_level(1)

        bus.subscribe(topics.SESSION_LEVEL_STARTED, self._on_level_started)
        bus.subscribe(topics.SESSION_PAUSED, self._on_paused)
        bus.subscribe(topics.SESSION_RESUMED, self._on_resumed)
        bus.subscribe(topics.SESSION_LEVEL_STOPPED, self._on_level_stopped)
        bus.subscribe(topics.SESSION_RESET, self._on_reset)
        bus.subscribe(topics.ENTITY_INTERCEPTED, self._on_intercepted_signal)

    # -- Read-only state --

    @property
    def active_entities(self) -> tuple[Entity, ...]:
        return tuple(self._active)

    @property
    def leaving_entities(self) -> tuple[Entity, ...]:
        return tuple(self._leaving)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def level(self) -> int:
        return self._level

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def spawn_interval(self) -> float:
        return self._spawn_interval

    @property
    def threshold(self) -> float:
        return self._threshold

    @property
    def last_column(self) -> int | None:
        return self._last_column

    def pool(self, variant: Variant) -> Pool[Entity]:
        return self._pools[variant]

    # -- Setters --

    def set_level(self, level: int) -> None:
        if level < 1:
            raise ValueError(f"level must be >= 1, got {level}")
        self._level = level
        self._speed = self._config.level_speed(level, self._profile)
        self._spawn_interval = self._config.initial_spawn_interval
        self._speed_up_count = 0

    def set_threshold_position(self, position: float) -> None:
        self._threshold = position

    # -- Run control --

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._schedule_spawn()
        logger.debug("simulator started (level=%d, speed=%.2f)", self._level, self._speed)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        if self._spawn_timer is not None:
            self._spawn_timer.cancel()
            self._spawn_timer = None

    def tick(self) -> None:
        """Advance every active block and retire those past the threshold."""
        if not self._running:
            return
        speed = self._speed
        threshold = self._threshold
        i = 0
        # A handler may stop the simulator mid-scan; stop advancing if so.
        while self._running and i < len(self._active):
            block = self._active[i]
            block.position += speed
            if block.position > threshold:
                self._retire(block, i)
                self._bus.publish(
                    topics.ENTITY_REACHED_THRESHOLD, variant=block.variant, entity=block
                )
                # The next block shifted into slot i.
                continue
            i += 1

    def spawn_one(self) -> Entity:
        cfg = self._config
        variant = Variant.SCORE if self._rng.random() < cfg.score_ratio else Variant.DANGER
        column = self._pick_column()

        block = self._pools[variant].get()
        block.position = cfg.spawn_position
        block.column = column
        block.active = True
        self._active.append(block)
        self._last_column = column

        self._bus.publish(topics.ENTITY_SPAWNED, variant=variant, column=column, entity=block)
        return block

    def on_intercepted(self, entity: Entity) -> None:
        """Handle a reported hit.

        Hits while stopped (paused, between levels) and hits on blocks no
        longer in play are ignored.
        """
        if not self._running:
            logger.debug("ignoring hit on %s block while stopped", entity.variant.value)
            return
        if not entity.active or entity not in self._active:
            logger.debug("ignoring hit on inactive %s block", entity.variant.value)
            return

        self._retire(entity)
        if entity.variant is Variant.SCORE:
            self._apply_score_hit()
        self._bus.publish(_CLICK_SIGNALS[entity.variant], entity=entity)

    def end_level(self) -> None:
        """Stop, and let the remaining blocks leave before returning them."""
        self.stop()
        leaving = self._active
        self._active = []
        for block in leaving:
            block.active = False
        self._leaving.extend(leaving)

        if self._clear_timer is not None:
            self._clear_timer.cancel()
            self._clear_timer = None
        if self._config.clear_grace_period > 0 and self._leaving:
            self._clear_timer = self._scheduler.call_later(
                "clear-leaving", self._config.clear_grace_period, self._release_leaving
            )
        else:
            self._release_leaving()

    def clear(self) -> None:
        """Immediately return every block to its pool."""
        self.stop()
        if self._clear_timer is not None:
            self._clear_timer.cancel()
            self._clear_timer = None
        while self._active:
            self._retire(self._active[-1], len(self._active) - 1)
        self._release_leaving()

    # -- Internals --

    def _pick_column(self) -> int:
        columns = [c for c in range(self._config.num_columns) if c != self._last_column]
        return self._rng.choice(columns)

    def _apply_score_hit(self) -> None:
        cfg = self._config
        self._speed_up_count += 1
        if self._speed_up_count >= cfg.speed_up_every:
            self._speed_up_count = 0
            self._speed = min(self._speed + cfg.speed_step, cfg.speed_ceiling(self._level))
        self._spawn_interval = max(
            cfg.spawn_interval_floor(self._level),
            self._spawn_interval * cfg.spawn_interval_decay,
        )

    def _retire(self, block: Entity, index: int | None = None) -> None:
        if index is None:
            try:
                index = self._active.index(block)
            except ValueError:
                raise InvariantViolation("retiring a block that is not active") from None
        elif self._active[index] is not block:
            raise InvariantViolation(f"block at index {index} does not match")
        del self._active[index]
        block.active = False
        self._pools[block.variant].put_back(block)

    def _release_leaving(self) -> None:
        self._clear_timer = None
        count = len(self._leaving)
        for block in self._leaving:
            self._pools[block.variant].put_back(block)
        self._leaving.clear()
        if count:
            self._bus.publish(topics.ENTITY_CLEARED, count=count)

    def _schedule_spawn(self) -> None:
        self._spawn_timer = self._scheduler.call_later(
            "spawn", self._spawn_interval, self._on_spawn_timer
        )

    def _on_spawn_timer(self) -> None:
        if not self._running:
            return
        self.spawn_one()
        self._schedule_spawn()

    # -- Bus handlers --

    def _on_level_started(self, signal: str, data: dict[str, Any]) -> None:
        self.set_level(data["level"])
        self.start()

    def _on_paused(self, signal: str, data: dict[str, Any]) -> None:
        self.stop()

    def _on_resumed(self, signal: str, data: dict[str, Any]) -> None:
        self.start()

    def _on_level_stopped(self, signal: str, data: dict[str, Any]) -> None:
        self.end_level()

    def _on_reset(self, signal: str, data: dict[str, Any]) -> None:
        self.clear()

    def _on_intercepted_signal(self, signal: str, data: dict[str, Any]) -> None:
        self.on_intercepted(data["entity"])
