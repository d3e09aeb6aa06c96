"""Session orchestration: phases, level progression, score, and the level timer.

Intents arrive as bus signals from menus and input. Each one is checked
against the current phase; intents that do not apply (pause in the main
menu, play while a menu animates) are dropped silently, since input races
are expected in an interactive front end.
"""
from __future__ import annotations

import logging
from typing import Any

from tick_blocks import topics
from tick_blocks.bus import SignalBus
from tick_blocks.config import GameConfig
from tick_blocks.fsm import PhaseMachine
from tick_blocks.timer import LevelTimer
from tick_blocks.types import ConfigurationError, Phase, Variant

logger = logging.getLogger(__name__)

START = "start"
INSTRUCTIONS_DONE = "instructions_done"
PAUSE = "pause"
RESUME = "resume"
LEVEL_END = "level_end"
GAME_OVER = "game_over"
CONTINUE = "continue"
RESTART = "restart"
MAIN_MENU = "main_menu"

TRANSITIONS: dict[Phase, dict[str, Phase]] = {
    Phase.MAIN_MENU: {START: Phase.INSTRUCTIONS},
    Phase.INSTRUCTIONS: {INSTRUCTIONS_DONE: Phase.PLAYING},
    Phase.PLAYING: {
        PAUSE: Phase.PAUSED,
        LEVEL_END: Phase.LEVEL_TRANSITION,
        GAME_OVER: Phase.GAME_OVER,
        RESTART: Phase.PLAYING,
    },
    Phase.PAUSED: {
        RESUME: Phase.PLAYING,
        RESTART: Phase.PLAYING,
        MAIN_MENU: Phase.MAIN_MENU,
    },
    Phase.LEVEL_TRANSITION: {
        CONTINUE: Phase.PLAYING,
        RESTART: Phase.PLAYING,
        MAIN_MENU: Phase.MAIN_MENU,
    },
    Phase.GAME_OVER: {
        RESTART: Phase.PLAYING,
        MAIN_MENU: Phase.MAIN_MENU,
    },
}


class GameSession:
    """Owns phase, score, level, and the level timer for one player session."""

    def __init__(
        self,
        bus: SignalBus,
        config: GameConfig | None = None,
        surface: Any = None,
    ) -> None:
        self._bus = bus
        self._config = config if config is not None else GameConfig()
        self.surface = surface

        self._machine: PhaseMachine[Phase] = PhaseMachine(
            Phase.MAIN_MENU, TRANSITIONS, on_transition=self._on_transition
        )
        self._timer = LevelTimer(bus, self._config.level_duration, on_expire=self._on_level_expired)
        self._score = 0
        self._level = 1
        self._score_amount = self._config.score_amount
        self._danger_amount = self._config.danger_amount
        self._animating = False
        self._initialized = False

    # -- Read-only state --

    @property
    def phase(self) -> Phase:
        return self._machine.state

    @property
    def score(self) -> int:
        return self._score

    @property
    def level(self) -> int:
        return self._level

    @property
    def progress(self) -> float:
        return self._timer.progress

    @property
    def is_paused(self) -> bool:
        return self._machine.state is Phase.PAUSED

    @property
    def animating(self) -> bool:
        return self._animating

    @property
    def timer(self) -> LevelTimer:
        return self._timer

    def accepts(self, event: str) -> bool:
        """Whether an intent for ``event`` would be acted on right now."""
        return not self._animating and self._machine.can(event)

    # -- Lifecycle --

    def initialize(self) -> None:
        """Wire intent handlers. Requires a render surface to have been set."""
        if self.surface is None:
            raise ConfigurationError("The game can't be initialized without a render surface.")
        if self._initialized:
            return
        self._initialized = True

        subscriptions = {
            topics.MENU_PLAY: lambda s, d: self.request_start(),
            topics.INSTRUCTIONS_DONE: lambda s, d: self.complete_instructions(),
            topics.MENU_RESUME: lambda s, d: self.request_resume(),
            topics.INPUT_PAUSE_KEY: lambda s, d: self.toggle_pause(),
            topics.MENU_CONTINUE: lambda s, d: self.request_continue(),
            topics.MENU_RESTART: lambda s, d: self.request_restart(),
            topics.MENU_MAIN_MENU: lambda s, d: self.request_reset(),
            topics.MENU_ANIMATING: self._on_animating,
            topics.SCORE_INCREASE: lambda s, d: self.change_score(d["amount"]),
            topics.SCORE_DECREASE: lambda s, d: self.change_score(-d["amount"]),
            topics.ENTITY_SCORE_CLICKED: lambda s, d: self._on_block_hit(Variant.SCORE),
            topics.ENTITY_DANGER_CLICKED: lambda s, d: self._on_block_hit(Variant.DANGER),
        }
        for signal_name, handler in subscriptions.items():
            self._bus.subscribe(signal_name, handler)
        logger.info(
            "session initialized (%d levels, %.0fs each)",
            self._config.total_levels,
            self._config.level_duration,
        )

    # -- Intents --

    def request_start(self) -> None:
        if not self._accept(START):
            return
        self._reset_progress()
        self._machine.fire(START)
        self._bus.publish(topics.SESSION_STARTED)

    def complete_instructions(self) -> None:
        if not self._machine.can(INSTRUCTIONS_DONE):
            logger.debug("ignoring instructions done in %s", self.phase.value)
            return
        self._machine.fire(INSTRUCTIONS_DONE)
        self._begin_level()

    def request_pause(self) -> None:
        if not self._accept(PAUSE):
            return
        self._timer.stop()
        self._machine.fire(PAUSE)
        self._bus.publish(topics.SESSION_PAUSED)

    def request_resume(self) -> None:
        if not self._accept(RESUME):
            return
        self._timer.resume()
        self._machine.fire(RESUME)
        self._bus.publish(topics.SESSION_RESUMED)

    def toggle_pause(self) -> None:
        if self.phase is Phase.PLAYING:
            self.request_pause()
        elif self.phase is Phase.PAUSED:
            self.request_resume()

    def request_continue(self) -> None:
        if not self._accept(CONTINUE):
            return
        self._level = min(self._level + 1, self._config.total_levels)
        self._timer.reset()
        self._bus.publish(topics.SESSION_NEXT_LEVEL, level=self._level)
        self._bus.publish(topics.SESSION_LEVEL_CHANGED, level=self._level)
        self._machine.fire(CONTINUE)
        self._begin_level()

    def request_restart(self) -> None:
        if not self._accept(RESTART):
            return
        self._timer.stop()
        self._bus.publish(topics.SESSION_RESET)
        self._reset_progress()
        self._machine.fire(RESTART)
        self._begin_level()

    def request_reset(self) -> None:
        """Abandon the session and return to the main menu."""
        if not self._accept(MAIN_MENU):
            return
        self._timer.stop()
        self._bus.publish(topics.SESSION_RESET)
        self._reset_progress()
        self._machine.fire(MAIN_MENU)

    def change_score(self, amount: int) -> None:
        """Apply a signed score change, clamping the total at zero."""
        if self.phase is not Phase.PLAYING:
            logger.debug("ignoring score change of %d in %s", amount, self.phase.value)
            return
        self._set_score(max(0, self._score + amount))

    def set_scores(self, score_amount: int, danger_amount: int) -> None:
        if score_amount < 0 or danger_amount < 0:
            raise ValueError("score amounts must be >= 0")
        self._score_amount = score_amount
        self._danger_amount = danger_amount
        self._bus.publish(
            topics.SESSION_SCORES, score_amount=score_amount, danger_amount=danger_amount
        )

    # -- Internals --

    def _accept(self, event: str) -> bool:
        if self.accepts(event):
            return True
        logger.debug(
            "ignoring %s intent in %s%s",
            event,
            self.phase.value,
            " (animating)" if self._animating else "",
        )
        return False

    def _begin_level(self) -> None:
        self._timer.start()
        logger.info("level %d started", self._level)
        self._bus.publish(topics.SESSION_LEVEL_STARTED, level=self._level)

    def _reset_progress(self) -> None:
        self._level = 1
        self._timer.reset()
        self._set_score(0)
        self._bus.publish(topics.SESSION_LEVEL_CHANGED, level=self._level)

    def _set_score(self, score: int) -> None:
        self._score = score
        self._bus.publish(topics.SESSION_SCORE_CHANGED, score=score)

    def _on_level_expired(self) -> None:
        if self.phase is not Phase.PLAYING:
            return
        logger.info("level %d stopped with score %d", self._level, self._score)
        self._bus.publish(topics.SESSION_LEVEL_STOPPED, level=self._level)
        if self._level >= self._config.total_levels:
            self._machine.fire(GAME_OVER)
            self._bus.publish(topics.SESSION_GAME_OVER, score=self._score)
        else:
            self._machine.fire(LEVEL_END)

    def _on_block_hit(self, variant: Variant) -> None:
        delta = self._score_amount if variant is Variant.SCORE else -self._danger_amount
        self.change_score(delta)

    def _on_animating(self, signal: str, data: dict[str, Any]) -> None:
        self._animating = bool(data.get("animating", False))

    def _on_transition(self, old: Phase, new: Phase, event: str) -> None:
        logger.debug("phase %s -> %s (%s)", old.value, new.value, event)
        self._bus.publish(topics.SESSION_PHASE_CHANGED, old=old, new=new)
