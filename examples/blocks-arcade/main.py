"""Blocks Arcade - playable front end for tick-blocks.

Blue blocks fall down six columns; click them for points before they reach
the danger zone. Red blocks cost points when clicked. Each level is a fixed
length of time; the last level ends the game.

Controls:
  Click / tap   Hit a block, press a menu button, skip the instructions
  Enter         First menu button
  Esc           Pause / Resume
  Q             Quit
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any

import pygame

from tick_blocks import Game, GameConfig, HighScoreTable, InputProfile, Phase, SoundBoard, Timer
from tick_blocks import topics
from ui.board import block_at, draw_board
from ui.constants import (
    BG_COLOR,
    BLOCK_H,
    DANGER_ZONE_Y,
    FPS,
    INSTRUCTIONS_DELAY,
    MENU_SLIDE_TIME,
    NUM_COLUMNS,
    SCREEN_H,
    SCREEN_W,
    TPS,
)
from ui.hud import draw_dashboard
from ui.menus import MENUS, button_at, draw_menu

logger = logging.getLogger("blocks-arcade")

# sound id -> {mime: file name}
SOUND_FILES = {
    "score": {"audio/ogg": "score.ogg", "audio/wav": "score.wav"},
    "danger": {"audio/ogg": "danger.ogg", "audio/wav": "danger.wav"},
    "level-end": {"audio/ogg": "level-end.ogg", "audio/wav": "level-end.wav"},
    "game-over": {"audio/ogg": "game-over.ogg", "audio/wav": "game-over.wav"},
}
SOUND_CUES = {
    topics.ENTITY_SCORE_CLICKED: "score",
    topics.ENTITY_DANGER_CLICKED: "danger",
    topics.SESSION_LEVEL_STOPPED: "level-end",
    topics.SESSION_GAME_OVER: "game-over",
}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Blocks Arcade - tick-blocks demo")
    p.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    p.add_argument("--levels", type=int, default=5, help="Levels per game (1-20, default: 5)")
    p.add_argument("--level-time", type=float, default=60.0,
                   help="Seconds per level (5-600, default: 60)")
    p.add_argument("--touch", action="store_true", help="Use the gentler touch speed curve")
    p.add_argument("--name", type=str, default="PLAYER", help="Name for high score entries")
    p.add_argument("--scores", type=str, default=None, metavar="FILE",
                   help="Load and save high scores as JSON in FILE")
    p.add_argument("--sounds", type=str, default=None, metavar="DIR",
                   help="Directory holding the sound cue files")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = p.parse_args()
    args.levels = max(1, min(20, args.levels))
    args.level_time = max(5.0, min(600.0, args.level_time))
    return args


class Arcade:
    """Holds the game plus the front-end state around it."""

    def __init__(self, args: argparse.Namespace, surface: pygame.Surface) -> None:
        config = GameConfig(
            num_columns=NUM_COLUMNS,
            total_levels=args.levels,
            level_duration=args.level_time,
            spawn_position=-BLOCK_H,
            tps=TPS,
        )
        profile = InputProfile.TOUCH if args.touch else InputProfile.POINTER
        self.game = Game(config, surface=surface, seed=args.seed, profile=profile)
        self.bus = self.game.bus
        self.player_name = args.name

        self.scores_path: str | None = args.scores
        self.high_scores = HighScoreTable()
        if self.scores_path and os.path.exists(self.scores_path):
            with open(self.scores_path) as f:
                self.high_scores.restore(json.load(f))

        self.flash = 0.0
        self.instructions_timer: Timer | None = None
        self.menu_offset = 0.0

        self.bus.subscribe(topics.SESSION_PHASE_CHANGED, self._on_phase_changed)
        self.bus.subscribe(topics.SESSION_GAME_OVER, self._on_game_over)
        self.bus.subscribe(topics.ENTITY_REACHED_THRESHOLD, self._on_reached_threshold)

        self.sounds: SoundBoard | None = None
        if args.sounds:
            self.sounds = self._build_sounds(args.sounds)

        self.game.initialize()
        self.game.set_danger_zone_position(DANGER_ZONE_Y)
        logger.info("seed %d", self.game.engine.seed)

    def _build_sounds(self, directory: str) -> SoundBoard | None:
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            logger.warning("sound disabled: %s", exc)
            return None

        board = SoundBoard(
            self.bus,
            player=lambda sound: sound.play(),
            loader=pygame.mixer.Sound,
            can_play=lambda mime: mime in ("audio/ogg", "audio/wav"),
        )
        for sound_id, files in SOUND_FILES.items():
            paths = {
                mime: os.path.join(directory, name)
                for mime, name in files.items()
                if os.path.exists(os.path.join(directory, name))
            }
            board.add_sound(sound_id, paths)
        for signal_name, sound_id in SOUND_CUES.items():
            board.cue(signal_name, sound_id)
        board.init()
        return board

    # -- Bus handlers --

    def _on_phase_changed(self, signal: str, data: dict[str, Any]) -> None:
        new = data["new"]
        if new is Phase.INSTRUCTIONS:
            if self.instructions_timer is not None:
                self.instructions_timer.cancel()
            self.instructions_timer = self.game.scheduler.call_later(
                "instructions", INSTRUCTIONS_DELAY,
                lambda: self.bus.publish(topics.INSTRUCTIONS_DONE),
            )
        if new in MENUS:
            # Menu buttons stay disabled until the slide-in finishes.
            self.menu_offset = 1.0
            self.bus.publish(topics.MENU_ANIMATING, animating=True)
            self.game.scheduler.call_later(
                "menu-slide", MENU_SLIDE_TIME,
                lambda: self.bus.publish(topics.MENU_ANIMATING, animating=False),
            )

    def _on_game_over(self, signal: str, data: dict[str, Any]) -> None:
        rank = self.high_scores.insert(self.player_name, data["score"])
        if rank is None:
            return
        logger.info("new high score %d at rank %d", data["score"], rank + 1)
        if self.scores_path:
            with open(self.scores_path, "w") as f:
                json.dump(self.high_scores.snapshot(), f, indent=2)

    def _on_reached_threshold(self, signal: str, data: dict[str, Any]) -> None:
        self.flash = 0.25

    # -- Input --

    def click(self, pos: tuple[int, int]) -> None:
        phase = self.game.phase
        if phase is Phase.PLAYING:
            block = block_at(self.game.active_entities, pos)
            if block is not None:
                self.game.intercept(block)
        elif phase is Phase.INSTRUCTIONS:
            self.bus.publish(topics.INSTRUCTIONS_DONE)
        else:
            button = button_at(phase, pos, self.slide_px())
            if button is not None:
                self.bus.publish(button.topic)

    def confirm(self) -> None:
        phase = self.game.phase
        if phase in MENUS:
            _, buttons = MENUS[phase]
            self.bus.publish(buttons[0].topic)
        elif phase is Phase.INSTRUCTIONS:
            self.bus.publish(topics.INSTRUCTIONS_DONE)

    # -- Frame --

    def update(self, frame_seconds: float) -> None:
        self.game.frame(frame_seconds)
        self.flash = max(0.0, self.flash - frame_seconds)
        if self.menu_offset > 0:
            self.menu_offset = max(0.0, self.menu_offset - frame_seconds / MENU_SLIDE_TIME)

    def slide_px(self) -> int:
        return int(self.menu_offset * SCREEN_H // 2)

    def close(self) -> None:
        if self.sounds is not None:
            self.sounds.dispose()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_W, SCREEN_H))
    pygame.display.set_caption("Blocks Arcade - tick-blocks demo")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 18)
    title_font = pygame.font.SysFont("monospace", 36, bold=True)

    arcade = Arcade(args, screen)
    game = arcade.game
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q:
                    running = False
                elif event.key == pygame.K_ESCAPE:
                    arcade.bus.publish(topics.INPUT_PAUSE_KEY)
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    arcade.confirm()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if not args.touch:
                    arcade.click(event.pos)

            elif event.type == pygame.FINGERDOWN and args.touch:
                arcade.click((int(event.x * SCREEN_W), int(event.y * SCREEN_H)))

        # --- Tick ---
        arcade.update(dt)

        # --- Render ---
        screen.fill(BG_COLOR)
        draw_board(screen, game.active_entities, game.simulator.leaving_entities, arcade.flash)
        draw_dashboard(
            screen, font, game.score, game.level, game.config.total_levels, game.progress
        )
        if game.phase is not Phase.PLAYING:
            draw_menu(
                screen,
                font,
                title_font,
                game.phase,
                game.session.accepts,
                offset=arcade.slide_px(),
                high_scores=arcade.high_scores.entries(),
            )

        pygame.display.flip()

    arcade.close()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
