"""Menu overlays. Each button publishes one intent topic."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from tick_blocks import HighScore, Phase
from tick_blocks import session, topics

from ui.constants import (
    BUTTON_BG,
    BUTTON_DISABLED,
    BUTTON_GAP,
    BUTTON_H,
    BUTTON_W,
    OVERLAY,
    SCREEN_H,
    SCREEN_W,
    TEXT_COLOR,
    TEXT_DIM,
)


@dataclass(frozen=True)
class Button:
    label: str
    topic: str
    event: str  # session event the intent maps to, for enabling the button


MENUS: dict[Phase, tuple[str, tuple[Button, ...]]] = {
    Phase.MAIN_MENU: ("BLOCKS", (Button("Play", topics.MENU_PLAY, session.START),)),
    Phase.PAUSED: ("PAUSED", (
        Button("Resume", topics.MENU_RESUME, session.RESUME),
        Button("Restart", topics.MENU_RESTART, session.RESTART),
        Button("Main menu", topics.MENU_MAIN_MENU, session.MAIN_MENU),
    )),
    Phase.LEVEL_TRANSITION: ("LEVEL CLEAR", (
        Button("Continue", topics.MENU_CONTINUE, session.CONTINUE),
        Button("Restart", topics.MENU_RESTART, session.RESTART),
        Button("Main menu", topics.MENU_MAIN_MENU, session.MAIN_MENU),
    )),
    Phase.GAME_OVER: ("GAME OVER", (
        Button("Play again", topics.MENU_RESTART, session.RESTART),
        Button("Main menu", topics.MENU_MAIN_MENU, session.MAIN_MENU),
    )),
}

INSTRUCTIONS = (
    "Click the blue blocks before they fall.",
    "Red blocks cost points, leave them alone.",
    "Esc pauses.",
)


def button_rects(buttons: Sequence[Button], offset: int = 0) -> list[pygame.Rect]:
    total = len(buttons) * BUTTON_H + (len(buttons) - 1) * BUTTON_GAP
    top = (SCREEN_H - total) // 2 + offset
    return [
        pygame.Rect((SCREEN_W - BUTTON_W) // 2, top + i * (BUTTON_H + BUTTON_GAP), BUTTON_W, BUTTON_H)
        for i in range(len(buttons))
    ]


def button_at(phase: Phase, pos: tuple[int, int], offset: int = 0) -> Button | None:
    if phase not in MENUS:
        return None
    _, buttons = MENUS[phase]
    for button, rect in zip(buttons, button_rects(buttons, offset)):
        if rect.collidepoint(pos):
            return button
    return None


def draw_menu(
    surface: pygame.Surface,
    font: pygame.font.Font,
    title_font: pygame.font.Font,
    phase: Phase,
    accepts: Callable[[str], bool],
    offset: int = 0,
    high_scores: Sequence[HighScore] = (),
) -> None:
    """Draw the overlay for ``phase``; ``offset`` slides it down while animating."""
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(OVERLAY)
    surface.blit(overlay, (0, 0))

    if phase is Phase.INSTRUCTIONS:
        for i, line in enumerate(INSTRUCTIONS):
            text = font.render(line, True, TEXT_COLOR)
            surface.blit(text, text.get_rect(center=(SCREEN_W // 2, SCREEN_H // 2 - 30 + i * 28)))
        return

    title, buttons = MENUS[phase]
    rects = button_rects(buttons, offset)
    heading = title_font.render(title, True, TEXT_COLOR)
    surface.blit(heading, heading.get_rect(center=(SCREEN_W // 2, rects[0].top - 60)))

    for button, rect in zip(buttons, rects):
        enabled = accepts(button.event)
        pygame.draw.rect(surface, BUTTON_BG if enabled else BUTTON_DISABLED, rect, border_radius=8)
        label = font.render(button.label, True, TEXT_COLOR if enabled else TEXT_DIM)
        surface.blit(label, label.get_rect(center=rect.center))

    if phase is Phase.GAME_OVER and high_scores:
        y = rects[-1].bottom + 30
        for i, entry in enumerate(high_scores):
            row = font.render(f"{i + 1:>2}. {entry.name:<10} {entry.score:>6}", True, TEXT_DIM)
            surface.blit(row, row.get_rect(center=(SCREEN_W // 2, y + i * 22)))
