"""Dashboard strip: score, level, and level progress."""
from __future__ import annotations

import pygame

from ui.constants import DASH_BG, DASH_H, PROGRESS_BG, PROGRESS_FG, SCREEN_W, TEXT_COLOR


def draw_dashboard(
    surface: pygame.Surface,
    font: pygame.font.Font,
    score: int,
    level: int,
    total_levels: int,
    progress: float,
) -> None:
    pygame.draw.rect(surface, DASH_BG, (0, 0, SCREEN_W, DASH_H))

    surface.blit(font.render(f"Score {score}", True, TEXT_COLOR), (12, 10))
    level_text = font.render(f"Level {level}/{total_levels}", True, TEXT_COLOR)
    surface.blit(level_text, (SCREEN_W - level_text.get_width() - 12, 10))

    bar = pygame.Rect(12, DASH_H - 18, SCREEN_W - 24, 8)
    pygame.draw.rect(surface, PROGRESS_BG, bar, border_radius=4)
    filled = bar.copy()
    filled.width = int(bar.width * progress)
    if filled.width > 0:
        pygame.draw.rect(surface, PROGRESS_FG, filled, border_radius=4)
