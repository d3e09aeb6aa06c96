"""Play field: columns, falling blocks, and the danger zone."""
from __future__ import annotations

from typing import Iterable

import pygame

from tick_blocks import Entity

from ui.constants import (
    BLOCK_H,
    BLOCK_PAD,
    BOARD_H,
    BOARD_W,
    COLUMN_LINE,
    COLUMN_W,
    DANGER_FLASH,
    DANGER_ZONE,
    DANGER_ZONE_H,
    DANGER_ZONE_Y,
    DASH_H,
    LEAVING_ALPHA,
    NUM_COLUMNS,
    VARIANT_COLORS,
)


def block_rect(block: Entity) -> pygame.Rect:
    """Screen rect for ``block``; its position is the top edge on the fall axis."""
    return pygame.Rect(
        block.column * COLUMN_W + BLOCK_PAD,
        DASH_H + int(block.position),
        COLUMN_W - 2 * BLOCK_PAD,
        BLOCK_H,
    )


def block_at(blocks: Iterable[Entity], pos: tuple[int, int]) -> Entity | None:
    """Topmost block under a screen position, if any."""
    hit = None
    for block in blocks:
        if block_rect(block).collidepoint(pos):
            hit = block
    return hit


def draw_board(
    surface: pygame.Surface,
    active: Iterable[Entity],
    leaving: Iterable[Entity],
    flash: float,
) -> None:
    zone_color = DANGER_FLASH if flash > 0 else DANGER_ZONE
    pygame.draw.rect(surface, zone_color, (0, DASH_H + DANGER_ZONE_Y, BOARD_W, DANGER_ZONE_H))

    for col in range(1, NUM_COLUMNS):
        x = col * COLUMN_W
        pygame.draw.line(surface, COLUMN_LINE, (x, DASH_H), (x, DASH_H + BOARD_H))

    # Leaving blocks fade out where they stopped.
    for block in leaving:
        rect = block_rect(block)
        ghost = pygame.Surface(rect.size, pygame.SRCALPHA)
        ghost.fill((*VARIANT_COLORS[block.variant.value], LEAVING_ALPHA))
        surface.blit(ghost, rect.topleft)

    for block in active:
        pygame.draw.rect(surface, VARIANT_COLORS[block.variant.value], block_rect(block), border_radius=6)
