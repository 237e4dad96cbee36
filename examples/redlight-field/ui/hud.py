"""Info panel (sidebar) and bottom status bar."""
from __future__ import annotations

import pygame

from redlight.types import Color

from ui.constants import (
    FIELD_H,
    FIELD_W,
    LABEL_COLOR,
    SCREEN_W,
    SIDEBAR_BG,
    SIDEBAR_W,
    STATUS_BG,
    STATUS_H,
    TEXT_COLOR,
    TEXT_DIM,
)


def _rgb(color: Color) -> tuple[int, int, int]:
    return tuple(int(max(0.0, min(1.0, c)) * 255) for c in color)


def draw_sidebar(
    surface: pygame.Surface,
    font: pygame.font.Font,
    big_font: pygame.font.Font,
    hud,
    cue_lines: list[str],
    round_number: int,
    death_state: str,
) -> None:
    """Draw right-side info panel."""
    x = FIELD_W
    pygame.draw.rect(surface, SIDEBAR_BG, (x, 0, SIDEBAR_W, FIELD_H))
    pygame.draw.line(surface, (50, 50, 70), (x, 0), (x, FIELD_H))

    pad = 10
    line_h = 20
    cx = x + pad
    cy = 8

    surface.blit(font.render(f"ROUND {round_number}", True, LABEL_COLOR), (cx, cy))
    cy += line_h + 4

    surface.blit(big_font.render(hud.timer, True, _rgb(hud.timer_color)), (cx, cy))
    cy += 40
    surface.blit(big_font.render(hud.status, True, _rgb(hud.status_color)), (cx, cy))
    cy += 40

    surface.blit(font.render(f"death: {death_state}", True, TEXT_COLOR), (cx, cy))
    cy += line_h + 8

    for line in hud.debug.splitlines():
        surface.blit(font.render(line, True, TEXT_DIM), (cx, cy))
        cy += line_h
    cy += 8

    surface.blit(font.render("Cues:", True, LABEL_COLOR), (cx, cy))
    cy += line_h
    for line in cue_lines:
        surface.blit(font.render(line, True, TEXT_DIM), (cx, cy))
        cy += line_h


def draw_status_bar(surface: pygame.Surface, font: pygame.font.Font) -> None:
    y = FIELD_H
    pygame.draw.rect(surface, STATUS_BG, (0, y, SCREEN_W, STATUS_H))
    help_text = "WASD move | F1 start | F2 finish | F3 check | G/R phase | K die | L log | Esc quit"
    surface.blit(font.render(help_text, True, TEXT_DIM), (10, y + 10))
