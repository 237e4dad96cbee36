"""Top-down field: tinted ground, lines, doll and player."""
from __future__ import annotations

import math

import pygame

from redlight.types import Color

from ui.constants import (
    DOLL_COLOR,
    DOLL_RADIUS,
    DOLL_Z,
    FIELD_H,
    FIELD_MIN_Z,
    FIELD_W,
    FINISH_LINE_COLOR,
    FINISH_Z,
    FLASH_COLOR,
    PLAYER_COLOR,
    PLAYER_DOWN_COLOR,
    PLAYER_RADIUS,
    PX_PER_M,
    RECT_COLOR,
    START_LINE_COLOR,
    START_Z,
)


def to_screen(x: float, z: float) -> tuple[int, int]:
    """World XZ to field pixels. +Z points up the screen."""
    sx = FIELD_W / 2 + x * PX_PER_M
    sy = FIELD_H - (z - FIELD_MIN_Z) * PX_PER_M
    return int(sx), int(sy)


def _ground(color: Color, intensity: float) -> tuple[int, int, int]:
    scale = 90 * max(0.0, intensity)
    return tuple(min(255, int(c * scale)) for c in color)


def _line(surface: pygame.Surface, z: float, depth: float, color) -> None:
    _, y = to_screen(0.0, z)
    band = max(1, int(depth * PX_PER_M))
    pygame.draw.rect(surface, RECT_COLOR, (0, y - band // 2, FIELD_W, band))
    pygame.draw.line(surface, color, (0, y), (FIELD_W, y), 2)


def draw_field(
    surface: pygame.Surface,
    light_color: Color,
    light_intensity: float,
    player_pos: tuple[float, float],
    player_down: bool,
    doll_yaw: float,
    rect_depth: float,
    flash: float,
) -> None:
    pygame.draw.rect(surface, _ground(light_color, light_intensity), (0, 0, FIELD_W, FIELD_H))

    _line(surface, START_Z, rect_depth, START_LINE_COLOR)
    _line(surface, FINISH_Z, rect_depth, FINISH_LINE_COLOR)

    # Doll faces -Z (toward the players) at yaw 180.
    dx, dy = to_screen(0.0, DOLL_Z)
    pygame.draw.circle(surface, DOLL_COLOR, (dx, dy), DOLL_RADIUS)
    facing = math.radians(doll_yaw)
    tip = (dx + int(math.sin(facing) * DOLL_RADIUS * 1.6),
           dy - int(math.cos(facing) * DOLL_RADIUS * 1.6))
    pygame.draw.line(surface, (30, 30, 30), (dx, dy), tip, 3)

    px, py = to_screen(*player_pos)
    color = PLAYER_DOWN_COLOR if player_down else PLAYER_COLOR
    pygame.draw.circle(surface, color, (px, py), PLAYER_RADIUS)

    if flash > 0:
        overlay = pygame.Surface((FIELD_W, FIELD_H), pygame.SRCALPHA)
        overlay.fill((*FLASH_COLOR, int(120 * flash)))
        surface.blit(overlay, (0, 0))
