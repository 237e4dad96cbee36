"""Layout constants, field geometry and color definitions."""

# Timing
FPS = 60
TPS = 60

# Field geometry (meters)
FIELD_HALF_W = 8.0
SPAWN_Z = -3.0
START_Z = 0.0
FINISH_Z = 30.0
DOLL_Z = 33.0
FIELD_MIN_Z = -5.0
FIELD_MAX_Z = 35.0
WALK_SPEED = 4.0  # m/s

# Layout dimensions (pixels)
FIELD_W = 480
FIELD_H = 640
SIDEBAR_W = 260
STATUS_H = 36

SCREEN_W = FIELD_W + SIDEBAR_W
SCREEN_H = FIELD_H + STATUS_H

PX_PER_M = FIELD_H / (FIELD_MAX_Z - FIELD_MIN_Z)
PLAYER_RADIUS = 8
DOLL_RADIUS = 14

# Colors
BG_COLOR = (20, 20, 30)
SIDEBAR_BG = (25, 25, 38)
STATUS_BG = (35, 35, 50)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
LABEL_COLOR = (180, 180, 200)
START_LINE_COLOR = (240, 240, 240)
FINISH_LINE_COLOR = (240, 200, 60)
RECT_COLOR = (70, 70, 90)
PLAYER_COLOR = (60, 160, 255)
PLAYER_DOWN_COLOR = (120, 40, 40)
DOLL_COLOR = (255, 140, 40)
FLASH_COLOR = (255, 255, 255)

CUE_LOG_LINES = 8
