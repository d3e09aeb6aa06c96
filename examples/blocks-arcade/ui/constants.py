"""Layout constants and color definitions."""

# Timing
FPS = 60
TPS = 60
INSTRUCTIONS_DELAY = 3.0  # seconds of engine time
MENU_SLIDE_TIME = 0.3

# Layout dimensions
NUM_COLUMNS = 6
COLUMN_W = 80
BLOCK_H = 60
BLOCK_PAD = 4
BOARD_H = 640
DANGER_ZONE_H = 90
DASH_H = 56

BOARD_W = COLUMN_W * NUM_COLUMNS
SCREEN_W = BOARD_W
SCREEN_H = DASH_H + BOARD_H

# Fall-axis offset where the danger zone starts
DANGER_ZONE_Y = BOARD_H - DANGER_ZONE_H

# Menus
BUTTON_W = 220
BUTTON_H = 44
BUTTON_GAP = 14

# Colors
BG_COLOR = (18, 18, 28)
COLUMN_LINE = (34, 34, 50)
DASH_BG = (30, 30, 46)
DANGER_ZONE = (90, 24, 30)
DANGER_FLASH = (200, 40, 50)
PROGRESS_BG = (50, 50, 70)
PROGRESS_FG = (80, 200, 120)
OVERLAY = (0, 0, 0, 160)
BUTTON_BG = (60, 60, 90)
BUTTON_DISABLED = (40, 40, 52)
TEXT_COLOR = (220, 220, 230)
TEXT_DIM = (130, 130, 150)

# Variant value -> color
VARIANT_COLORS: dict[str, tuple[int, int, int]] = {
    "score": (60, 200, 240),
    "danger": (240, 80, 70),
}
LEAVING_ALPHA = 90
