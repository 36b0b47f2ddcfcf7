"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

# ── Window & Grid ─────────────────────────────────────────────────
PANEL_H         = 60
BOARD_PX        = 560
MARGIN          = 10
WIDTH           = BOARD_PX + 2 * MARGIN
HEIGHT          = BOARD_PX + PANEL_H + 2 * MARGIN
OFFSET_X        = MARGIN
OFFSET_Y        = PANEL_H + MARGIN
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (10,  10,  15)
GRID_COL    = (15,  20,  32)
SNAKE_COL   = (0,   255, 136)
SNAKE_DIM   = (0,   140, 80)
APPLE_COL   = (255, 51,  102)
SEED_COL    = (255, 228, 77)
WALL_COL    = (255, 120, 0)
UI_COL      = (120, 120, 170)
PANEL_BG    = (12,  12,  20)
BORDER_COL  = (26,  26,  62)

# ── Session ───────────────────────────────────────────────────────
COUNTDOWN_START = 3
MAX_RECORDS     = 10

# ── Scoring ───────────────────────────────────────────────────────
STREAK_BONUS_STEP = 2        # per streak level
STREAK_BONUS_CAP  = 10
SPEED_BONUS       = 3        # flat bonus on every apple
SEED_DIVISOR      = 6        # seeds are worth ceil(apple_points / 6)
COMBO_WINDOW_SEC  = 3.0
COMBO_LENGTH      = 3
COMBO_BONUS       = 500
WIN_FILL_RATIO    = 0.3
COMPLETION_BONUS = {"easy": 100, "medium": 150, "hard": 200}

# ── Spawning & abilities ──────────────────────────────────────────
SPAWN_ATTEMPTS  = 100
MAGNET_RADIUS   = 3

# ── Survivor ──────────────────────────────────────────────────────
STAGE_BASE_POINTS  = 200
STAGE_STEP_POINTS  = 100
SPEEDUP_SCORE_STEP = 100
BORDER_ORDER       = ("top", "right", "bottom", "left")
BOUNCE_DURATION_SEC = 1.0
BOUNCE_SLOWDOWN     = 10

# ── Game States ───────────────────────────────────────────────────
STATE_MENU      = "menu"
STATE_COUNTDOWN = "countdown"
STATE_RUNNING   = "running"
STATE_PAUSED    = "paused"
STATE_WON       = "won"
STATE_OVER      = "gameover"

# ── Sound cues ────────────────────────────────────────────────────
SOUND_EAT     = "eat"
SOUND_BUMP    = "bump"
SOUND_LEVELUP = "levelup"
