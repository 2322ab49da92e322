# ============================================================================
# GRID
# ============================================================================
GRID_SIZE_MIN = 8            # grid edge length for levels 1-10
GRID_SIZE_MAX = 17           # cap reached from level 91 onwards
LEVELS_PER_GRID_STEP = 10    # grid grows by one every ten levels
CONTAINER_SIZE = 400         # board width in pixels, split evenly into tiles
PALETTE_SIZE = 5


# ============================================================================
# SCORING & LEVELS
# ============================================================================
BASE_SCORE = 500             # level 1 target in the scaled variant
SCORE_INCREMENT = 100        # added to the target for every level after the first
FLAT_TARGET_SCORE = 1000     # target for every level in the flat variant
MAX_LEVEL = 100
POINTS_PER_TILE = 10
TILES_PER_MATCH = 3


# ============================================================================
# TIMING (seconds)
# ============================================================================
GAME_TIME = 60
REMOVAL_DELAY = 0.3          # removal phase shown before gravity
SETTLE_DELAY = 0.3           # new tiles flagged before settling
LEVEL_UP_DELAY = 1.5         # "LEVEL n CLEAR" display
COMPLETION_DELAY = 1.0       # pause before the completed screen
POP_INTERVAL = 0.15          # spacing of repeated pop cues


# ============================================================================
# TIMERS
# ============================================================================
TIMER_RESOLVE_GRAVITY = "resolve_gravity"
TIMER_RESOLVE_SETTLE = "resolve_settle"
TIMER_LEVEL_UP = "level_up"
TIMER_COMPLETION = "completion"
TIMER_SOUND_CUE = "sound_cue"

TIMER_GROUP_RESOLVE = "resolve"
TIMER_GROUP_PROGRESSION = "progression"
TIMER_GROUP_SOUND = "sound"


# ============================================================================
# SOUND CUES
# ============================================================================
SOUND_POP = "pop"


# ============================================================================
# WINDOW (host collaborator only)
# ============================================================================
WINDOW_WIDTH = 560
WINDOW_HEIGHT = 620
BOTTOM_MARGIN = 40
HUD_HEIGHT = 150
TILE_PADDING = 2
