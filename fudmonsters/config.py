"""
Game Constants
===============
World dimensions, physics tuning and progression sizes.

All positions are in world pixels with the origin at the top-left.
"""

# =============================================================================
# WORLD
# =============================================================================

GAME_WIDTH = 640
GAME_HEIGHT = 400
FLOOR_Y = GAME_HEIGHT - 48

# =============================================================================
# PROGRESSION
# =============================================================================

SCENES_PER_STAGE = 10
STAGES_PER_LEVEL = 10

SCENE_CLEAR_DELAY = 38     # Frames with no enemies before the scene ends
STAGE_CLEAR_FRAMES = 80
LEVEL_CLEAR_FRAMES = 120
GAME_OVER_FRAMES = 140

# =============================================================================
# PLAYER
# =============================================================================

PLAYER_SIZE = 36
PLAYER_SPEED = 3.5
PLAYER_JUMP = -8.0
PLAYER_MAX_HEALTH = 8
PLAYER_START_X = 60
PLAYER_ATTACK_FRAMES = 10
PLAYER_ATTACK_COOLDOWN = 16
PLAYER_WALK_FRAMES = 5
PLAYER_WALK_SPEED = 6      # Ticks per walk frame

GRAVITY = 0.32

# =============================================================================
# ENEMIES
# =============================================================================

ENEMY_SIZE = 32
ENEMY_SPEED = 1.2
ENEMY_DEFAULT_HEALTH = 3
ENEMY_ATTACK_FRAMES = 18
ENEMY_WALK_FRAMES = 4
ENEMY_WALK_SPEED = 7

ENEMY_APPROACH_DISTANCE = 24   # Stop closing in horizontally inside this
ENEMY_VERTICAL_SLACK = 10
ENEMY_VERTICAL_FACTOR = 0.66
ENEMY_ATTACK_RANGE_X = 36
ENEMY_ATTACK_RANGE_Y = 20

FUDMONSTER_SPAWN_MIN_X = 330
FUDMONSTER_SPAWN_SPREAD = 180
MINIBOSS_SPAWN_X = 440
BOSS_SPAWN_X = 400

# =============================================================================
# COMBAT
# =============================================================================

KNOCKBACK_FORCE = 10
KNOCKBACK_SPEED = 4
KNOCKBACK_DECAY = 0.7
PLAYER_PUSHBACK = 12  # along the attacker's facing, i.e. away from it
