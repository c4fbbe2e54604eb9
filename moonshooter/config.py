"""Game settings, balance values and screen layout constants."""

from enum import IntFlag

# Game settings
PLAY_MUSIC = False
SHOW_FPS = True
BLINK_TICKS = 3

# Game balance
BULLET_DAMAGE = 10
BULLET_HP = 2
ENEMY_DAMAGE = 10
PLAYER_DAMAGE = 10
PLAYER_HP = 10
FIRE_RATE = 14
WAVE_DURATION = 180  # frames per wave
WAVE_INTERVAL = 300  # frames between waves

# Movement and positioning (pixels, fractional values allowed)
BULLET_OFFSET_X = 8.0
ENEMY_SPEED = 2.5
PLAYER_SPEED = 2.0

# Screen dimensions
SCREEN_HEIGHT = 224
SCREEN_WIDTH = 320
SCREEN_TILE_ROWS = 28
SCROLL_PLANES = 5

# Object dimensions
BULLET_HEIGHT = 10
BULLET_WIDTH = 22
ENEMY_HEIGHT = 24
ENEMY_WIDTH = 24
ENEMY_HP = 10
ENEMY_SCORE_VALUE = 10
OBJECT_SIZE = 16
PLAYER_HEIGHT = 24
PLAYER_WIDTH = 24

# Object limits
MAX_BULLETS = 20
MAX_ENEMIES = 16
MAX_EXPLOSION = 10

# Player settings
PLAYER_INITIAL_X = 16
PLAYER_INITIAL_Y_OFFSET = 48
PLAYER_INVINCIBILITY_DURATION = 150
PLAYER_RESPAWN_DELAY = 60
PLAYER_BLINK_RATE = 4
PLAYER_BLINK_VISIBLE_FRAMES = 2
PLAYER_LIVES = 3

# UI settings
JOIN_MESSAGE_BLINK_INTERVAL = 60
JOIN_MESSAGE_VISIBLE_FRAMES = 30
PLAYER1_JOIN_TEXT_POS_X = 1
PLAYER2_JOIN_TEXT_POS_X = 25
JOIN_TEXT_POS_Y = 27
JOIN_TEXT_WIDTH = 15
FPS_CPU_LOAD_POS_X = 17
FPS_CPU_LOAD_POS_Y = 27
FPS_POS_X = 21
FPS_POS_Y = 27

# Animation and effects
EXPLOSION_X_OFFSET = 8
NORMAL_FRAME = 0
DAMAGE_FRAME = 1
PLAYER_NEUTRAL_ANIM = 0
PLAYER_UP_ANIM = 1
PLAYER_DOWN_ANIM = 2

# Sound channels
SHOOT_SOUND_CHANNEL = 2
EXPLOSION_SOUND_CHANNEL = 3

# Palettes
PAL0 = 0
PAL1 = 1
PAL2 = 2
PAL3 = 3


class Button(IntFlag):
    """Joypad button bits."""

    NONE = 0
    UP = 0x0001
    DOWN = 0x0002
    LEFT = 0x0004
    RIGHT = 0x0008
    B = 0x0010
    C = 0x0020
    A = 0x0040
    START = 0x0080