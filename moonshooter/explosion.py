"""One-shot explosion effects that drift with the scrolling scene."""

from __future__ import annotations

import math

from moonshooter.config import (
    ENEMY_SPEED,
    EXPLOSION_SOUND_CHANNEL,
    EXPLOSION_X_OFFSET,
    NORMAL_FRAME,
    OBJECT_SIZE,
    PAL2,
)
from moonshooter.game_object import (
    EXPLOSION_SPRITE,
    GameObject,
    ObjectPool,
    release_object,
)
from moonshooter.state import GameState

EXPLOSION_SOUND = "xpcm_explosion"


def spawn_explosion(game: GameState, x: float, y: float) -> GameObject | None:
    """Start an explosion centred on x; None when the pool is exhausted."""
    explosion = game.explosion_pool.allocate()
    if explosion is None:
        return None
    explosion.init(
        EXPLOSION_SPRITE, PAL2, x - OBJECT_SIZE // 2, y, OBJECT_SIZE, OBJECT_SIZE, 0, 0
    )
    explosion.sprite.always_on_top = True
    explosion.sprite.loop = False
    game.sound_log.append((EXPLOSION_SOUND, EXPLOSION_SOUND_CHANNEL))
    return explosion


def update_explosions(game: GameState) -> None:
    """Move explosions and return finished ones to their pool."""
    for explosion in game.explosion_pool:
        explosion.sprite.set_position(math.floor(explosion.x), math.floor(explosion.y))
        explosion.x += ENEMY_SPEED
        if explosion.sprite.is_animation_done():
            release_object(explosion, game.explosion_pool)


def release_with_explode(game: GameState, obj: GameObject, pool: ObjectPool) -> None:
    """Replace an object by an explosion and return it to its pool."""
    spawn_explosion(game, obj.x - EXPLOSION_X_OFFSET, obj.y)
    if obj.sprite is not None:
        obj.sprite.set_frame(NORMAL_FRAME)
    release_object(obj, pool)