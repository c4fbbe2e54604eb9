import pytest

from moonshooter.config import (
    ENEMY_SPEED,
    EXPLOSION_SOUND_CHANNEL,
    EXPLOSION_X_OFFSET,
    MAX_EXPLOSION,
    NORMAL_FRAME,
    OBJECT_SIZE,
    PAL2,
)
from moonshooter.enemy import spawn_enemy
from moonshooter.explosion import (
    EXPLOSION_SOUND,
    release_with_explode,
    spawn_explosion,
    update_explosions,
)
from moonshooter.game_object import EXPLOSION_SPRITE
from moonshooter.state import GameState


def _finish_animation(sprite):
    for _ in range(1000):
        if sprite.is_animation_done():
            return
        sprite.tick()


def test_spawn_explosion_configures_object():
    game = GameState()
    explosion = spawn_explosion(game, 100.0, 50.0)
    assert explosion.x == 100.0 - OBJECT_SIZE // 2
    assert explosion.y == 50.0
    assert (explosion.w, explosion.h) == (OBJECT_SIZE, OBJECT_SIZE)
    assert explosion.hp == 0 and explosion.damage == 0
    assert explosion.sprite.definition is EXPLOSION_SPRITE
    assert explosion.sprite.palette == PAL2
    assert explosion.sprite.always_on_top
    assert not explosion.sprite.loop
    assert game.sound_log == [(EXPLOSION_SOUND, EXPLOSION_SOUND_CHANNEL)]
    assert len(game.explosion_pool) == 1


def test_spawn_explosion_returns_none_when_pool_full():
    game = GameState()
    spawned = [spawn_explosion(game, 10.0, 10.0) for _ in range(MAX_EXPLOSION)]
    assert all(e is not None for e in spawned)
    assert spawn_explosion(game, 10.0, 10.0) is None
    assert len(game.sound_log) == MAX_EXPLOSION


def test_update_moves_explosion_with_scene():
    game = GameState()
    explosion = spawn_explosion(game, 100.0, 40.0)
    start = explosion.x
    update_explosions(game)
    assert explosion.x == pytest.approx(start + ENEMY_SPEED)
    assert explosion.sprite.x == int(start)
    assert len(game.explosion_pool) == 1


def test_finished_explosion_is_released():
    game = GameState()
    explosion = spawn_explosion(game, 100.0, 40.0)
    _finish_animation(explosion.sprite)
    assert explosion.sprite.is_animation_done()
    update_explosions(game)
    assert len(game.explosion_pool) == 0
    assert not explosion.sprite.visible


def test_reused_explosion_restarts_animation():
    game = GameState()
    explosion = spawn_explosion(game, 100.0, 40.0)
    _finish_animation(explosion.sprite)
    update_explosions(game)
    again = spawn_explosion(game, 60.0, 20.0)
    assert again is explosion
    assert not again.sprite.is_animation_done()
    assert again.sprite.visible


def test_release_with_explode_replaces_enemy():
    game = GameState()
    enemy = spawn_enemy(game, 200.0, 80.0)
    enemy.sprite.set_frame(1)
    release_with_explode(game, enemy, game.enemy_pool)
    assert len(game.enemy_pool) == 0
    assert enemy.sprite.frame == NORMAL_FRAME
    assert not enemy.sprite.visible
    explosions = list(game.explosion_pool)
    assert len(explosions) == 1
    assert explosions[0].x == 200.0 - EXPLOSION_X_OFFSET - OBJECT_SIZE // 2
    assert explosions[0].y == 80.0


def test_release_with_explode_requires_allocated_object():
    game = GameState()
    enemy = spawn_enemy(game, 200.0, 80.0)
    release_with_explode(game, enemy, game.enemy_pool)
    with pytest.raises(ValueError):
        release_with_explode(game, enemy, game.enemy_pool)