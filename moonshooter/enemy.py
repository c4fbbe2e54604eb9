"""Enemy spawning waves and enemy movement."""

from __future__ import annotations

import math

from moonshooter.config import (
    ENEMY_DAMAGE,
    ENEMY_HEIGHT,
    ENEMY_HP,
    ENEMY_SPEED,
    ENEMY_WIDTH,
    NORMAL_FRAME,
    PAL3,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
)
from moonshooter.game_object import ENEMY_SPRITE, GameObject, release_object
from moonshooter.state import EnemyPattern, EnemySpawner, EnemyWave, GameState

_SINE_AMPLITUDE = 80
_SINE_STEP_DEGREES = 20
_LINE_MARGIN = 50


def spawn_enemy(game: GameState, x: float, y: float) -> GameObject | None:
    """Place a new enemy; None when the pool is exhausted."""
    enemy = game.enemy_pool.allocate()
    if enemy is not None:
        enemy.init(ENEMY_SPRITE, PAL3, x, y, ENEMY_WIDTH, ENEMY_HEIGHT, ENEMY_HP, ENEMY_DAMAGE)
    return enemy


def set_spawner(game: GameState, spawner: EnemySpawner) -> None:
    """Start a new wave with the given configuration."""
    game.wave = EnemyWave(
        spawner=spawner,
        delay=spawner.delay,
        enemy_delay=spawner.enemy_delay,
        spawned_count=0,
        active=False,
    )


def _sine_y(degrees: float) -> float:
    return SCREEN_HEIGHT // 2 + math.sin(math.radians(degrees)) * _SINE_AMPLITUDE


def update_spawner(game: GameState) -> None:
    """Advance the wave by one frame, spawning enemies when due."""
    wave = game.wave
    spawner = wave.spawner
    if spawner is None:
        raise RuntimeError("no enemy spawner is set")

    if wave.delay:
        wave.delay -= 1
    else:
        wave.active = True
    if not wave.active:
        return

    wave.enemy_delay -= 1
    if wave.enemy_delay:
        return
    wave.enemy_delay = spawner.enemy_delay

    if spawner.pattern is EnemyPattern.HOR:
        spawn_enemy(game, SCREEN_WIDTH, _LINE_MARGIN)
        spawn_enemy(game, SCREEN_WIDTH, SCREEN_HEIGHT - ENEMY_HEIGHT // 2 - _LINE_MARGIN)
    elif spawner.pattern is EnemyPattern.SIN:
        angle = wave.spawned_count * _SINE_STEP_DEGREES
        spawn_enemy(game, SCREEN_WIDTH, _sine_y(angle))
        spawn_enemy(game, SCREEN_WIDTH, _sine_y(angle + 180))

    wave.spawned_count += 1
    if wave.spawned_count == spawner.enemy_count:
        switch_wave(game)


def switch_wave(game: GameState) -> None:
    """Alternate between the sine and line spawners."""
    spawner = game.wave.spawner
    if spawner is None or spawner.pattern in (EnemyPattern.NONE, EnemyPattern.SIN):
        set_spawner(game, game.line_spawner)
    else:
        set_spawner(game, game.sin_spawner)


def update_enemies(game: GameState) -> None:
    """Move enemies left, end damage blinks and drop those off screen."""
    for enemy in game.enemy_pool:
        if enemy.blink_counter:
            enemy.blink_counter -= 1
            if enemy.blink_counter == 0:
                enemy.sprite.set_frame(NORMAL_FRAME)
        enemy.x -= ENEMY_SPEED
        enemy.sprite.set_position(math.floor(enemy.x), math.floor(enemy.y))
        if math.floor(enemy.x) < -ENEMY_WIDTH:
            release_object(enemy, game.enemy_pool)