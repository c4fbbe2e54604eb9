"""Players: joining, movement, shooting, damage and score display."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum

from moonshooter.config import (
    BULLET_DAMAGE,
    BULLET_HEIGHT,
    BULLET_HP,
    BULLET_WIDTH,
    EXPLOSION_X_OFFSET,
    FIRE_RATE,
    JOIN_TEXT_POS_Y,
    OBJECT_SIZE,
    PAL1,
    PLAYER1_JOIN_TEXT_POS_X,
    PLAYER2_JOIN_TEXT_POS_X,
    PLAYER_DAMAGE,
    PLAYER_DOWN_ANIM,
    PLAYER_HEIGHT,
    PLAYER_HP,
    PLAYER_INITIAL_X,
    PLAYER_INITIAL_Y_OFFSET,
    PLAYER_INVINCIBILITY_DURATION,
    PLAYER_NEUTRAL_ANIM,
    PLAYER_RESPAWN_DELAY,
    PLAYER_SPEED,
    PLAYER_UP_ANIM,
    PLAYER_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHOOT_SOUND_CHANNEL,
    Button,
)
from moonshooter.explosion import release_with_explode, spawn_explosion
from moonshooter.game_object import BULLET_SPRITE, PLAYER_SPRITE, GameObject
from moonshooter.state import GameState

SHOOT_SOUND = "xpcm_shoot"
_SCORE_COLUMN_OFFSET = 9
_SCORE_DIGITS = 5
_PLAYER_COUNT = 2
_SECOND_BULLET_Y_OFFSET = 16


class PlayerState(IntEnum):
    """Life cycle of a player slot."""

    SUSPENDED = 0
    NORMAL = 1
    INVINCIBLE = 2
    DIED = 3


@dataclass(eq=False)
class Player(GameObject):
    """A player ship, linked into the list of active players."""

    cool_down_ticks: int = 0
    prev: Player | None = field(default=None, repr=False)
    next: Player | None = field(default=None, repr=False)
    invincible_timer: int = 0
    respawn_timer: int = 0
    score: int = 0
    index: int = 0
    lives: int = 0
    is_damageable: bool = False
    state: PlayerState = PlayerState.SUSPENDED


@dataclass(eq=False)
class Projectile(GameObject):
    """A bullet that remembers which player fired it."""

    owner_index: int = 0


def create_players(game: GameState) -> None:
    """Create both player slots unless they already exist."""
    if not game.players:
        game.players = [Player(index=index) for index in range(_PLAYER_COUNT)]


def add_player(game: GameState, index: int) -> Player:
    """Put a player on screen at its start position and make it invincible."""
    player = game.players[index]

    player.prev = None
    player.next = game.player_list_head
    if game.player_list_head is not None:
        game.player_list_head.prev = player
    game.player_list_head = player

    game.palettes[PAL1] = PLAYER_SPRITE.name
    player.init(
        PLAYER_SPRITE,
        PAL1,
        PLAYER_INITIAL_X,
        SCREEN_HEIGHT // 2 + index * PLAYER_INITIAL_Y_OFFSET,
        PLAYER_WIDTH,
        PLAYER_HEIGHT,
        PLAYER_HP,
        PLAYER_DAMAGE,
    )
    player.sprite.loop = False
    player.sprite.visible = True

    player.state = PlayerState.INVINCIBLE
    player.invincible_timer = PLAYER_INVINCIBILITY_DURATION
    player.is_damageable = False
    return player


def explode_player(game: GameState, player: Player) -> None:
    """Blow the player up, take a life and schedule a respawn."""
    spawn_explosion(game, player.x - EXPLOSION_X_OFFSET, player.y)
    player.sprite.visible = False
    player.hp = 0
    player.state = PlayerState.DIED
    player.cool_down_ticks = 0
    player.respawn_timer = PLAYER_RESPAWN_DELAY
    remove_player(game, player)

    if player.lives > 0:
        player.lives -= 1
    if player.lives == 0:
        player.state = PlayerState.SUSPENDED


def remove_player(game: GameState, player: Player | None) -> None:
    """Unlink a player from the list of active players."""
    if player is None:
        return
    if player.prev is not None:
        player.prev.next = player.next
    else:
        game.player_list_head = player.next
    if player.next is not None:
        player.next.prev = player.prev
    player.prev = None
    player.next = None


def try_shoot(game: GameState, player: Player) -> None:
    """Fire a pair of bullets if the player is alive and off cooldown."""
    if player.state is PlayerState.DIED or player.cool_down_ticks != 0:
        return

    first = game.projectile_pool.allocate()
    second = game.projectile_pool.allocate()
    x = player.x + OBJECT_SIZE
    if first is not None:
        spawn_projectile(first, x, player.y, player.index)
    if second is not None:
        spawn_projectile(second, x, player.y + _SECOND_BULLET_Y_OFFSET, player.index)

    if first is not None or second is not None:
        game.sound_log.append((SHOOT_SOUND, SHOOT_SOUND_CHANNEL))
        player.cool_down_ticks = FIRE_RATE


def update_player(player: Player) -> None:
    """Run invincibility blinking, keep the ship on screen and cool the gun."""
    sprite = player.sprite
    if not player.is_damageable:
        player.invincible_timer = (player.invincible_timer - 1) % 0x10000
        sprite.visible = player.invincible_timer % 3 == 0
        if player.invincible_timer == 0:
            player.state = PlayerState.NORMAL
            player.is_damageable = True
            sprite.visible = True

    player.x = min(max(player.x, 0), SCREEN_WIDTH - player.w)
    player.y = min(max(player.y, 0), SCREEN_HEIGHT - player.h)
    sprite.set_position(math.floor(player.x), math.floor(player.y))

    if player.cool_down_ticks:
        player.cool_down_ticks -= 1


def update_enemy_collision(game: GameState, player: Player) -> None:
    """Trade damage between the player and every enemy it touches."""
    if player.state is not PlayerState.NORMAL:
        return
    for enemy in game.enemy_pool:
        if player.collision_update(enemy):
            if not enemy.hp:
                release_with_explode(game, enemy, game.enemy_pool)
            if not player.hp:
                explode_player(game, player)
                return


def update_input(game: GameState, player: Player) -> None:
    """Move and animate the player from its joypad, and shoot on A."""
    buttons = game.joypads[player.index]

    if buttons & Button.LEFT:
        player.x -= PLAYER_SPEED
    elif buttons & Button.RIGHT:
        player.x += PLAYER_SPEED

    if buttons & Button.UP:
        player.y -= PLAYER_SPEED
        player.sprite.set_anim(PLAYER_UP_ANIM)
    elif buttons & Button.DOWN:
        player.y += PLAYER_SPEED
        player.sprite.set_anim(PLAYER_DOWN_ANIM)
    else:
        player.sprite.set_anim(PLAYER_NEUTRAL_ANIM)

    if buttons & Button.A:
        try_shoot(game, player)


def spawn_projectile(projectile: GameObject, x: float, y: float, owner_index: int) -> None:
    """Place a bullet fired by the given player."""
    projectile.init(
        BULLET_SPRITE, PAL1, x, y, BULLET_WIDTH, BULLET_HEIGHT, BULLET_HP, BULLET_DAMAGE
    )
    projectile.sprite.always_on_top = True
    projectile.owner_index = owner_index


def update_score(game: GameState, player: Player) -> None:
    """Redraw the player's score digits in the text window."""
    column = PLAYER1_JOIN_TEXT_POS_X if player.index == 0 else PLAYER2_JOIN_TEXT_POS_X
    game.window.draw_text(
        f"{player.score:0{_SCORE_DIGITS}d}",
        column + _SCORE_COLUMN_OFFSET,
        JOIN_TEXT_POS_Y,
    )