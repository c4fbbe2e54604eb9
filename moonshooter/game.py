"""Frame loop, projectiles, background scrolling and on-screen messages."""

from __future__ import annotations

import math
import time
from typing import Iterator

from moonshooter.config import (
    BULLET_OFFSET_X,
    ENEMY_SCORE_VALUE,
    FPS_POS_X,
    FPS_POS_Y,
    JOIN_MESSAGE_BLINK_INTERVAL,
    JOIN_MESSAGE_VISIBLE_FRAMES,
    JOIN_TEXT_POS_Y,
    JOIN_TEXT_WIDTH,
    MAX_BULLETS,
    MAX_ENEMIES,
    MAX_EXPLOSION,
    PAL1,
    PAL2,
    PAL3,
    PLAY_MUSIC,
    PLAYER1_JOIN_TEXT_POS_X,
    PLAYER2_JOIN_TEXT_POS_X,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHOW_FPS,
)
from moonshooter.enemy import set_spawner, update_enemies, update_spawner
from moonshooter.explosion import release_with_explode, update_explosions
from moonshooter.game_object import (
    ENEMY_SPRITE,
    EXPLOSION_SPRITE,
    PLAYER_SPRITE,
    GameObject,
    ObjectPool,
    release_object,
)
from moonshooter.player import (
    Player,
    PlayerState,
    Projectile,
    add_player,
    create_players,
    update_enemy_collision,
    update_input,
    update_player,
    update_score,
)
from moonshooter.state import GameState

MUSIC = "xgm2_music"
FRAME_RATE = 60

GRID_CELL_SIZE = 32
GRID_WIDTH = SCREEN_WIDTH // GRID_CELL_SIZE + 1
GRID_HEIGHT = SCREEN_HEIGHT // GRID_CELL_SIZE + 1
GRID_CELL_CAPACITY = MAX_ENEMIES + MAX_BULLETS

_U16 = 0x10000
_FPS_DIGITS = 3


def _grid_index(value: float) -> int:
    """Cell index of a coordinate: truncated toward zero, wrapped as a 16-bit index."""
    pixel = math.floor(value)
    cell = pixel // GRID_CELL_SIZE if pixel >= 0 else -(-pixel // GRID_CELL_SIZE)
    return cell % _U16


def _to_s16(value: int) -> int:
    return (value + 0x8000) % _U16 - 0x8000


class SpatialGrid:
    """Coarse grid of screen cells used to find collision candidates."""

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        capacity: int = GRID_CELL_CAPACITY,
    ) -> None:
        if width <= 0 or height <= 0 or capacity < 0:
            raise ValueError("grid must have a positive size and a non-negative capacity")
        self.width = width
        self.height = height
        self.capacity = capacity
        self._cells: list[list[list[GameObject]]] = [
            [[] for _ in range(height)] for _ in range(width)
        ]

    def clear(self) -> None:
        for column in self._cells:
            for cell in column:
                cell.clear()

    def add(self, obj: GameObject) -> bool:
        """File the object under its cell; False if off the grid or the cell is full."""
        gx = _grid_index(obj.x)
        gy = _grid_index(obj.y)
        if gx < self.width and gy < self.height:
            cell = self._cells[gx][gy]
            if len(cell) < self.capacity:
                cell.append(obj)
                return True
        return False

    def neighbours(self, x: float, y: float) -> Iterator[GameObject]:
        """Objects in the cell holding (x, y) and the eight cells around it."""
        gx = _grid_index(x)
        gy = _grid_index(y)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                cx = (gx + dx) % _U16
                cy = (gy + dy) % _U16
                if cx < self.width and cy < self.height:
                    yield from tuple(self._cells[cx][cy])


def _active_players(game: GameState) -> list[Player]:
    players = []
    player = game.player_list_head
    while player is not None:
        players.append(player)
        player = player.next
    return players


def new_game() -> GameState:
    """Set up pools, players, palettes and the first enemy wave."""
    game = GameState()
    if PLAY_MUSIC:
        game.sound_log.append((MUSIC, 0))
    game.palettes[PAL1] = PLAYER_SPRITE.name

    game.enemy_pool = ObjectPool(GameObject, MAX_ENEMIES)
    game.projectile_pool = ObjectPool(Projectile, MAX_BULLETS)
    game.explosion_pool = ObjectPool(GameObject, MAX_EXPLOSION)

    create_players(game)
    add_player(game, 0)
    render_score(game, game.players[0])

    game.palettes[PAL2] = EXPLOSION_SPRITE.name
    game.palettes[PAL3] = ENEMY_SPRITE.name
    set_spawner(game, game.sin_spawner)
    return game


def scroll_background(game: GameState) -> None:
    """Advance each parallax band and refill its line offsets."""
    for rule, offsets in zip(game.scroll_rules, game.line_offset_x):
        if rule.auto_scroll_speed == 0:
            continue
        rule.scroll_offset += rule.auto_scroll_speed
        count = min(rule.num_of_lines, len(offsets))
        offsets[:count] = [_to_s16(-math.floor(rule.scroll_offset))] * count


def update_projectiles(game: GameState) -> None:
    """Move bullets right and drop those past the screen edge."""
    for projectile in game.projectile_pool:
        projectile.x += BULLET_OFFSET_X
        projectile.sprite.set_position(math.floor(projectile.x), math.floor(projectile.y))
        if projectile.x > SCREEN_WIDTH:
            release_object(projectile, game.projectile_pool)


def update_projectile_collisions(game: GameState) -> None:
    """Hit enemies with bullets, scoring a kill for the bullet's owner."""
    grid = SpatialGrid()
    for enemy in game.enemy_pool:
        grid.add(enemy)

    for projectile in game.projectile_pool:
        for enemy in grid.neighbours(projectile.x, projectile.y):
            if enemy.hp == 0:
                continue  # destroyed earlier in this pass
            if projectile.collision_update(enemy):
                if not enemy.hp:
                    release_with_explode(game, enemy, game.enemy_pool)
                    owner = game.players[projectile.owner_index]
                    owner.score = (owner.score + ENEMY_SCORE_VALUE) % _U16
                    update_score(game, owner)
                release_object(projectile, game.projectile_pool)
                break


def render_score(game: GameState, player: Player) -> None:
    """Draw the score caption of a player with zeroed digits."""
    if player.index == 0:
        game.window.draw_text("1P SCORE:00000", PLAYER1_JOIN_TEXT_POS_X, JOIN_TEXT_POS_Y)
    else:
        game.window.draw_text("2P SCORE:00000", PLAYER2_JOIN_TEXT_POS_X, JOIN_TEXT_POS_Y)


def render_message(game: GameState) -> None:
    """Blink the join prompt of every suspended player."""
    counter = getattr(game, "_message_blink", 0) + 1
    for player in game.players:
        suspended = player.state is PlayerState.SUSPENDED
        column = PLAYER1_JOIN_TEXT_POS_X if player.index == 0 else PLAYER2_JOIN_TEXT_POS_X
        if counter == 1:
            if suspended:
                game.window.draw_text(
                    f"{'1' if player.index == 0 else '2'}P PRESS START",
                    column,
                    JOIN_TEXT_POS_Y,
                )
        elif counter == JOIN_MESSAGE_VISIBLE_FRAMES:
            if suspended:
                game.window.clear_area(column, JOIN_TEXT_POS_Y, JOIN_TEXT_WIDTH, 1)
        elif counter == JOIN_MESSAGE_BLINK_INTERVAL:
            counter = 0
    game._message_blink = counter


def _render_fps(game: GameState) -> None:
    now = time.perf_counter()
    last = getattr(game, "_last_render_time", None)
    game._last_render_time = now
    fps = round(1 / (now - last)) if last is not None and now > last else 0
    fps = min(fps, 10**_FPS_DIGITS - 1)
    game.window.draw_text(f"{fps:>{_FPS_DIGITS}d}", FPS_POS_X, FPS_POS_Y)


def _animate_sprites(game: GameState) -> None:
    for pool in (game.enemy_pool, game.projectile_pool, game.explosion_pool):
        for obj in pool:
            if obj.sprite is not None:
                obj.sprite.tick()
    for player in _active_players(game):
        if player.sprite is not None:
            player.sprite.tick()


def player_join_update(game: GameState) -> None:
    """Let suspended players join on START and respawn dead ones."""
    for player in game.players:
        if player.state is PlayerState.SUSPENDED:
            if game.joypads[player.index] & Button.START:
                player.lives = PLAYER_LIVES
                player.state = PlayerState.DIED
                player.respawn_timer = 0
                player.score = 0
                render_score(game, player)
        elif player.state is PlayerState.DIED:
            if player.respawn_timer > 0:
                player.respawn_timer -= 1
            if player.respawn_timer == 0:
                add_player(game, player.index)


def render(game: GameState) -> None:
    """Draw one frame: scrolling, messages, frame rate and sprite animation."""
    scroll_background(game)
    render_message(game)
    if SHOW_FPS:
        _render_fps(game)
    _animate_sprites(game)


def step(game: GameState) -> None:
    """Run the game for one frame."""
    player_join_update(game)
    for player in _active_players(game):
        update_input(game, player)
        update_player(player)
        update_enemy_collision(game, player)

    update_projectiles(game)
    update_enemies(game)
    update_explosions(game)
    update_projectile_collisions(game)
    update_spawner(game)
    render(game)


def run(game: GameState, frames: int | None = None) -> GameState:
    """Step the given number of frames, or forever at the target frame rate."""
    if frames is None:
        period = 1 / FRAME_RATE
        while True:
            start = time.perf_counter()
            step(game)
            remaining = period - (time.perf_counter() - start)
            if remaining > 0:
                time.sleep(remaining)
    if frames < 0:
        raise ValueError("frame count must not be negative")
    for _ in range(frames):
        step(game)
    return game


from moonshooter.config import PLAYER_LIVES, Button  # noqa: E402