import math

import pytest

from moonshooter.config import (
    BLINK_TICKS,
    BULLET_OFFSET_X,
    ENEMY_SCORE_VALUE,
    JOIN_TEXT_POS_Y,
    JOIN_TEXT_WIDTH,
    PAL3,
    PLAYER1_JOIN_TEXT_POS_X,
    PLAYER2_JOIN_TEXT_POS_X,
    PLAYER_LIVES,
    SCREEN_WIDTH,
    SHOOT_SOUND_CHANNEL,
    Button,
)
from moonshooter.enemy import spawn_enemy
from moonshooter.game import (
    GRID_CELL_CAPACITY,
    GRID_CELL_SIZE,
    GRID_WIDTH,
    SpatialGrid,
    new_game,
    player_join_update,
    render_message,
    run,
    scroll_background,
    step,
    update_projectile_collisions,
    update_projectiles,
)
from moonshooter.game_object import ENEMY_SPRITE, GameObject
from moonshooter.player import SHOOT_SOUND, PlayerState, spawn_projectile


def _obj(x, y):
    return GameObject(x=x, y=y)


def _window_row(game):
    return game.window.row(JOIN_TEXT_POS_Y)


def test_new_game_adds_first_player_and_draws_score():
    game = new_game()
    first = game.players[0]
    assert game.player_list_head is first
    assert first.state is PlayerState.INVINCIBLE
    assert game.players[1].state is PlayerState.SUSPENDED
    row = _window_row(game)
    assert row[PLAYER1_JOIN_TEXT_POS_X : PLAYER1_JOIN_TEXT_POS_X + 14] == "1P SCORE:00000"
    assert game.wave.spawner == game.sin_spawner
    assert game.palettes[PAL3] == ENEMY_SPRITE.name


def test_grid_finds_object_in_adjacent_cell():
    grid = SpatialGrid()
    obj = _obj(40, 40)
    assert grid.add(obj)
    assert list(grid.neighbours(10, 10)) == [obj]
    assert list(grid.neighbours(200, 200)) == []


def test_grid_negative_coordinates_truncate_into_first_cell():
    grid = SpatialGrid()
    near = _obj(-10, 5)
    far = _obj(-40, 5)
    assert grid.add(near)
    assert not grid.add(far)
    assert list(grid.neighbours(0, 0)) == [near]


def test_grid_rejects_objects_past_the_last_cell():
    grid = SpatialGrid()
    assert not grid.add(_obj(GRID_WIDTH * GRID_CELL_SIZE, 0))


def test_grid_cell_capacity():
    grid = SpatialGrid()
    added = [grid.add(_obj(5, 5)) for _ in range(GRID_CELL_CAPACITY + 4)]
    assert sum(added) == GRID_CELL_CAPACITY
    assert len(list(grid.neighbours(5, 5))) == GRID_CELL_CAPACITY


def test_grid_clear_empties_cells():
    grid = SpatialGrid()
    grid.add(_obj(5, 5))
    grid.clear()
    assert list(grid.neighbours(5, 5)) == []


def test_grid_rejects_bad_size():
    with pytest.raises(ValueError):
        SpatialGrid(width=0)


def test_scroll_background_fills_band_rows():
    game = new_game()
    for _ in range(3):
        scroll_background(game)
    for rule, offsets in zip(game.scroll_rules, game.line_offset_x):
        count = rule.num_of_lines
        assert rule.scroll_offset == pytest.approx(3 * rule.auto_scroll_speed)
        assert offsets[:count] == [-math.floor(rule.scroll_offset)] * count
        assert offsets[count:] == [0] * (len(offsets) - count)


def test_update_projectiles_moves_and_releases():
    game = new_game()
    bullet = game.projectile_pool.allocate()
    spawn_projectile(bullet, 100, 50, 0)
    update_projectiles(game)
    assert bullet.x == 100 + BULLET_OFFSET_X
    assert bullet.sprite.x == math.floor(bullet.x)
    assert len(game.projectile_pool) == 1

    bullet.x = SCREEN_WIDTH
    update_projectiles(game)
    assert len(game.projectile_pool) == 0
    assert bullet.sprite.visible is False


def test_projectile_kills_enemy_and_scores():
    game = new_game()
    enemy = spawn_enemy(game, 100, 100)
    bullet = game.projectile_pool.allocate()
    spawn_projectile(bullet, 100, 100, 0)
    update_projectile_collisions(game)
    assert enemy.hp == 0
    assert len(game.enemy_pool) == 0
    assert len(game.projectile_pool) == 0
    assert len(game.explosion_pool) == 1
    assert game.players[0].score == ENEMY_SCORE_VALUE
    assert _window_row(game)[PLAYER1_JOIN_TEXT_POS_X + 9 : PLAYER1_JOIN_TEXT_POS_X + 14] == "00010"


def test_projectile_damages_tough_enemy():
    game = new_game()
    enemy = spawn_enemy(game, 100, 100)
    enemy.hp = 30
    bullet = game.projectile_pool.allocate()
    spawn_projectile(bullet, 100, 100, 0)
    update_projectile_collisions(game)
    assert enemy.hp == 30 - bullet.damage
    assert enemy.blink_counter == BLINK_TICKS
    assert len(game.enemy_pool) == 1
    assert len(game.projectile_pool) == 0
    assert game.players[0].score == 0


def test_projectile_far_from_enemy_does_nothing():
    game = new_game()
    enemy = spawn_enemy(game, 250, 180)
    bullet = game.projectile_pool.allocate()
    spawn_projectile(bullet, 20, 20, 0)
    update_projectile_collisions(game)
    assert len(game.enemy_pool) == 1
    assert len(game.projectile_pool) == 1
    assert enemy.hp == enemy.damage


def test_render_message_blinks_join_prompt():
    game = new_game()
    span = slice(PLAYER2_JOIN_TEXT_POS_X, PLAYER2_JOIN_TEXT_POS_X + JOIN_TEXT_WIDTH)
    render_message(game)
    assert _window_row(game)[span].rstrip() == "2P PRESS START"
    for _ in range(29):
        render_message(game)
    assert _window_row(game)[span] == " " * JOIN_TEXT_WIDTH
    for _ in range(31):
        render_message(game)
    assert _window_row(game)[span].rstrip() == "2P PRESS START"


def test_player_join_update_lets_second_player_in():
    game = new_game()
    second = game.players[1]
    game.joypads[1] = Button.START
    player_join_update(game)
    assert second.state is PlayerState.DIED
    assert second.lives == PLAYER_LIVES
    row = _window_row(game)
    assert row[PLAYER2_JOIN_TEXT_POS_X : PLAYER2_JOIN_TEXT_POS_X + 14] == "2P SCORE:00000"
    player_join_update(game)
    assert second.state is PlayerState.INVINCIBLE
    assert game.player_list_head is second
    assert second.next is game.players[0]


def test_step_with_fire_button_shoots_pair():
    game = new_game()
    game.joypads[0] = Button.A
    step(game)
    assert len(game.projectile_pool) == 2
    assert (SHOOT_SOUND, SHOOT_SOUND_CHANNEL) in game.sound_log


def test_run_clamps_player_to_screen():
    game = new_game()
    game.joypads[0] = Button.LEFT | Button.UP
    run(game, 100)
    player = game.players[0]
    assert (player.x, player.y) == (0, 0)


def test_explosion_finishes_after_animation():
    game = new_game()
    enemy = spawn_enemy(game, 100, 100)
    bullet = game.projectile_pool.allocate()
    spawn_projectile(bullet, 100, 100, 0)
    update_projectile_collisions(game)
    assert len(game.explosion_pool) == 1
    run(game, 30)
    assert len(game.explosion_pool) == 0
    assert enemy.sprite.visible is False


def test_run_rejects_negative_frames():
    with pytest.raises(ValueError):
        run(new_game(), -1)