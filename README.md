# moonshooter

moonshooter is a frame-stepped model of a small horizontal scrolling shooter. Each call advances the game by one frame, and all state is kept in ordinary Python objects:

- two player slots. A suspended player joins when its joypad holds Start. A player who dies respawns after a delay and is invincible for a while after each spawn.
- enemy waves that alternate between a sine-wave formation and a two-line formation.
- bullets, enemies and explosions taken from fixed-capacity object pools.
- a spatial grid that finds bullet–enemy collisions. Each kill adds to the score of the player who fired the bullet.
- a five-band parallax background scroll, kept as per-line horizontal offsets.
- a character text window that shows the scores, a frame-rate counter and the blinking "PRESS START" prompts.

## Installation

```
pip install .
```

To install the test dependencies too:

```
pip install ".[test]"
```

## Command

```
moonshooter
```

The command starts a new game, runs it for a fixed number of frames and prints a summary. The summary has the bottom row of the text window, the score, lives and state of each player, and how many enemies, projectiles and explosions are still active.

Options:

- `--frames N`: the number of frames to play. The default is 600.
- `--p1 BUTTONS`: the buttons player 1 holds for the whole run, as a comma-separated list, for example `A,UP`.
- `--p2 BUTTONS`: the same for player 2, for example `START` to make player 2 join.

Button names are `UP`, `DOWN`, `LEFT`, `RIGHT`, `A`, `B`, `C` and `START`, in any case.

## Using it as a library

```python
from moonshooter.config import Button
from moonshooter.game import new_game, step, run

game = new_game()               # pools, player 1 and the first enemy wave
game.joypads[0] = Button.A | Button.UP
step(game)                      # advance one frame
run(game, 600)                  # advance 600 more frames
print(game.window.row(27))      # the score / prompt row
print(game.players[0].score)
```

`run(game)` with no frame count loops forever, one step every 1/60 s.

Modules:

- `moonshooter.config`: balance values, screen dimensions, pool limits, text positions and the `Button` flags.
- `moonshooter.game_object`: `SpriteDefinition` and `Sprite`, which hold position, visibility and animation frames; `CollisionLayer`; `GameObject`, which has `init`, `apply_damage_by`, `collides_with` and `collision_update`; `ObjectPool` with `allocate`, `release`, iteration and `len`; and `release_object`.
- `moonshooter.state`: `GameState`, the wave types (`EnemyPattern`, `EnemySpawner`, `EnemyWave`), `PlaneScrollingRule` with `default_scroll_rules()`, and `TextWindow` with `draw_text`, `clear_area` and `row`.
- `moonshooter.enemy`: `spawn_enemy`, `set_spawner`, `update_spawner`, `switch_wave` and `update_enemies`.
- `moonshooter.explosion`: `spawn_explosion`, `update_explosions` and `release_with_explode`.
- `moonshooter.player`: `Player`, `Projectile` and `PlayerState`, plus the functions for adding, removing and exploding players, input, shooting, enemy collisions and score drawing.
- `moonshooter.game`: `SpatialGrid`, `new_game`, `step`, `run`, `scroll_background`, `update_projectiles`, `update_projectile_collisions`, `render_score`, `render_message`, `player_join_update` and `render`.
- `moonshooter.app`: `main(argv=None)`, the function behind the `moonshooter` command.

## What it does not do

The package does not draw any graphics, play any sound or read a real controller.

- Sounds are only added to `GameState.sound_log`, as `(name, channel)` pairs.
- Palette choices are only recorded in `GameState.palettes`.
- Input comes from the `Button` values in `GameState.joypads`. The command sets these once, for the whole run.

## Tests

```
pytest
```