"""Command that plays the shooter headless and prints the outcome."""

from __future__ import annotations

import argparse

from moonshooter.config import JOIN_TEXT_POS_Y, Button
from moonshooter.game import new_game, run


def _buttons(text: str) -> Button:
    result = Button.NONE
    for name in filter(None, (part.strip() for part in text.split(","))):
        try:
            result |= Button[name.upper()]
        except KeyError:
            raise argparse.ArgumentTypeError(f"unknown button: {name}") from None
    return result


def _frame_count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text}") from None
    if value < 0:
        raise argparse.ArgumentTypeError("frame count must not be negative")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moonshooter", description="Run the side-scrolling shooter without a display."
    )
    parser.add_argument("--frames", type=_frame_count, default=600, help="frames to play")
    parser.add_argument(
        "--p1", type=_buttons, default=Button.NONE, help="buttons held by player 1, e.g. A,UP"
    )
    parser.add_argument(
        "--p2", type=_buttons, default=Button.NONE, help="buttons held by player 2, e.g. START"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    game = new_game()
    game.joypads[0] = args.p1
    game.joypads[1] = args.p2
    run(game, args.frames)

    print(f"frames: {args.frames}")
    print(f"window: {game.window.row(JOIN_TEXT_POS_Y).rstrip()}")
    for number, player in enumerate(game.players, start=1):
        print(
            f"player {number}: score {player.score} lives {player.lives} "
            f"state {player.state.name}"
        )
    print(
        f"enemies: {len(game.enemy_pool)} projectiles: {len(game.projectile_pool)} "
        f"explosions: {len(game.explosion_pool)}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())