#!/usr/bin/env python3
"""
Minesweeper deduction agent - Main entry point.

Usage:
    python main.py play [--difficulty {beginner,intermediate,expert}] [--seed N]
    python main.py evaluate [--games N] [--guess] [--stats-file PATH] [--seed N]
    python main.py compare [--games N] [--seed N]

Every command also accepts --strict. Pass -v before the command for
agent diagnostics.
"""
import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from game.board import BEGINNER, INTERMEDIATE, EXPERT, BoardConfig
from runner import GameRunner, PlayConfig


DIFFICULTIES = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


def make_config(args: argparse.Namespace, allow_guessing: bool) -> PlayConfig:
    """Build a play configuration from CLI arguments."""
    board: BoardConfig = DIFFICULTIES[args.difficulty]
    return PlayConfig(
        board_height=board.height,
        board_width=board.width,
        num_mines=board.num_mines,
        allow_guessing=allow_guessing,
        strict=args.strict,
    )


def play(args: argparse.Namespace) -> None:
    """Play a single game and print the final board."""
    runner = GameRunner(make_config(args, args.guess), render_mode="ansi")
    stats = runner.play_game(seed=args.seed)

    print(runner.env.render())
    print(f"\nResult: {stats.outcome.upper()}")
    print(f"  Turns: {stats.turns} ({stats.reveals} reveals, {stats.flags} flags)")
    print(f"  Guesses: {stats.guesses}")
    print(f"  Mines confirmed: {stats.mines_confirmed}")


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate the agent over many games."""
    runner = GameRunner(make_config(args, args.guess))

    mode = "with guessing" if args.guess else "deduction only"
    print(f"Evaluating on {args.difficulty} ({mode}) over {args.games} games...")
    results = runner.evaluate(args.games, seed=args.seed).to_dict()

    print(f"  Win rate: {results['win_rate']:.1%}")
    print(f"  Stuck rate: {results['stuck_rate']:.1%}")
    print(f"  Losses: {results['losses']}")
    print(f"  Avg turns: {results['avg_turns']:.1f}")

    if args.stats_file:
        runner.save_stats(args.stats_file)
        print(f"Statistics saved to: {args.stats_file}")


def compare(args: argparse.Namespace) -> None:
    """Compare deduction alone with deduction plus guessing."""
    print("\n" + "=" * 56)
    print("Deduction Agent Comparison")
    print("=" * 56)
    print(f"{'Difficulty':<14} {'Mode':<16} {'Win Rate':>10} {'Stuck':>10}")
    print("-" * 56)

    for difficulty in DIFFICULTIES:
        args.difficulty = difficulty
        for guess in (False, True):
            runner = GameRunner(make_config(args, guess))
            results = runner.evaluate(args.games, seed=args.seed).to_dict()
            mode = "with guessing" if guess else "deduction only"
            print(
                f"{difficulty:<14} {mode:<16} "
                f"{results['win_rate']:>10.1%} {results['stuck_rate']:>10.1%}"
            )


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser with its subcommands."""
    parser = argparse.ArgumentParser(
        description="Minesweeper deduction agent - play and evaluate"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show agent diagnostics"
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--strict", action="store_true",
        help="Abort on any unsound deduction instead of refusing it",
    )
    common.add_argument("--seed", type=int, default=None, help="Random seed")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser(
        "play", parents=[common], help="Play a single game"
    )
    play_parser.add_argument(
        "--difficulty", choices=list(DIFFICULTIES), default="beginner"
    )
    play_parser.add_argument(
        "--guess", action="store_true", help="Guess when deduction runs dry"
    )

    eval_parser = subparsers.add_parser(
        "evaluate", parents=[common], help="Evaluate the agent"
    )
    eval_parser.add_argument(
        "--difficulty", choices=list(DIFFICULTIES), default="beginner"
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    eval_parser.add_argument(
        "--guess", action="store_true", help="Guess when deduction runs dry"
    )
    eval_parser.add_argument(
        "--stats-file", type=str, default=None, help="Write statistics as JSON"
    )

    compare_parser = subparsers.add_parser(
        "compare", parents=[common], help="Compare modes across difficulties"
    )
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per setting"
    )

    return parser


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
