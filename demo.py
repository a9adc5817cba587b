#!/usr/bin/env python3
"""Watch the deduction agent play Minesweeper."""
import os
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from agents import ActionKind, DeductionAgent
from game import MinesweeperEnv
from runner import GameRunner, PlayConfig


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, size: int = 9, mines: int = 10,
         guess: bool = False):
    """Run demo games with visualization."""
    config = PlayConfig(
        board_height=size, board_width=size, num_mines=mines,
        delay=delay, allow_guessing=guess,
    )
    runner = GameRunner(config, render_mode="ansi")

    print(f"Board: {size}x{size} with {mines} mines ({100*mines/(size*size):.1f}% density)")
    print("Starting in 2 seconds...")
    time.sleep(2)

    for game in range(games):
        def show(env: MinesweeperEnv, agent: DeductionAgent, game=game):
            action = agent.last_action
            clear_screen()
            print(f"=== Game {game + 1}/{games} ===")
            print(f"Wins so far: {runner.stats.wins}")
            if action is not None:
                row, col = env.board.position_of(action.index)
                verb = "Flag" if action.kind == ActionKind.FLAG else "Reveal"
                print(f"Last move: {verb} ({row}, {col})")
            print(f"Mines confirmed: {len(agent.confirmed_mines)}\n")
            print(env.render())

        stats = runner.play_game(callback=show)

        if stats.won:
            print("\n*** WIN! ***")
        elif stats.outcome == "lost":
            print("\n*** LOST (hit mine on a guess) ***")
        else:
            print("\n*** STUCK (no provable move) ***")

        time.sleep(1.0)  # Pause between games

    wins = runner.stats.wins
    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument("--size", type=int, default=9, help="Board size (NxN)")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines (default: ~12%% of cells)")
    parser.add_argument("--guess", action="store_true", help="Guess when deduction runs dry")
    args = parser.parse_args()

    # Default mines to the beginner density
    mines = args.mines if args.mines else max(1, int(args.size * args.size * 0.12))

    demo(delay=args.delay, games=args.games, size=args.size, mines=mines, guess=args.guess)
