# src/snakehost/run.py
from __future__ import annotations
import argparse
import csv
import os
from typing import List, Optional, Tuple

from snakecore.config import CFG
from snakehost.autopilot import choose_key
from snakehost.session import Session


# --------------------------
# Game loop
# --------------------------
def play_game(session: Session, max_ticks: int = 10_000) -> Tuple[int, int, str]:
    """
    Drive the current game with the autopilot until it ends or runs out of ticks.

    Returns:
        ticks: steps advanced
        length: final body length
        outcome: "gameOver" or "timeout"
    """
    while session.ticks < max_ticks:
        key = choose_key(session.state, session.cfg)
        if key is not None:
            session.press(key)
        if not session.tick():
            break
    outcome = session.state.game_state if session.over else "timeout"
    return session.ticks, session.length, outcome


def play_games(session: Session, games: int, max_ticks: int = 10_000) -> List[Tuple]:
    """Play `games` games back to back and return CSV rows, header first."""
    rows: List[Tuple] = [("game", "difficulty", "ticks", "length", "outcome")]
    for game in range(1, games + 1):
        if game > 1:
            session.restart()
        ticks, length, outcome = play_game(session, max_ticks)
        print(f"{game},{session.difficulty},{ticks},{length},{outcome}")
        rows.append((game, session.difficulty, ticks, length, outcome))
    return rows


# --------------------------
# Main
# --------------------------
def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play headless snake games with the autopilot.")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument(
        "--difficulty",
        type=str,
        default="easy",
        choices=sorted(CFG.difficulties),
    )
    parser.add_argument(
        "--switch-to",
        type=str,
        default=None,
        choices=sorted(CFG.difficulties),
        help="animate to this difficulty before playing",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--max-ticks", type=int, default=10_000)
    parser.add_argument(
        "--outdir",
        type=str,
        default="data/runs",
        help="CSV is saved here",
    )

    args = parser.parse_args(argv)

    os.makedirs(args.outdir, exist_ok=True)
    out_csv = os.path.join(args.outdir, "games.csv")

    session = Session(difficulty=args.difficulty, seed=args.seed)
    if args.switch_to:
        for frame in session.change_difficulty(args.switch_to):
            print(f"[resize] {frame.columns}x{frame.rows}")

    print("game,difficulty,ticks,length,outcome")
    rows = play_games(session, args.games, args.max_ticks)

    with open(out_csv, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(rows)

    print(f"\nSaved results → {out_csv}")


if __name__ == "__main__":
    main()
