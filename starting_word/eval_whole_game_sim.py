"""
starting_word/eval_whole_game_sim.py

Simulate *full games* with the solver and summarise how many guesses it
needs. Hidden words are sampled from the solution list (or all of them are
played with --all); the first guess is either fixed or drawn from the
opening list as in normal play.

Usage examples:
  python -m starting_word.eval_whole_game_sim --episodes 100
  python -m starting_word.eval_whole_game_sim --first RAISE SLATE CRANE --episodes 50
  python -m starting_word.eval_whole_game_sim --all --out all_games.csv

Outputs a CSV with one row per game and prints per-opener statistics.
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from wordsplit.config import setup_logging
from wordsplit.data_utils import load_vocabularies
from wordsplit.game import GameState, WordleGame
from wordsplit.sampler import WordSampler
from wordsplit.search import GuessSearcher

logger = logging.getLogger(__name__)


def simulate_games(
    searcher: GuessSearcher,
    targets: Sequence[str],
    *,
    first: Optional[str] = None,
    seed: int = 0,
    max_guesses: Optional[int] = None,
) -> List[Dict[str, object]]:
    """Play one game per target and return a row per game."""
    game = WordleGame(
        searcher,
        progress=logger.debug,
        sampler=WordSampler(seed=seed),
        max_guesses=max_guesses,
    )
    rows: List[Dict[str, object]] = []
    for i, target in enumerate(targets, start=1):
        t0 = time.perf_counter()
        steps = game.play(target, first_guess=first)
        clues = game.clues
        rows.append(
            {
                "first": clues[0][0::2],
                "target": target,
                "guesses": steps,
                "solved": game.state is GameState.SOLVED,
                "clues": " ".join(clues),
                "ms": round((time.perf_counter() - t0) * 1000, 1),
            }
        )
        if i % 10 == 0:
            logger.info("played %d/%d games", i, len(targets))
    return rows


def summarise(df: pd.DataFrame) -> pd.DataFrame:
    """Per-opener statistics over the `guesses` column."""
    out = []
    for first, grp in df.groupby("first"):
        steps = grp["guesses"].to_numpy(dtype=np.int64)
        solved = grp["solved"].to_numpy(dtype=bool)
        hist = np.bincount(steps, minlength=7)
        out.append(
            {
                "first": first,
                "games": int(steps.size),
                "solve_rate": float(np.mean(solved)),
                "mean": float(np.mean(steps)),
                "median": float(np.median(steps)),
                "p90": float(np.percentile(steps, 90)),
                "max": int(np.max(steps)),
                "within_6": float(np.mean(steps <= 6)),
                "histogram": " ".join(f"{k}:{int(c)}" for k, c in enumerate(hist) if c),
            }
        )
    return pd.DataFrame(out).sort_values(["mean", "first"]).reset_index(drop=True)


def main():
    ap = argparse.ArgumentParser(description="Whole-game simulation of the partition solver.")
    ap.add_argument("--csv", default="word_list.csv", help="Path to word_list.csv")
    ap.add_argument("--episodes", type=int, default=100, help="Games per opener (sampled targets)")
    ap.add_argument("--all", action="store_true", help="Play every solution once instead of sampling")
    ap.add_argument("--first", nargs="*", default=None, help="Fixed first guesses to compare")
    ap.add_argument("--max-guesses", type=int, default=None, help="Give up after this many guesses")
    ap.add_argument("--workers", type=int, default=None, help="Worker processes")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for target sampling")
    ap.add_argument("--out", default="whole_game_results.csv", help="Output CSV path")
    ap.add_argument("--log-level", default="INFO", help="Logging level")
    args = ap.parse_args()
    setup_logging(args.log_level)

    solutions, guesses = load_vocabularies(args.csv)
    if args.all:
        targets = solutions.words()
    else:
        rng = np.random.default_rng(args.seed)
        idx = rng.choice(len(solutions), size=min(args.episodes, len(solutions)), replace=False)
        targets = [solutions.word_at(int(i)) for i in idx]

    openers: List[Optional[str]] = [w.upper() for w in args.first] if args.first else [None]

    print(f"Playing {len(targets)} games for each of {len(openers)} opener setting(s)", flush=True)
    t0 = time.perf_counter()
    rows: List[Dict[str, object]] = []
    with GuessSearcher(solutions.words(), guesses.words(), workers=args.workers) as searcher:
        for first in openers:
            rows.extend(simulate_games(searcher, targets, first=first, seed=args.seed, max_guesses=args.max_guesses))
    print(f"Done in {time.perf_counter() - t0:.2f}s", flush=True)

    df = pd.DataFrame(rows)
    summary = summarise(df)
    print(summary.to_string(index=False))

    df.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
