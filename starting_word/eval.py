"""
starting_word/eval.py

Rank first guesses by how well they split the full solution set. The top
of this ranking is the opening list the game draws its first guess from
(wordsplit.game.FIRST_GUESSES).

Metrics per guess:
- avg_remaining: sum of squared group sizes / number of solutions
- groups: number of distinct clues induced
- rank_key: avg_remaining / groups (lower is better), the opening-list order
- entropy, worst_case: brute-force extras for the printed top rows

Usage:
  python -m starting_word.eval --csv word_list.csv --top 47
"""

from __future__ import annotations

import argparse
import logging
import time
from concurrent.futures import ProcessPoolExecutor
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from wordsplit.config import default_workers, setup_logging
from wordsplit.constraints import ConstraintCache
from wordsplit.data_utils import load_vocabularies
from wordsplit.distribute import distribute_range
from wordsplit.partition import partition_metrics, score_guess

logger = logging.getLogger(__name__)


def _score_chunk(args: Tuple[Sequence[str], Sequence[str]]) -> List[Dict[str, float]]:
    guesses, answers = args
    cache = ConstraintCache()
    n = len(answers)
    rows: List[Dict[str, float]] = []
    for g in guesses:
        stats = score_guess(answers, g, cache=cache)
        rows.append(
            {
                "guess": g,
                "score": stats.score,
                "groups": stats.groups,
                "avg_remaining": stats.avg_remaining(n),
                "rank_key": stats.avg_remaining(n) / max(1, stats.groups),
            }
        )
    return rows


def evaluate_first_guesses(
    answers: List[str],
    guesses: List[str] | None = None,
    *,
    workers: int | None = None,
) -> pd.DataFrame:
    """
    Score each candidate first guess against the full answer set.

    Parameters
    ----------
    answers : list[str]
        The set of possible solutions.
    guesses : list[str] | None
        Candidate guesses to score. If None, uses `answers`.
    workers : int | None
        Worker processes; defaults to the configured worker count.

    Returns
    -------
    pandas.DataFrame
        One row per guess sorted best first, columns
        'guess', 'score', 'groups', 'avg_remaining', 'rank_key'.
    """
    if not answers:
        raise ValueError("answers must be non-empty")
    pool = guesses if guesses is not None else answers
    workers = workers or default_workers()

    chunks = [(pool[lo:hi], answers) for lo, hi in distribute_range(0, len(pool), workers)]
    rows: List[Dict[str, float]] = []
    with ProcessPoolExecutor(max_workers=workers) as executor:
        for i, chunk_rows in enumerate(executor.map(_score_chunk, chunks), start=1):
            rows.extend(chunk_rows)
            logger.info("scored chunk %d/%d", i, len(chunks))

    df = pd.DataFrame(rows, columns=["guess", "score", "groups", "avg_remaining", "rank_key"])
    return df.sort_values(["rank_key", "avg_remaining", "guess"]).reset_index(drop=True)


def _print_top(df: pd.DataFrame, answers: List[str], k: int = 20) -> None:
    print(f"\nTop {k} starting words by avg remaining / groups:")
    print(f"{'rank':>4}  {'guess':<8}  {'avg_rem':>8}  {'groups':>6}  {'entropy':>8}  {'worst':>5}")
    for idx, r in enumerate(df.head(k).itertuples(index=False), start=1):
        m = partition_metrics(r.guess, answers)
        print(
            f"{idx:>4}  {r.guess:<8}  {r.avg_remaining:>8.2f}  {int(r.groups):>6}  {m['entropy']:>8.3f}  {int(m['worst_case']):>5}"
        )


def main() -> None:
    ap = argparse.ArgumentParser(description="Rank opening guesses by partition score.")
    ap.add_argument("--csv", default="word_list.csv", help="Path to word_list.csv")
    ap.add_argument("--guesses", choices=["answers", "all"], default="all", help="Guess pool to rank")
    ap.add_argument("--workers", type=int, default=None, help="Worker processes")
    ap.add_argument("--top", type=int, default=47, help="How many top rows to print")
    ap.add_argument("--out", default="starting_word_results.csv", help="Output CSV path")
    ap.add_argument("--log-level", default="INFO", help="Logging level")
    args = ap.parse_args()
    setup_logging(args.log_level)

    solutions, guesses = load_vocabularies(args.csv)
    answers = solutions.words()
    pool = answers if args.guesses == "answers" else guesses.words()

    print(f"Scoring {len(pool)} guesses against {len(answers)} answers...", flush=True)
    t0 = time.perf_counter()
    df = evaluate_first_guesses(answers, pool, workers=args.workers)
    print(f"Done in {time.perf_counter() - t0:.2f}s", flush=True)

    _print_top(df, answers, k=args.top)
    df.to_csv(args.out, index=False)
    print(f"Wrote results to {args.out}")


if __name__ == "__main__":
    main()
