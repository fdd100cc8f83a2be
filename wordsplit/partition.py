"""
partition.py

Scores a guess by how finely it splits a candidate set.

Grouping the candidates by the clue the guess would produce against each
of them, the score is the sum of squared group sizes. Divided by the number
of candidates this is the expected number of candidates left after the
guess, so lower is better.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from wordsplit.constraints import ConstraintCache
from wordsplit.feedback import clue_unchecked, pattern_to_int, score_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessStats:
    score: int
    groups: int

    def avg_remaining(self, n_candidates: int) -> float:
        return self.score / max(1, n_candidates)


def score_guess(
    candidates: Iterable[str],
    guess: str,
    best_known: float = math.inf,
    cache: Optional[ConstraintCache] = None,
) -> Optional[GuessStats]:
    """
    Partition `candidates` by the clue `guess` produces against each one.

    Returns GuessStats(score, groups), or None as soon as the running score
    exceeds `best_known` (the guess is pruned: it cannot beat the best).

    A candidate equal to `guess` is skipped. Each candidate is re-checked
    against the compiled constraint of its own clue before it is counted.
    """
    if cache is None:
        cache = ConstraintCache()

    score = 0
    groups: Dict[str, int] = {}
    for answer in candidates:
        if answer == guess:
            continue
        clue = clue_unchecked(answer, guess)
        if not cache.get((clue,)).matches(answer):
            logger.warning("clue %s does not match its own solution %s; not counted", clue, answer)
            continue
        k = groups.get(clue, 0) + 1
        groups[clue] = k
        # k^2 - (k-1)^2 = 2k - 1
        score += 2 * k - 1
        if score > best_known:
            return None
    return GuessStats(score=score, groups=len(groups))


# -------------------------
# Brute-force metrics
# -------------------------

def pattern_histogram(guess: str, pool: Iterable[str]) -> Dict[int, int]:
    """pattern code -> number of words in `pool` producing it (no skipping, no pruning)."""
    counts: Dict[int, int] = defaultdict(int)
    for t in pool:
        counts[pattern_to_int(score_pattern(guess, t))] += 1
    return counts


def partition_metrics(guess: str, pool: List[str]) -> Dict[str, float]:
    """
    Compute heuristic metrics for a guess against the current candidate pool.

    exp_remaining: expected candidates left after the feedback
    entropy:       information gain in bits (higher is better)
    worst_case:    size of the largest bucket (lower is better)
    partitions:    number of distinct feedback patterns induced
    """
    if not pool:
        raise ValueError("pool must be non-empty")
    counts = pattern_histogram(guess, pool)
    n = len(pool)
    exp_remaining = sum(c * c for c in counts.values()) / n
    entropy = 0.0
    for c in counts.values():
        p = c / n
        if p > 0:
            entropy -= p * math.log2(p)
    worst_case = max(counts.values()) if counts else 0
    return {
        "exp_remaining": float(exp_remaining),
        "entropy": float(entropy),
        "worst_case": int(worst_case),
        "partitions": int(len(counts)),
    }
