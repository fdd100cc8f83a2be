import math
from collections import Counter

from wordsplit.feedback import get_clue
from wordsplit.partition import GuessStats, partition_metrics, pattern_histogram, score_guess

WORDS = [
    "CRANE", "TRACE", "SLATE", "GRAPE", "PLATE", "ALLOT", "TOTAL", "STOAL",
    "TALLY", "ALLOY", "ATOLL", "ABBEY", "CABIN", "PRESS", "SPREE", "EERIE",
    "GEESE", "LLAMA", "SASSY", "ASSET", "ROATE", "STYLE", "BLIMP", "EAGLE",
]


def _brute_force_score(candidates, guess):
    groups = Counter(get_clue(c, guess) for c in candidates if c != guess)
    return sum(n * n for n in groups.values()), len(groups)


def test_score_matches_sum_of_squared_groups():
    for guess in WORDS + ["RAISE", "MUMMY"]:
        stats = score_guess(WORDS, guess, math.inf)
        score, groups = _brute_force_score(WORDS, guess)
        assert stats == GuessStats(score=score, groups=groups), guess


def test_guess_itself_is_skipped():
    stats = score_guess(["CRANE", "TRACE"], "CRANE")
    assert stats == GuessStats(score=1, groups=1)
    assert score_guess(["CRANE"], "CRANE") == GuessStats(score=0, groups=0)


def test_pruned_once_running_score_exceeds_best():
    score, _ = _brute_force_score(WORDS, "SLATE")
    assert score_guess(WORDS, "SLATE", best_known=score - 1) is None
    # ties are not pruned
    assert score_guess(WORDS, "SLATE", best_known=score).score == score


def test_avg_remaining():
    stats = GuessStats(score=12, groups=3)
    assert stats.avg_remaining(4) == 3.0


def test_brute_force_metrics():
    pool = ["CRANE", "TRACE", "SLATE"]
    hist = pattern_histogram("CRANE", pool)
    assert sum(hist.values()) == 3
    m = partition_metrics("CRANE", pool)
    assert m["partitions"] == 3
    assert m["worst_case"] == 1
    assert m["exp_remaining"] == 1.0
    assert abs(m["entropy"] - math.log2(3)) < 1e-9
