"""
search.py

Parallel search for the guess(es) that minimise the partition score.

The sweep runs in two phases over a process pool:

1. every current candidate is scored as a guess;
2. only if the best phase-1 score is above the candidate count (a perfect
   split scores exactly the candidate count, so nothing can beat it), every
   other word of the guess vocabulary is scored, pruned against the phase-1
   best.

Each worker process is initialised once with both vocabularies and owns its
own caches. A task carries only the phase, the clue history, an index range
and the pruning threshold; the worker derives the candidate set itself.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import Executor, Future, ProcessPoolExecutor, wait
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from wordsplit.config import default_workers
from wordsplit.constraints import CandidateCache, ConstraintCache
from wordsplit.distribute import distribute_range
from wordsplit.errors import SearchIncomplete
from wordsplit.partition import GuessStats, score_guess
from wordsplit.sampler import WordSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessResult:
    guess: str
    stats: GuessStats
    is_candidate: bool = False

    @property
    def score(self) -> int:
        return self.stats.score

    @property
    def groups(self) -> int:
        return self.stats.groups


# -------------------------
# Worker side
# -------------------------

class WorkerState:
    """Vocabularies plus the caches one worker owns."""

    def __init__(self, solutions: Sequence[str], guesses: Sequence[str]) -> None:
        self.guesses: List[str] = list(guesses)
        self.constraints = ConstraintCache()
        self.candidates = CandidateCache(solutions)
        self._round: Optional[Tuple[str, ...]] = None

    def begin_round(self, clues: Tuple[str, ...]) -> None:
        """Clear the per-round caches when a new clue history arrives."""
        if clues == self._round:
            return
        self.constraints.clear()
        # keep the candidate chain while the history only grows
        if self._round is None or clues[: len(self._round)] != self._round:
            self.candidates.clear()
        self._round = clues


_STATE: Optional[WorkerState] = None


def init_worker(solutions: Sequence[str], guesses: Sequence[str]) -> None:
    """Pool initializer: load the vocabularies once per worker process."""
    global _STATE
    _STATE = WorkerState(solutions, guesses)


def evaluate_range(
    check_candidates: bool,
    clues: Tuple[str, ...],
    start: int,
    end: int,
    best_score: float = math.inf,
    state: Optional[WorkerState] = None,
) -> List[GuessResult]:
    """
    Score the guesses in [start, end) and return those tied for the lowest score.

    With `check_candidates` the range indexes the candidate list, otherwise
    it indexes the guess vocabulary and current candidates are skipped.
    Guesses scoring above `best_score` are pruned. The local best tightens
    the threshold as the loop goes.
    """
    state = state if state is not None else _STATE
    if state is None:
        raise RuntimeError("worker used before init_worker")

    clues = tuple(clues)
    state.begin_round(clues)
    candidates = state.candidates.candidates(clues)

    if check_candidates:
        pool = candidates[start:end]
        skip = frozenset()
    else:
        pool = state.guesses[start:end]
        skip = frozenset(candidates)

    best = best_score
    found: List[GuessResult] = []
    for guess in pool:
        if guess in skip:
            continue
        stats = score_guess(candidates, guess, best, state.constraints)
        if stats is None:
            continue
        if stats.score < best:
            found = [GuessResult(guess, stats, check_candidates)]
            best = stats.score
        elif stats.score == best:
            found.append(GuessResult(guess, stats, check_candidates))
    return found


# -------------------------
# Orchestrator
# -------------------------

class GuessSearcher:
    """
    Owns the worker pool and runs the two-phase sweep.

    Use as a context manager, or call close() when done. An `executor` may be
    supplied instead of the default ProcessPoolExecutor; it must already run
    `init_worker` in each of its workers.
    """

    def __init__(
        self,
        solutions: Sequence[str],
        guesses: Sequence[str],
        *,
        workers: Optional[int] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        if not solutions:
            raise ValueError("empty solution vocabulary")
        self.solutions: List[str] = list(solutions)
        self.guesses: List[str] = list(guesses)
        self.workers = int(workers) if workers is not None else default_workers()
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

        self._executor = executor
        self._owns_executor = executor is None
        self._candidates = CandidateCache(self.solutions)

    def __enter__(self) -> "GuessSearcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=True)
        self._executor = None

    def _pool(self) -> Executor:
        if self._executor is None:
            logger.debug("starting %d worker processes", self.workers)
            self._executor = ProcessPoolExecutor(
                max_workers=self.workers,
                initializer=init_worker,
                initargs=(self.solutions, self.guesses),
            )
            self._owns_executor = True
        return self._executor

    def reset_cache(self) -> None:
        """Drop the cached candidate lists; called when a new game starts."""
        self._candidates.clear()

    def candidates(self, clues: Sequence[str] = ()) -> List[str]:
        """Solutions consistent with the clue history (cached per history prefix)."""
        return self._candidates.candidates(tuple(clues))

    def evaluate_guesses(self, clues: Sequence[str] = ()) -> List[GuessResult]:
        """
        All guesses tied for the lowest partition score against the current
        candidate set, in arrival order (see `rank_results` for presentation).
        """
        clues = tuple(clues)
        candidates = self.candidates(clues)
        if not candidates:
            raise SearchIncomplete(f"no candidates are consistent with {''.join(clues)!r}")

        t0 = time.perf_counter()
        best, results = self._run_phase(True, clues, len(candidates), math.inf, [])
        logger.debug("phase 1: best=%s over %d candidates", best, len(candidates))

        if best > len(candidates):
            best, results = self._run_phase(False, clues, len(self.guesses), best, results)
            logger.debug("phase 2: best=%s over %d guesses", best, len(self.guesses))

        logger.debug("search took %.0fms", (time.perf_counter() - t0) * 1000)
        return results

    def _run_phase(
        self,
        check_candidates: bool,
        clues: Tuple[str, ...],
        n: int,
        best: float,
        results: List[GuessResult],
    ) -> Tuple[float, List[GuessResult]]:
        pool = self._pool()
        ranges = distribute_range(0, n, self.workers)
        try:
            futures: List[Future] = [
                pool.submit(evaluate_range, check_candidates, clues, lo, hi, best)
                for lo, hi in ranges
            ]
        except Exception as e:
            raise SearchIncomplete(f"could not dispatch search tasks: {e}") from e

        # barrier: every range must report before merging
        wait(futures)

        for (lo, hi), fut in zip(ranges, futures):
            try:
                found = fut.result()
            except Exception as e:
                raise SearchIncomplete(f"worker for range [{lo}, {hi}) failed: {e!r}") from e
            if found is None:
                raise SearchIncomplete(f"worker for range [{lo}, {hi}) returned nothing")
            if not found:
                continue
            worker_best = found[0].score
            if worker_best < best:
                results = list(found)
                best = worker_best
            elif worker_best == best:
                results.extend(found)
        return best, results


def rank_results(results: Sequence[GuessResult], sampler: Optional[WordSampler] = None) -> List[GuessResult]:
    """
    Order equally-scored guesses for presentation and play.

    Possible solutions first, then more groups first; remaining ties are in
    random order.
    """
    sampler = sampler if sampler is not None else WordSampler()
    shuffled = sampler.shuffled(results)
    shuffled.sort(key=lambda r: (not r.is_candidate, -r.groups))
    return shuffled
