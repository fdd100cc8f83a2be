"""
game.py

Plays a full game against a known hidden word: opening guess, then
search / clue / narrow rounds until the hidden word is guessed.

States
------
AWAITING_FIRST_GUESS -> NARROWING -> ... -> SOLVED

The first guess comes from a precomputed opening list (see
starting_word/eval.py), weighted towards its top. Later guesses come from
the parallel search, except that with two or fewer candidates left one of
them is guessed directly.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

from wordsplit.errors import SearchIncomplete
from wordsplit.feedback import get_clue, is_solved
from wordsplit.sampler import WordSampler
from wordsplit.search import GuessSearcher, GuessResult, rank_results
from wordsplit.vocab import WordVocab

logger = logging.getLogger(__name__)

ProgressSink = Callable[[str], None]

# Best openers by avg remaining answers / groups, best first.
FIRST_GUESSES: List[str] = [
    "RAISE", "ROATE", "RAILE", "SALET", "REAST", "SOARE", "SLATE", "CRATE",
    "TRACE", "ORATE", "CARTE", "TALER", "IRATE", "CARLE", "RAINE", "RATEL",
    "ARISE", "CARET", "ARIEL", "ARTEL", "LATER", "TASER", "SAINE", "SANER",
    "EARST", "CARSE", "STALE", "STARE", "SNARE", "AROSE", "ALTER", "ALERT",
    "ANTRE", "OATER", "SLANE", "TARES", "RESAT", "CRANE", "LEAST", "TORSE",
    "SERAL", "LATEN", "STRAE", "REACT", "PAIRE", "LIANE", "CATER",
]


class GameState(Enum):
    AWAITING_FIRST_GUESS = "awaiting_first_guess"
    NARROWING = "narrowing"
    SOLVED = "solved"


def format_results(results: Sequence[GuessResult], n_candidates: int, top: int = 5) -> List[str]:
    lines = [
        f"{r.guess} - {r.stats.avg_remaining(n_candidates):.2f} avg answers left, {r.groups} groups"
        for r in results[:top]
    ]
    if len(results) > top:
        lines.append("...")
    return lines


class WordleGame:
    """
    Game driver.

    API
    ---
    reset(hidden) -> None
        Validates the hidden word and starts a new game.
    next_guess() -> str
        The guess the solver would play now.
    step(guess=None) -> dict
        Plays `guess` (or the solver's choice). Returns an info dict with
        'guess', 'clue', 'remaining', 'step', 'solved'.
    play(hidden, first_guess=None) -> int
        Plays until solved and returns the number of guesses taken.
    """

    def __init__(
        self,
        searcher: GuessSearcher,
        *,
        progress: Optional[ProgressSink] = None,
        sampler: Optional[WordSampler] = None,
        first_guesses: Sequence[str] = FIRST_GUESSES,
        top: int = 5,
        max_guesses: Optional[int] = None,
    ) -> None:
        self.searcher = searcher
        self.solutions = WordVocab(list(searcher.solutions))
        self.guesses = WordVocab(list(searcher.guesses))
        self.progress: ProgressSink = progress if progress is not None else logger.info
        self.sampler = sampler if sampler is not None else WordSampler()
        self.first_guesses = [w for w in first_guesses if w in self.guesses]
        self.top = int(top)
        self.max_guesses = max_guesses

        # Game state
        self.state = GameState.AWAITING_FIRST_GUESS
        self._hidden: Optional[str] = None
        self._clues: List[str] = []
        self._step: int = 0

    # -------------------------
    # Core API
    # -------------------------
    def reset(self, hidden: str) -> None:
        self._hidden = self.solutions.require(hidden)
        self.searcher.reset_cache()
        self._clues = []
        self._step = 0
        self.state = GameState.AWAITING_FIRST_GUESS

    def next_guess(self) -> str:
        if self.state is GameState.SOLVED:
            raise RuntimeError("game is already solved")

        if self.state is GameState.AWAITING_FIRST_GUESS and self.first_guesses:
            guess = self.sampler.triangular_choice(self.first_guesses)
            self.progress(f"Here's a good first guess: {guess}")
            return guess

        candidates = self.searcher.candidates(self._clues)
        if not candidates:
            raise SearchIncomplete(f"no candidates are consistent with {''.join(self._clues)!r}")
        self.progress(f"Possible answers ({len(candidates)}): {', '.join(sorted(candidates))}")

        if len(candidates) <= 2:
            guess = self.sampler.choice(candidates)
            self.progress(f"Best next guess: {guess}")
            return guess

        ranked = rank_results(self.searcher.evaluate_guesses(self._clues), self.sampler)
        if not ranked:
            raise SearchIncomplete("search returned no guesses")
        self.progress("Best next guesses:")
        for line in format_results(ranked, len(candidates), self.top):
            self.progress(line)
        return ranked[0].guess

    def step(self, guess: Optional[str] = None) -> Dict[str, object]:
        if self._hidden is None:
            raise RuntimeError("call reset() before step()")
        if guess is None:
            guess = self.next_guess()
        elif self.state is GameState.SOLVED:
            raise RuntimeError("game is already solved")
        else:
            guess = self.guesses.require(guess)

        clue = get_clue(self._hidden, guess)
        self._clues.append(clue)
        self._step += 1
        self.progress(f"guess: {guess} => {clue}")

        solved = is_solved(clue)
        if solved:
            self.state = GameState.SOLVED
            remaining = 1
        else:
            self.state = GameState.NARROWING
            remaining = len(self.searcher.candidates(self._clues))

        return {
            "guess": guess,
            "clue": clue,
            "remaining": remaining,
            "step": self._step,
            "solved": solved,
        }

    def play(self, hidden: str, first_guess: Optional[str] = None) -> int:
        """Play a whole game and return the number of guesses taken."""
        self.reset(hidden)
        t0 = time.perf_counter()

        info = self.step(first_guess)
        while not info["solved"]:
            if self.max_guesses is not None and self._step >= self.max_guesses:
                logger.warning("stopped after %d guesses without solving %s", self._step, hidden)
                break
            info = self.step()

        ms = (time.perf_counter() - t0) * 1000
        if info["solved"]:
            self.progress(f"done in {self._step} {'guesses' if self._step > 1 else 'guess'}, {ms:.0f}ms")
        return self._step

    # -------------------------
    # Introspection helpers
    # -------------------------
    @property
    def clues(self) -> List[str]:
        return list(self._clues)

    @property
    def hidden(self) -> Optional[str]:
        return self._hidden


def play_one_game(
    hidden: str,
    solutions: Sequence[str],
    guesses: Sequence[str],
    *,
    first_guess: Optional[str] = None,
    workers: Optional[int] = None,
    seed: Optional[int] = None,
    progress: Optional[ProgressSink] = None,
) -> int:
    """Build a searcher, play one game against `hidden`, and return the guess count."""
    with GuessSearcher(solutions, guesses, workers=workers) as searcher:
        game = WordleGame(searcher, progress=progress, sampler=WordSampler(seed=seed))
        return game.play(hidden, first_guess=first_guess)
