"""
constraints.py

Compiles clue histories into constraint sets and filters candidate words.

A ConstraintSet has two parts:
- five positional filters ("must be L", "must not be any of E", or free)
- per-letter count specs ("at least N" or "exactly N")
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from wordsplit.errors import InvalidClueFormat
from wordsplit.feedback import MARKERS, HIT, MISS, PRESENT, WORD_LENGTH

logger = logging.getLogger(__name__)

_HIT = MARKERS[HIT]
_PRESENT = MARKERS[PRESENT]
_MISS = MARKERS[MISS]


@dataclass(frozen=True)
class PositionFilter:
    required: Optional[str] = None
    excluded: FrozenSet[str] = frozenset()

    def allows(self, ch: str) -> bool:
        if self.required is not None:
            return ch == self.required
        return ch not in self.excluded

    def __str__(self) -> str:
        if self.required is not None:
            return self.required
        if self.excluded:
            return "[^" + "".join(sorted(self.excluded)) + "]"
        return "."


@dataclass(frozen=True)
class CountSpec:
    count: int
    exact: bool = False

    def allows(self, n: int) -> bool:
        return n == self.count if self.exact else n >= self.count

    def __str__(self) -> str:
        return f"{'==' if self.exact else '>='}{self.count}"


@dataclass(frozen=True)
class ConstraintSet:
    positions: Tuple[PositionFilter, ...]
    counts: Dict[str, CountSpec] = field(default_factory=dict)

    def matches(self, word: str) -> bool:
        """True iff `word` passes every positional filter and every count spec."""
        for f, ch in zip(self.positions, word):
            if not f.allows(ch):
                return False
        for letter, spec in self.counts.items():
            if not spec.allows(word.count(letter)):
                return False
        return True

    def __str__(self) -> str:
        # Regex-like summary, e.g. "[^O]RA[^T]E C>=1"
        parts = ["".join(str(f) for f in self.positions)]
        parts.extend(f"{letter}{spec}" for letter, spec in sorted(self.counts.items()))
        return " ".join(parts)


def _split_clue(clue: str) -> List[Tuple[str, str]]:
    if not isinstance(clue, str) or len(clue) != 2 * WORD_LENGTH:
        raise InvalidClueFormat(f"clue must be a 10-character string: {clue!r}")
    return [(clue[i], clue[i + 1]) for i in range(0, 2 * WORD_LENGTH, 2)]


def _merge_spec(specs: Dict[str, CountSpec], letter: str, spec: CountSpec) -> None:
    # exact beats at-least; at-least specs merge by maximum
    prev = specs.get(letter)
    if prev is None:
        specs[letter] = spec
    elif spec.exact and not prev.exact:
        specs[letter] = spec
    elif spec.exact == prev.exact and spec.count > prev.count:
        specs[letter] = spec


def compile_clues(clues: Sequence[str]) -> ConstraintSet:
    """
    Translate an ordered clue history into a ConstraintSet.

    Pass 1 pins every hit position across the whole history. Pass 2 walks
    each clue on its own, left to right:
    - hit:     +1 to this clue's tally for the letter
    - present: +1 to the tally, and the letter is excluded from this slot
    - miss:    with no tally yet the letter is absent, so it is excluded from
               every slot that is not pinned; with a tally the count is now
               exact and the letter is excluded from this slot

    Per-clue tallies are merged across the history (exact wins, otherwise the
    maximum). An at-least tally equal to the letter's pinned count is already
    enforced by the positional filters and is not emitted.

    Raises InvalidClueFormat on a malformed clue or unknown marker.
    """
    decoded = [_split_clue(c) for c in clues]

    # Pass 1: pinned letters from hits anywhere in the history
    pinned: List[Optional[str]] = [None] * WORD_LENGTH
    for pairs in decoded:
        for i, (ch, mark) in enumerate(pairs):
            if mark == _HIT:
                pinned[i] = ch
    hit_counts = Counter(ch for ch in pinned if ch is not None)

    # Pass 2: exclusions and per-letter tallies
    excluded = [set() for _ in range(WORD_LENGTH)]
    specs: Dict[str, CountSpec] = {}
    for clue, pairs in zip(clues, decoded):
        tally: Dict[str, int] = {}
        exact = set()
        for i, (ch, mark) in enumerate(pairs):
            if mark == _PRESENT:
                excluded[i].add(ch)
                tally[ch] = tally.get(ch, 0) + 1
            elif mark == _HIT:
                tally[ch] = tally.get(ch, 0) + 1
            elif mark == _MISS:
                if ch in tally:
                    exact.add(ch)
                    excluded[i].add(ch)
                else:
                    for j in range(WORD_LENGTH):
                        if pinned[j] is None:
                            excluded[j].add(ch)
            else:
                raise InvalidClueFormat(f"unknown clue marker {mark!r} for {ch!r} in {clue!r}")
        for ch, n in tally.items():
            _merge_spec(specs, ch, CountSpec(n, ch in exact))

    positions = tuple(
        PositionFilter(required=pinned[i]) if pinned[i] is not None
        else PositionFilter(excluded=frozenset(excluded[i]))
        for i in range(WORD_LENGTH)
    )
    counts = {
        ch: spec for ch, spec in specs.items()
        if spec.exact or spec.count != hit_counts.get(ch, 0)
    }
    return ConstraintSet(positions, counts)


def filter_candidates(words: Iterable[str], constraints: ConstraintSet) -> List[str]:
    """Keep only the words that satisfy `constraints`, preserving order."""
    return [w for w in words if constraints.matches(w)]


def narrow(words: Iterable[str], clues: Sequence[str]) -> List[str]:
    """Filter `words` by the full clue history compiled as one ConstraintSet."""
    return filter_candidates(words, compile_clues(clues))


# -------------------------
# Caches
# -------------------------

class ConstraintCache:
    """
    Memo of compiled ConstraintSets keyed by the concatenated clue history.

    Owned by a single worker (or the main process) and cleared at the start
    of each search round so it never grows past one round's clues.
    """

    def __init__(self) -> None:
        self._memo: Dict[str, ConstraintSet] = {}

    def get(self, clues: Sequence[str]) -> ConstraintSet:
        key = "".join(clues)
        hit = self._memo.get(key)
        if hit is None:
            hit = compile_clues(clues)
            self._memo[key] = hit
        return hit

    def clear(self) -> None:
        self._memo.clear()

    def __len__(self) -> int:
        return len(self._memo)


class CandidateCache:
    """
    Memo of candidate lists keyed by clue history.

    The candidates for a history are computed by filtering the (cached)
    candidates of the history without its last clue by that last clue alone.
    Every parent list was itself produced from its full history, so the
    chain is exact; a single clue is never applied to an unrelated list.
    """

    def __init__(self, words: Sequence[str], constraints: Optional[ConstraintCache] = None) -> None:
        self._root: List[str] = list(words)
        self._constraints = constraints if constraints is not None else ConstraintCache()
        self._memo: Dict[str, List[str]] = {"": self._root}

    @property
    def words(self) -> List[str]:
        return self._root

    def candidates(self, clues: Sequence[str]) -> List[str]:
        clues = tuple(clues)
        key = "".join(clues)
        hit = self._memo.get(key)
        if hit is not None:
            return hit
        parent = self.candidates(clues[:-1])
        result = filter_candidates(parent, self._constraints.get(clues[-1:]))
        logger.debug("narrowed %d -> %d with %s", len(parent), len(result), clues[-1])
        self._memo[key] = result
        return result

    def clear(self) -> None:
        self._memo = {"": self._root}
        self._constraints.clear()

    def __len__(self) -> int:
        return len(self._memo)
