from __future__ import annotations

import random
from typing import List, Optional, Sequence, TypeVar

from wordsplit.vocab import WordVocab

T = TypeVar("T")


class WordSampler:
    """Seedable source of every random choice the solver makes."""

    def __init__(self, vocab: Optional[WordVocab] = None, seed: int | None = None) -> None:
        if vocab is not None and not isinstance(vocab, WordVocab):
            raise TypeError("vocab must be a WordVocab")

        self._vocab = vocab

        # Create RNG (deterministic if seed provided)
        self._rng = random.Random(seed)

    def choice_index(self) -> int:
        if self._vocab is None or len(self._vocab) == 0:
            raise ValueError("sampler has no vocab to draw from")
        return self._rng.randrange(len(self._vocab))

    def choice_word(self) -> str:
        return self._vocab.word_at(self.choice_index())

    def choice(self, items: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        if not items:
            raise ValueError("cannot choose from an empty sequence")
        return items[self._rng.randrange(len(items))]

    def triangular_choice(self, items: Sequence[T]) -> T:
        """
        Pick from a ranked list, weighting the k-th entry (1-indexed) by N - k + 1.

        Draws r uniformly from [0, N(N+1)/2) and walks the cumulative weights
        until they pass r.
        """
        n = len(items)
        if n == 0:
            raise ValueError("cannot choose from an empty sequence")
        r = self._rng.randrange(n * (n + 1) // 2)
        acc = 0
        for i, item in enumerate(items):
            acc += n - i
            if acc > r:
                return item
        # unreachable: acc ends at N(N+1)/2 > r
        return items[0]

    def shuffled(self, items: Sequence[T]) -> List[T]:
        out = list(items)
        self._rng.shuffle(out)
        return out
