from __future__ import annotations
from pathlib import Path
from typing import Iterable, List
import pandas as pd

from wordsplit.errors import InvalidWordError
from wordsplit.feedback import validate_word


class WordVocab:
    def __init__(self, words: List[str]) -> None:
        if not isinstance(words, list):
            raise TypeError("`words` must be a list of strings")
        if not words:
            raise ValueError("no words provided")
        for w in words:
            validate_word(w)

        # Enforce uniqueness (first occurrence policy should be handled by the loaders)
        if len(set(words)) != len(words):
            raise InvalidWordError("duplicate words detected; input to WordVocab must be deduplicated")

        self._words: List[str] = list(words)  # copy so callers cannot mutate it
        self._index = {w: i for i, w in enumerate(self._words)}

    # ---------- Construction helpers ----------

    @staticmethod
    def _clean(raw_iter: Iterable[object], *, word_len: int = 5, dedupe: bool = True) -> List[str]:
        clean: List[str] = []
        seen = set()
        for val in raw_iter:
            if not isinstance(val, str):
                val = str(val) if val is not None else ""
            w = val.strip().upper()

            if len(w) != word_len:
                continue
            if not w.isascii() or not w.isalpha():
                continue

            if dedupe:
                if w in seen:
                    continue
                seen.add(w)

            clean.append(w)
        return clean

    @classmethod
    def from_csv(
        cls,
        path: str | Path,
        column: str = "word",
        *,
        word_len: int = 5,
        dedupe: bool = True,
    ) -> "WordVocab":
        """
        Load words from a CSV and build a WordVocab.

        Parameters
        ----------
        path : str
            Path to CSV file.
        column : str
            Column name containing words.
        word_len : int, default=5
            Required word length.
        dedupe : bool, default=True
            If True, keep the first occurrence and drop later duplicates.

        Words are upper-cased; non-alphabetic or wrong-length entries are dropped.

        Raises
        ------
        FileNotFoundError, KeyError, ValueError
        """
        df = pd.read_csv(path)
        if column not in df.columns:
            raise KeyError(f"column '{column}' not found in {path}")

        clean = cls._clean(df[column].tolist(), word_len=word_len, dedupe=dedupe)
        if not clean:
            raise ValueError("no valid words after filtering")
        return cls(clean)

    @classmethod
    def from_text(cls, path: str | Path, *, word_len: int = 5) -> "WordVocab":
        """Load a plain word list, one word per line."""
        with open(path, "r", encoding="utf-8") as f:
            clean = cls._clean(f, word_len=word_len)
        if not clean:
            raise ValueError("no valid words after filtering")
        return cls(clean)

    # ---------- Basic protocol ----------

    def __len__(self) -> int:
        """Number of words in the vocabulary."""
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return word in self._index

    def words(self) -> List[str]:
        """Return a copy of the internal word list (to avoid external mutation)."""
        return list(self._words)

    def index_of(self, word: str) -> int:
        """Return the index for `word`; raise KeyError if unknown."""
        try:
            return self._index[word]
        except KeyError:
            raise KeyError(f"unknown word: {word}") from None

    def word_at(self, idx: int) -> str:
        """Return the word at position `idx`; raise IndexError if out of bounds."""
        if idx < 0 or idx >= len(self._words):
            raise IndexError(f"index out of range: {idx}")
        return self._words[idx]

    def require(self, word: str) -> str:
        """Validate `word` and check membership; raise InvalidWordError otherwise."""
        validate_word(word)
        if word not in self._index:
            raise InvalidWordError(f"{word!r} is not in the vocabulary")
        return word
