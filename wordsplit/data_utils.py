from __future__ import annotations

from pathlib import Path
from typing import Tuple

import pandas as pd

from wordsplit.vocab import WordVocab


def load_answer_vocab(csv_path: str | Path) -> WordVocab:
    """
    Load only the official answers from the CSV.
    Keeps rows where 'day' is not null, and returns a WordVocab.
    """
    df = pd.read_csv(csv_path)
    answer_df = df[df["day"].notna()].copy()
    return WordVocab(WordVocab._clean(answer_df["word"].tolist()))


def load_vocabularies(csv_path: str | Path) -> Tuple[WordVocab, WordVocab]:
    """
    Load (solutions, guesses) from one `word,day` CSV.

    Solutions are the rows with a 'day'; guesses are every row, with any
    solution missing from the guess rows appended so guesses stay a superset.
    """
    solutions = load_answer_vocab(csv_path)
    all_words = WordVocab.from_csv(csv_path, column="word")
    extra = [w for w in solutions.words() if w not in all_words]
    guesses = WordVocab(all_words.words() + extra) if extra else all_words
    return solutions, guesses
