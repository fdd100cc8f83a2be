import pandas as pd
import pytest

from wordsplit.config import WORKERS_ENV, SolverConfig, default_workers
from wordsplit.data_utils import load_answer_vocab, load_vocabularies
from wordsplit.errors import InvalidWordError
from wordsplit.vocab import WordVocab


@pytest.fixture
def word_csv(tmp_path):
    path = tmp_path / "word_list.csv"
    pd.DataFrame(
        {
            "word": ["crane", "trace", "roate", "slate", "Slate", "abc", "tr4ce", "blimp"],
            "day": [1, 2, None, 3, None, None, None, None],
        }
    ).to_csv(path, index=False)
    return path


def test_answers_are_rows_with_a_day(word_csv):
    vocab = load_answer_vocab(word_csv)
    assert vocab.words() == ["CRANE", "TRACE", "SLATE"]


def test_guesses_are_a_superset_of_solutions(word_csv):
    solutions, guesses = load_vocabularies(word_csv)
    assert guesses.words() == ["CRANE", "TRACE", "ROATE", "SLATE", "BLIMP"]
    assert all(w in guesses for w in solutions.words())


def test_from_text(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("crane\nTRACE\n\nxyz\ncrane\n", encoding="utf-8")
    assert WordVocab.from_text(path).words() == ["CRANE", "TRACE"]


def test_vocab_validates_words():
    with pytest.raises(InvalidWordError):
        WordVocab(["crane"])
    with pytest.raises(InvalidWordError):
        WordVocab(["CRANE", "CRANE"])
    with pytest.raises(ValueError):
        WordVocab([])


def test_vocab_lookup():
    v = WordVocab(["CRANE", "TRACE"])
    assert v.index_of("TRACE") == 1
    assert v.word_at(0) == "CRANE"
    assert v.require("CRANE") == "CRANE"
    with pytest.raises(InvalidWordError):
        v.require("SLATE")
    with pytest.raises(KeyError):
        v.index_of("SLATE")


def test_default_workers_env(monkeypatch):
    monkeypatch.setenv(WORKERS_ENV, "3")
    assert default_workers() == 3
    monkeypatch.setenv(WORKERS_ENV, "0")
    with pytest.raises(ValueError):
        default_workers()
    monkeypatch.delenv(WORKERS_ENV)
    assert default_workers() >= 1


def test_config_from_args():
    import argparse

    ap = argparse.ArgumentParser()
    SolverConfig.add_arguments(ap)
    cfg = SolverConfig.from_args(ap.parse_args(["--csv", "w.csv", "--workers", "2", "--seed", "9"]))
    assert cfg == SolverConfig(word_list="w.csv", workers=2, seed=9, top=5, log_level="INFO")
