import pandas as pd

from starting_word.eval import _score_chunk, evaluate_first_guesses
from starting_word.eval_whole_game_sim import simulate_games, summarise
from wordsplit.search import GuessSearcher

WORDS = ["CRANE", "TRACE", "SLATE", "GRAPE", "PLATE"]


def test_summarise_statistics():
    df = pd.DataFrame(
        {
            "first": ["RAISE"] * 4 + ["SLATE"] * 2,
            "guesses": [2, 3, 3, 4, 3, 3],
            "solved": [True] * 6,
        }
    )
    summary = summarise(df).set_index("first")
    assert summary.loc["RAISE", "games"] == 4
    assert summary.loc["RAISE", "mean"] == 3.0
    assert summary.loc["RAISE", "histogram"] == "2:1 3:2 4:1"
    assert summary.loc["SLATE", "within_6"] == 1.0


def test_simulate_games_rows():
    with GuessSearcher(WORDS, WORDS, workers=1) as searcher:
        rows = simulate_games(searcher, ["TRACE", "CRANE"], first="CRANE")
    assert [r["guesses"] for r in rows] == [2, 1]
    assert all(r["solved"] for r in rows)
    assert rows[0]["first"] == "CRANE"


def test_opener_ranking_puts_best_split_first():
    rows = {r["guess"]: r for r in _score_chunk((["PLATE", "CRANE"], WORDS))}
    assert rows["PLATE"]["score"] == 4 and rows["PLATE"]["groups"] == 4
    assert rows["CRANE"]["score"] == 6 and rows["CRANE"]["groups"] == 3

    df = evaluate_first_guesses(WORDS, workers=2)
    assert len(df) == len(WORDS)
    assert df.iloc[0]["guess"] == "PLATE"
    assert list(df["rank_key"]) == sorted(df["rank_key"])
