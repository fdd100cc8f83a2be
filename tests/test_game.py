import pytest

from wordsplit.errors import InvalidWordError
from wordsplit.game import FIRST_GUESSES, GameState, WordleGame, play_one_game
from wordsplit.sampler import WordSampler
from wordsplit.search import GuessSearcher

SMALL = ["CRANE", "TRACE", "SLATE", "GRAPE", "PLATE"]

ATCH = ["BATCH", "HATCH", "LATCH", "MATCH", "PATCH", "WATCH", "CATCH"]
ATCH_GUESSES = ATCH + ["CRANE", "CHAMP", "BLOWN", "WHELP", "CLAMP"]


def test_end_to_end_small_vocab():
    messages = []
    with GuessSearcher(SMALL, SMALL, workers=1) as searcher:
        game = WordleGame(searcher, progress=messages.append, sampler=WordSampler(seed=0))
        tries = game.play("TRACE", first_guess="CRANE")

        assert tries == 2
        assert game.state is GameState.SOLVED
        assert game.clues == ["C?R+A+N-E+", "T+R+A+C+E+"]
    assert any(m.startswith("Possible answers (1): TRACE") for m in messages)
    assert messages[-1].startswith("done in 2 guesses")


def test_step_reports_remaining_candidates():
    with GuessSearcher(SMALL, SMALL, workers=1) as searcher:
        game = WordleGame(searcher, progress=lambda m: None)
        game.reset("TRACE")
        info = game.step("CRANE")
        assert info == {
            "guess": "CRANE",
            "clue": "C?R+A+N-E+",
            "remaining": 1,
            "step": 1,
            "solved": False,
        }
        assert game.state is GameState.NARROWING
        assert game.next_guess() == "TRACE"


def test_candidate_cache_does_not_grow_across_games():
    with GuessSearcher(ATCH, ATCH_GUESSES, workers=1) as searcher:
        game = WordleGame(searcher, progress=lambda m: None, sampler=WordSampler(seed=1))
        for hidden in ATCH * 3:
            tries = game.play(hidden, first_guess="CRANE")
            # root plus one entry per unsolved clue of this game only
            assert len(searcher._candidates) <= tries


def test_play_one_game_uses_search_when_many_candidates():
    for hidden in ATCH:
        tries = play_one_game(hidden, ATCH, ATCH_GUESSES, first_guess="CRANE", workers=2, seed=3)
        assert 2 <= tries <= len(ATCH) + 1


def test_search_announces_top_guesses():
    messages = []
    with GuessSearcher(ATCH, ATCH_GUESSES, workers=2) as searcher:
        game = WordleGame(searcher, progress=messages.append, sampler=WordSampler(seed=7), top=2)
        game.play("WATCH", first_guess="CRANE")
    assert "Best next guesses:" in messages
    assert any("avg answers left" in m for m in messages)


def test_opening_guess_comes_from_list():
    words = ["RAISE", "ROATE", "SLATE"]
    with GuessSearcher(words, words, workers=1) as searcher:
        game = WordleGame(searcher, progress=lambda m: None, sampler=WordSampler(seed=5))
        game.reset("SLATE")
        assert game.next_guess() in words
        assert game.first_guesses == ["RAISE", "ROATE", "SLATE"]


def test_invalid_hidden_word_is_rejected_before_play():
    with GuessSearcher(SMALL, SMALL, workers=1) as searcher:
        game = WordleGame(searcher, progress=lambda m: None)
        for bad in ("trace", "TRAC", "BLIMP"):
            with pytest.raises(InvalidWordError):
                game.play(bad)
        assert game.clues == []


def test_invalid_vocabulary_is_rejected():
    with GuessSearcher(["CRANE", "tr4ce"], ["CRANE"], workers=1) as searcher:
        with pytest.raises(InvalidWordError):
            WordleGame(searcher)


def test_max_guesses_stops_early():
    with GuessSearcher(ATCH, ATCH_GUESSES, workers=1) as searcher:
        game = WordleGame(searcher, progress=lambda m: None, max_guesses=1)
        tries = game.play("WATCH", first_guess="CRANE")
        assert tries == 1
        assert game.state is GameState.NARROWING


def test_triangular_choice_weights():
    sampler = WordSampler(seed=0)
    items = ["A", "B", "C"]
    picks = []
    for r in range(6):
        sampler._rng.randrange = lambda n, r=r: r
        picks.append(sampler.triangular_choice(items))
    # weights 3, 2, 1 over [0, 6)
    assert picks == ["A", "A", "A", "B", "B", "C"]


def test_first_guesses_list_is_well_formed():
    assert len(FIRST_GUESSES) == 47
    assert len(set(FIRST_GUESSES)) == 47
    assert FIRST_GUESSES[0] == "RAISE"
