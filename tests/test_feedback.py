import pytest

from wordsplit.errors import InvalidClueFormat, InvalidWordError
from wordsplit.feedback import (
    clue_from_feedback,
    consistent_with,
    decode_clue,
    encode_clue,
    get_clue,
    is_solved,
    parse_feedback,
    pattern_to_int,
    score_pattern,
)

WORDS = [
    "CRANE", "TRACE", "SLATE", "GRAPE", "PLATE", "ALLOT", "TOTAL", "STOAL",
    "ABBEY", "CABIN", "PRESS", "SPREE", "EERIE", "GEESE", "LLAMA", "SASSY",
]


def test_known_patterns():
    assert score_pattern("CRANE", "CRANE") == [2, 2, 2, 2, 2]
    assert score_pattern("ALLOT", "TOTAL") == [1, 1, 0, 1, 1]
    assert score_pattern("ABBEY", "CABIN") == [1, 0, 2, 0, 0]
    assert score_pattern("PRESS", "SPREE") == [1, 1, 1, 1, 0]


def test_get_clue_encoding():
    assert get_clue("TRACE", "CRANE") == "C?R+A+N-E+"
    assert get_clue("TRACE", "TRACE") == "T+R+A+C+E+"
    assert get_clue("BLIMP", "ROATE") == "R-O-A-T-E-"


def test_solution_against_itself_is_all_hits():
    for w in WORDS:
        assert is_solved(get_clue(w, w))


def test_repeated_letters_are_not_over_counted():
    for solution in WORDS:
        for guess in WORDS:
            pattern = score_pattern(guess, solution)
            for letter in set(guess):
                marked = sum(1 for ch, p in zip(guess, pattern) if ch == letter and p > 0)
                assert marked <= solution.count(letter), (solution, guess, letter)


def test_decode_inverts_encode():
    for solution in WORDS:
        for guess in WORDS:
            clue = get_clue(solution, guess)
            letters, pattern = decode_clue(clue)
            assert letters == guess
            assert encode_clue(letters, pattern) == clue


def test_decode_rejects_malformed_clues():
    with pytest.raises(InvalidClueFormat):
        decode_clue("C?R+A+N-E")  # too short
    with pytest.raises(InvalidClueFormat):
        decode_clue("C*R+A+N-E+")  # unknown marker
    with pytest.raises(InvalidClueFormat):
        decode_clue("c?R+A+N-E+")  # lowercase letter


def test_invalid_words_are_rejected():
    with pytest.raises(InvalidWordError):
        score_pattern("crane", "TRACE")
    with pytest.raises(InvalidWordError):
        score_pattern("CRANES", "TRACE")
    with pytest.raises(InvalidWordError):
        get_clue("TR4CE", "CRANE")


def test_pattern_to_int_bounds():
    assert pattern_to_int([2, 2, 2, 2, 2]) == 242
    assert pattern_to_int([0, 0, 0, 0, 0]) == 0
    with pytest.raises(ValueError):
        pattern_to_int([3, 0, 0, 0, 0])


def test_consistent_with_delegates_to_clue():
    clue = get_clue("TOTAL", "ALLOT")
    assert consistent_with("TOTAL", clue)
    assert consistent_with("STOAL", clue)
    assert not consistent_with("ATOLL", clue)


def test_human_feedback_forms():
    assert parse_feedback("gybby") == [2, 1, 0, 0, 1]
    assert parse_feedback("21001") == [2, 1, 0, 0, 1]
    assert parse_feedback("[2, 1, 0, 0, 1]") == [2, 1, 0, 0, 1]
    assert clue_from_feedback("crane", "byggg") == "C-R?A+N+E+"
    assert clue_from_feedback("CRANE", "c?r+a+n-e+") == "C?R+A+N-E+"
    with pytest.raises(InvalidClueFormat):
        parse_feedback("gyb")
    with pytest.raises(InvalidClueFormat):
        clue_from_feedback("SLATE", "C?R+A+N-E+")
