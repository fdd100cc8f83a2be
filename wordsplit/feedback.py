"""
Feedback utilities: computing clues and converting between clue forms.

A clue is stored as a 10-character string alternating letter and marker:

    +  hit      (right letter, right slot)
    ?  present  (letter is in the word, elsewhere)
    -  miss     (letter absent, or over-used relative to the solution)

e.g. 'O?R+A-T-E-'. The decoded form is the pair
(guess, pattern) where pattern holds 2/1/0 for hit/present/miss.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import List, Tuple

from wordsplit.errors import InvalidClueFormat, InvalidWordError

WORD_LENGTH = 5
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

MISS, PRESENT, HIT = 0, 1, 2
MARKERS = {HIT: "+", PRESENT: "?", MISS: "-"}
_MARKER_VALUES = {m: v for v, m in MARKERS.items()}


def validate_word(word: str) -> str:
    """Return `word` unchanged if it is 5 uppercase ASCII letters, else raise InvalidWordError."""
    if not isinstance(word, str):
        raise InvalidWordError(f"word must be a string, got {type(word).__name__}")
    if len(word) != WORD_LENGTH:
        raise InvalidWordError(f"word must be length {WORD_LENGTH}: {word!r}")
    if any(ch not in ALPHABET for ch in word):
        raise InvalidWordError(f"word must be uppercase A-Z: {word!r}")
    return word


def score_pattern(guess: str, target: str) -> List[int]:
    """
    Compute the 5-position feedback for `guess` against `target`.

    Returns
    -------
    list[int]
        Five values in {0, 1, 2}:
        - 0 = miss    (letter not present OR over-used relative to target counts)
        - 1 = present (letter present but in a different position)
        - 2 = hit     (letter matches the target at that position)

    Duplicate handling follows the two-pass rule: hits are marked first and
    consume the target's letter frequencies, then the remaining positions
    are marked present while frequency is left, miss otherwise.
    """
    validate_word(guess)
    validate_word(target)
    return _two_pass(guess, target)


def _two_pass(guess: str, target: str) -> List[int]:
    pattern: List[int] = [MISS] * WORD_LENGTH
    remaining = Counter(target)

    # Pass 1: mark hits and decrement availability
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            pattern[i] = HIT
            remaining[g] -= 1

    # Pass 2: mark present where counts allow (else miss)
    for i, g in enumerate(guess):
        if pattern[i] == MISS and remaining[g] > 0:
            pattern[i] = PRESENT
            remaining[g] -= 1

    return pattern


def encode_clue(guess: str, pattern: List[int]) -> str:
    """Encode (guess, pattern) as the 10-character clue string."""
    if len(guess) != WORD_LENGTH or len(pattern) != WORD_LENGTH:
        raise InvalidClueFormat("guess and pattern must both have length 5")
    try:
        return "".join(ch + MARKERS[p] for ch, p in zip(guess, pattern))
    except KeyError as e:
        raise InvalidClueFormat(f"pattern elements must be in {{0,1,2}}, got {e.args[0]!r}") from None


def decode_clue(clue: str) -> Tuple[str, List[int]]:
    """Decode a clue string back into (guess, pattern)."""
    if not isinstance(clue, str) or len(clue) != 2 * WORD_LENGTH:
        raise InvalidClueFormat(f"clue must be a 10-character string: {clue!r}")
    letters = clue[0::2]
    markers = clue[1::2]
    if any(ch not in ALPHABET for ch in letters):
        raise InvalidClueFormat(f"clue letters must be uppercase A-Z: {clue!r}")
    pattern: List[int] = []
    for m in markers:
        if m not in _MARKER_VALUES:
            raise InvalidClueFormat(f"unknown clue marker {m!r} in {clue!r}")
        pattern.append(_MARKER_VALUES[m])
    return letters, pattern


def get_clue(solution: str, guess: str) -> str:
    """The encoded clue a player sees after guessing `guess` when the answer is `solution`."""
    return encode_clue(guess, score_pattern(guess, solution))


def clue_unchecked(solution: str, guess: str) -> str:
    """`get_clue` without input validation, for words that came out of a validated vocabulary."""
    pattern = _two_pass(guess, solution)
    return "".join(ch + MARKERS[p] for ch, p in zip(guess, pattern))


def is_solved(clue: str) -> bool:
    return clue[1::2] == MARKERS[HIT] * WORD_LENGTH


def pattern_to_int(pattern: List[int]) -> int:
    """
    Encode a 5-trit pattern [p0,p1,p2,p3,p4] (each in {0,1,2}) into a single
    integer in [0, 242] (base-3, most significant first).
    """
    if not isinstance(pattern, (list, tuple)):
        raise TypeError("pattern must be a list or tuple of 5 integers in {0,1,2}")
    if len(pattern) != WORD_LENGTH:
        raise ValueError("pattern must have length 5")
    value = 0
    for p in pattern:
        if not isinstance(p, int) or p not in (MISS, PRESENT, HIT):
            raise ValueError("pattern elements must be integers in {0,1,2}")
        value = value * 3 + p
    return value


def consistent_with(word: str, clue: str) -> bool:
    """
    True iff `word`, taken as the solution, would have produced `clue`.

    Delegates to `score_pattern` rather than re-implementing the rules.
    """
    guess, pattern = decode_clue(clue)
    return score_pattern(guess, word) == pattern


# -------------------------
# Human input
# -------------------------

def parse_feedback(s: str) -> List[int]:
    """Parse a 5-char feedback into a list of ints [0/1/2].
    Accepted forms:
      - letters: g/y/b  (green/yellow/black)
      - digits:  2/1/0
      - list:   [0, 1, 2, 2, 0]
    Raises InvalidClueFormat on invalid input.
    """
    s = s.strip().lower()
    # List-like form: [0,1,2,2,0]
    if s.startswith("[") and s.endswith("]"):
        nums = re.findall(r"[012]", s)
        if len(nums) != WORD_LENGTH:
            raise InvalidClueFormat("list form must contain exactly five 0/1/2 values")
        return [int(x) for x in nums]

    # letters or digits
    mapping = {"g": HIT, "y": PRESENT, "b": MISS, "2": HIT, "1": PRESENT, "0": MISS}
    if len(s) != WORD_LENGTH:
        raise InvalidClueFormat("feedback must be length 5 (gybgy / 21001 / [0,1,2,2,0])")
    try:
        return [mapping[ch] for ch in s]
    except KeyError as e:
        raise InvalidClueFormat("feedback must use only g/y/b or 2/1/0") from e


def clue_from_feedback(guess: str, feedback: str) -> str:
    """Build a clue from a guess and human feedback; an already-encoded clue is passed through."""
    text = feedback.strip()
    if len(text) == 2 * WORD_LENGTH:
        letters, _ = decode_clue(text.upper())
        if letters != guess.upper():
            raise InvalidClueFormat(f"clue {text!r} does not belong to guess {guess!r}")
        return text.upper()
    return encode_clue(validate_word(guess.upper()), parse_feedback(text))
