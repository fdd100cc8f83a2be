"""
errors.py

Exceptions raised by the solver core.
"""


class InvalidClueFormat(ValueError):
    """A clue string is malformed (wrong length, bad letter or unknown marker)."""


class InvalidWordError(ValueError):
    """A word is not 5 uppercase letters, or is not in the expected vocabulary."""


class SearchIncomplete(RuntimeError):
    """A parallel guess search lost or failed one of its worker tasks."""
