"""
config.py

Run-time settings shared by the command-line tools, and logging setup.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from typing import Optional

WORKERS_ENV = "WORDSPLIT_WORKERS"


def default_workers() -> int:
    """Worker count from $WORDSPLIT_WORKERS, else the machine's CPU count."""
    env = os.environ.get(WORKERS_ENV)
    if env:
        try:
            n = int(env)
        except ValueError:
            raise ValueError(f"{WORKERS_ENV} must be an integer, got {env!r}") from None
        if n < 1:
            raise ValueError(f"{WORKERS_ENV} must be >= 1, got {n}")
        return n
    return os.cpu_count() or 1


@dataclass
class SolverConfig:
    word_list: str = "word_list.csv"
    workers: Optional[int] = None
    seed: Optional[int] = None
    top: int = 5
    log_level: str = "INFO"

    @classmethod
    def add_arguments(cls, ap: argparse.ArgumentParser) -> None:
        ap.add_argument("--csv", dest="word_list", default=cls.word_list,
                        help="Path to the word,day CSV (rows with a day are solutions)")
        ap.add_argument("--workers", type=int, default=None,
                        help=f"Worker processes (default: ${WORKERS_ENV} or CPU count)")
        ap.add_argument("--seed", type=int, default=None, help="RNG seed for reproducible games")
        ap.add_argument("--top", type=int, default=cls.top, help="How many top guesses to show")
        ap.add_argument("--log-level", default=cls.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "SolverConfig":
        return cls(
            word_list=args.word_list,
            workers=args.workers,
            seed=args.seed,
            top=args.top,
            log_level=args.log_level,
        )


def setup_logging(level: str | int = "INFO") -> None:
    """Configure the root logger once for a command-line run."""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
