"""
solver/solver_cli.py

Command-line front end.

play     Autoplay a game against a hidden word (given, or drawn at random)
         and report every guess, clue and candidate count.
suggest  Human-in-the-loop helper: type each guess you made in the game and
         the feedback you saw; the solver narrows the candidates and shows
         the best next guesses.

Feedback is accepted as 'gybby', '21001', '[0, 0, 2, 2, 2]' or an encoded
clue such as 'O?R+A-T-E-'.

Run:
  python -m solver.solver_cli play --csv word_list.csv --hidden TRACE
  python -m solver.solver_cli suggest --csv word_list.csv

Shortcuts (suggest):
  quit / q / exit  -> exit
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from wordsplit.config import SolverConfig, setup_logging
from wordsplit.data_utils import load_vocabularies
from wordsplit.errors import InvalidClueFormat, InvalidWordError
from wordsplit.feedback import clue_from_feedback, is_solved
from wordsplit.game import GameState, WordleGame, format_results
from wordsplit.sampler import WordSampler
from wordsplit.search import GuessSearcher, rank_results

logger = logging.getLogger("solver")

QUIT = {"q", "quit", "exit"}


def _print(msg: str) -> None:
    print(msg, flush=True)


def run_play(cfg: SolverConfig, hidden: Optional[str], first: Optional[str]) -> int:
    solutions, guesses = load_vocabularies(cfg.word_list)
    sampler = WordSampler(solutions, seed=cfg.seed)
    hidden = hidden.upper() if hidden else sampler.choice_word()
    first = first.upper() if first else None

    with GuessSearcher(solutions.words(), guesses.words(), workers=cfg.workers) as searcher:
        _print(f"concurrency: {searcher.workers}")
        game = WordleGame(searcher, progress=_print, sampler=sampler, top=cfg.top)
        try:
            tries = game.play(hidden, first_guess=first)
        except InvalidWordError as e:
            _print(f"{e}")
            return 2
    logger.debug("finished after %d guesses", tries)
    return 0 if game.state is GameState.SOLVED else 1


def _ask(prompt: str) -> Optional[str]:
    text = input(prompt).strip()
    if text.lower() in QUIT:
        print("bye!")
        return None
    return text


def run_suggest(cfg: SolverConfig) -> int:
    solutions, guesses = load_vocabularies(cfg.word_list)
    sampler = WordSampler(seed=cfg.seed)
    clues: List[str] = []

    print("\nAfter EACH guess you make in the game, enter the word and the feedback you saw.")
    print("Feedback: g/y/b, 2/1/0, [0,1,2,2,0] or a clue like O?R+A-T-E-. Type 'quit' to exit.\n")

    with GuessSearcher(solutions.words(), guesses.words(), workers=cfg.workers) as searcher:
        while True:
            guess = _ask("Enter your guess word: ")
            if guess is None:
                return 0
            guess = guess.upper()
            if guess not in guesses:
                print("Please enter a 5-letter word from the guess list.")
                continue

            # Get feedback and update
            while True:
                fb = _ask("Feedback for that guess: ")
                if fb is None:
                    return 0
                try:
                    clue = clue_from_feedback(guess, fb)
                    break
                except InvalidClueFormat as e:
                    print("Invalid feedback:", e)

            clues.append(clue)
            if is_solved(clue):
                print("Solved!")
                return 0

            candidates = searcher.candidates(clues)
            print(f"Remaining candidates: {len(candidates)}")
            if not candidates:
                print("No candidates remain. Check your feedback inputs.")
                return 1
            if len(candidates) <= 10:
                print("Candidates:", ", ".join(sorted(candidates)))
            if len(candidates) <= 2:
                print("Best next guess:", sampler.choice(candidates))
                continue

            ranked = rank_results(searcher.evaluate_guesses(clues), sampler)
            print("Top suggestions:")
            for line in format_results(ranked, len(candidates), cfg.top):
                print(f"  {line}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Partition-based Wordle solver")
    sub = ap.add_subparsers(dest="command", required=True)

    p_play = sub.add_parser("play", help="Autoplay against a hidden word")
    SolverConfig.add_arguments(p_play)
    p_play.add_argument("--hidden", default=None, help="Hidden solution (random if omitted)")
    p_play.add_argument("--first", default=None, help="Fixed first guess (skips the opening list)")

    p_suggest = sub.add_parser("suggest", help="Interactive helper with manual feedback")
    SolverConfig.add_arguments(p_suggest)

    args = ap.parse_args(argv)
    cfg = SolverConfig.from_args(args)
    setup_logging(cfg.log_level)

    if args.command == "play":
        return run_play(cfg, args.hidden, args.first)
    return run_suggest(cfg)


if __name__ == "__main__":
    sys.exit(main())
