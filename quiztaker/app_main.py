"""Command line entry point: check a quiz file and report what a session would hold."""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from quiztaker.constants.quiz_constants import DEFAULT_DURATION_MINUTES
from quiztaker.core import QuestionBank, QuizEngineError, load_quiz_from_file
from quiztaker.utils.logging_config import configure_logging
from quiztaker.utils.time_format import format_clock


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quiztaker", description=__doc__)
    parser.add_argument("quiz_file", type=Path, help="Quiz definition in the text format.")
    parser.add_argument(
        "--minutes",
        type=float,
        default=DEFAULT_DURATION_MINUTES,
        help="Time limit for the session (default: %(default)s).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Load the quiz, build a session for it and log a summary. Returns the exit code."""
    args = _build_parser().parse_args(argv)
    logger = configure_logging()

    try:
        imported = load_quiz_from_file(args.quiz_file)
        bank = QuestionBank(duration_minutes=args.minutes)
        bank.load_questions(imported.questions)
        session = bank.start_session()
    except (OSError, QuizEngineError) as exc:
        logger.error("Could not prepare quiz from %s: %s", args.quiz_file, exc)
        return 1

    kinds = Counter(question.kind.value for question in session.questions)
    logger.info(
        "Loaded %d questions from %s with a %s time limit.",
        len(session.questions),
        imported.source_path,
        format_clock(session.duration_seconds),
    )
    for kind, count in sorted(kinds.items()):
        logger.info("  %s: %d", kind, count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
