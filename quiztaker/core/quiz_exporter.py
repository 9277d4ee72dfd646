"""Utilities for exporting quizzes to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path

from quiztaker.constants.quiz_constants import TRUE_INDEX
from quiztaker.core.models import Question, QuestionKind
from quiztaker.core.quiz_importer import (
    BLOCK_SEPARATOR,
    LIST_SEPARATOR,
    OPTION_LETTERS,
    PAIR_SEPARATOR,
)

_CHOICE_KINDS = (QuestionKind.SINGLE_CHOICE, QuestionKind.MULTIPLE_CHOICE)


def save_quiz_to_file(file_path: Path, questions: list[Question]) -> None:
    """Persist the provided questions to disk in the text import format."""

    if not questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    document = serialize_questions(questions)
    file_path.write_text(document, encoding="utf-8")


def serialize_questions(questions: list[Question]) -> str:
    blocks = [_serialize_question(question) for question in questions]
    return f"\n\n{BLOCK_SEPARATOR}\n\n".join(blocks) + "\n"


def _serialize_question(question: Question) -> str:
    lines: list[str] = [f"TYPE: {question.kind.value}"]
    lines.extend(_with_marker("Q", question.prompt))

    if question.kind in _CHOICE_KINDS:
        if len(question.options) > len(OPTION_LETTERS):
            raise ValueError(f"Question {question.id} has more options than the format allows.")
        for letter, option_text in zip(OPTION_LETTERS, question.options):
            lines.extend(_with_marker(letter, option_text))
    lines.extend(f"BLANK: {blank}" for blank in question.blanks)
    lines.extend(f"PAIR: {left} {PAIR_SEPARATOR} {right}" for left, right in question.pairs)
    lines.extend(f"ITEM: {item}" for item in question.sequence)

    correct = _serialize_correct(question)
    if correct is not None:
        lines.append(f"CORRECT: {correct}")
    lines.append(f"DIFFICULTY: {question.difficulty.value}")
    if question.explanation:
        lines.extend(_with_marker("EXPLANATION", question.explanation))
    return "\n".join(lines)


def _serialize_correct(question: Question) -> str | None:
    canonical = question.canonical_answer
    kind = question.kind
    if kind is QuestionKind.SINGLE_CHOICE:
        return OPTION_LETTERS[canonical]
    if kind is QuestionKind.MULTIPLE_CHOICE:
        return ", ".join(OPTION_LETTERS[index] for index in sorted(canonical))
    if kind is QuestionKind.BOOLEAN_CHOICE:
        return "TRUE" if canonical == TRUE_INDEX else "FALSE"
    if kind in (QuestionKind.FILL_IN_BLANKS, QuestionKind.ORDERED_SEQUENCE):
        return f" {LIST_SEPARATOR} ".join(canonical)
    if kind is QuestionKind.SHORT_TEXT:
        return canonical
    return None


def _with_marker(marker: str, text: str) -> list[str]:
    text_lines = text.splitlines() or [text]
    return [f"{marker}: {text_lines[0]}", *text_lines[1:]]
