"""Utilities for importing quizzes from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    TYPE: single_choice        (optional, defaults to single_choice)
    Q: Question text. Additional lines until the next marker are treated as
       part of the question.
    A: First option            (choice questions, letters A-J in order)
    B: Second option
    BLANK: 7 + _____ = 15      (fill_in_blanks, one line per blank)
    PAIR: 1/2 => 0.5           (match_pairs, one line per pair)
    ITEM: 3/4                  (ordered_sequence, in presented order)
    CORRECT: B                 (see below)
    DIFFICULTY: easy|medium|hard
    EXPLANATION: Free text shown on the review screen.

CORRECT per type:

    single_choice     one letter                 CORRECT: B
    multiple_choice   comma separated letters    CORRECT: B, D
    boolean_choice    TRUE or FALSE              CORRECT: TRUE
    short_text        the expected text          CORRECT: 78.5
    fill_in_blanks    one value per blank, '|'   CORRECT: 8 | 7 | 6
    ordered_sequence  items in order, '|'        CORRECT: 1/4 | 1/2 | 3/4
    match_pairs       not used; PAIR lines are the answer key

The portal's short type codes (MSA, MMA, TOF, SAQ, FIB, MTF, ORD) are accepted
for TYPE as well.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import groupby
from pathlib import Path
from typing import Any

from quiztaker.core.errors import InvalidQuestionError
from quiztaker.core.models import Question, QuestionKind
from quiztaker.core.question_schema import QuestionRecord, parse_kind


class QuizImportError(InvalidQuestionError):
    """Raised when a quiz definition cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for imported quiz metadata and questions."""

    source_path: Path
    questions: list[Question]


OPTION_LETTERS = "ABCDEFGHIJ"
LIST_SEPARATOR = "|"
PAIR_SEPARATOR = "=>"
BLOCK_SEPARATOR = "---"

_SINGLE_VALUE_MARKERS = ("TYPE", "CORRECT", "DIFFICULTY")
_REPEATED_MARKERS = {"BLANK": "blanks", "PAIR": "pairs", "ITEM": "sequence"}


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    questions = parse_quiz_text(text)
    if not questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, questions=questions)


def parse_quiz_text(text: str) -> list[Question]:
    """Parse every block of ``text``; questions are numbered from 1 in file order."""
    questions: list[Question] = []
    for position, block in enumerate(_split_blocks(text), start=1):
        try:
            record = QuestionRecord.model_validate(_parse_block(block))
            questions.append(record.to_question(position))
        except ValueError as exc:
            raise QuizImportError(f"Question {position}: {exc}") from exc
    return questions


def _is_separator(line: str) -> bool:
    return not line.strip() or line.strip() == BLOCK_SEPARATOR


def _split_blocks(text: str) -> Iterator[str]:
    """Yield each question block; blank lines and separator lines end a block."""
    for is_separator, lines in groupby(text.splitlines(), key=_is_separator):
        if not is_separator:
            yield "\n".join(lines).strip()


def _parse_block(block: str) -> dict[str, Any]:
    question_lines: list[str] = []
    explanation_lines: list[str] = []
    options: dict[str, str] = {}
    singles: dict[str, str] = {}
    repeated: dict[str, list[str]] = {field: [] for field in _REPEATED_MARKERS.values()}
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        marker, has_colon, value = line.partition(":")
        marker = marker.strip().upper()
        value = value.strip()

        if marker == "Q" and has_colon:
            question_lines = [value]
            current_section = "Q"
            continue

        if marker == "EXPLANATION" and has_colon:
            explanation_lines = [value]
            current_section = "EXPLANATION"
            continue

        if marker in _SINGLE_VALUE_MARKERS and has_colon:
            if marker in singles:
                raise QuizImportError(f"{marker} is given more than once.")
            singles[marker] = value
            current_section = None
            continue

        if marker in _REPEATED_MARKERS and has_colon:
            repeated[_REPEATED_MARKERS[marker]].append(value)
            current_section = None
            continue

        if len(marker) == 1 and marker in OPTION_LETTERS and has_colon:
            options[marker] = value
            current_section = marker
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation_lines.append(line)
        elif current_section in options:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(
                f"Encountered text outside of a known section: '{line}'."
            )

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    letters = "".join(sorted(options))
    if letters != OPTION_LETTERS[: len(letters)]:
        raise QuizImportError("Options must use consecutive letters starting at A.")

    kind = _parse_kind(singles.get("TYPE", QuestionKind.SINGLE_CHOICE.value))
    record: dict[str, Any] = {
        "kind": kind,
        "prompt": question_text,
        "options": [options[letter].strip() for letter in letters],
        "blanks": repeated["blanks"],
        "sequence": repeated["sequence"],
        "pairs": [_parse_pair(value) for value in repeated["pairs"]],
        "explanation": "\n".join(explanation_lines).strip(),
    }
    if "DIFFICULTY" in singles:
        record["difficulty"] = singles["DIFFICULTY"]

    correct = singles.get("CORRECT")
    if kind is QuestionKind.MATCH_PAIRS:
        if correct is not None:
            raise QuizImportError("Matching questions take their answer key from PAIR lines.")
    elif correct is None:
        raise QuizImportError("CORRECT is required for this question type.")
    else:
        record["canonical_answer"] = _parse_correct(kind, correct, len(letters))
    return record


def _parse_kind(raw_value: str) -> QuestionKind:
    try:
        return parse_kind(raw_value)
    except ValueError as exc:
        raise QuizImportError(f"Unknown TYPE '{raw_value}'.") from exc


def _parse_pair(value: str) -> tuple[str, str]:
    left, separator, right = value.partition(PAIR_SEPARATOR)
    if not separator:
        raise QuizImportError(f"PAIR must look like 'left {PAIR_SEPARATOR} right': '{value}'.")
    return left.strip(), right.strip()


def _parse_correct(kind: QuestionKind, raw_value: str, option_count: int) -> Any:
    if kind is QuestionKind.SINGLE_CHOICE:
        return _letter_index(raw_value, option_count)
    if kind is QuestionKind.MULTIPLE_CHOICE:
        return [_letter_index(letter, option_count) for letter in raw_value.split(",") if letter.strip()]
    if kind is QuestionKind.BOOLEAN_CHOICE:
        flag = raw_value.upper()
        if flag not in ("TRUE", "FALSE"):
            raise QuizImportError("CORRECT must be TRUE or FALSE.")
        return flag == "TRUE"
    if kind in (QuestionKind.FILL_IN_BLANKS, QuestionKind.ORDERED_SEQUENCE):
        return [part.strip() for part in raw_value.split(LIST_SEPARATOR)]
    return raw_value


def _letter_index(raw_letter: str, option_count: int) -> int:
    letter = raw_letter.strip().upper()
    if len(letter) != 1 or letter not in OPTION_LETTERS[:option_count]:
        raise QuizImportError(
            f"CORRECT must name one of the options {', '.join(OPTION_LETTERS[:option_count])}."
        )
    return OPTION_LETTERS.index(letter)
