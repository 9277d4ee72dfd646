"""Validation of question data before a session is built."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from types import MappingProxyType

from quiztaker.constants.quiz_constants import BLANK_PLACEHOLDER, BOOLEAN_OPTIONS
from quiztaker.core.answers import is_blank, normalize_answer
from quiztaker.core.errors import AnswerTypeMismatch, InvalidQuestionError
from quiztaker.core.models import Difficulty, Question, QuestionKind

_CHOICE_KINDS = (QuestionKind.SINGLE_CHOICE, QuestionKind.MULTIPLE_CHOICE)


def validate_question(question: Question) -> Question:
    """Return a normalized copy of ``question`` or raise InvalidQuestionError."""
    if not isinstance(question, Question):
        raise InvalidQuestionError(f"Expected a Question, got {type(question).__name__}.")
    if isinstance(question.id, bool) or not isinstance(question.id, int):
        raise InvalidQuestionError("Question id must be an integer.")
    if not isinstance(question.kind, QuestionKind):
        raise InvalidQuestionError(f"Question {question.id} has an unknown kind.")
    if not isinstance(question.difficulty, Difficulty):
        raise InvalidQuestionError(f"Question {question.id} has an unknown difficulty.")

    prompt = (question.prompt or "").strip()
    if not prompt:
        raise InvalidQuestionError(f"Question {question.id} has no prompt text.")

    prepared = replace(question, prompt=prompt, explanation=(question.explanation or "").strip())
    prepared = _prepare_kind_fields(prepared)

    try:
        canonical = normalize_answer(prepared, prepared.canonical_answer)
    except AnswerTypeMismatch as exc:
        raise InvalidQuestionError(f"Invalid canonical answer: {exc}") from exc
    if is_blank(prepared, canonical):
        raise InvalidQuestionError(f"Question {question.id} has an empty canonical answer.")
    if prepared.kind is QuestionKind.SHORT_TEXT:
        canonical = canonical.strip()
    elif prepared.kind is QuestionKind.FILL_IN_BLANKS:
        if any(not value.strip() for value in canonical):
            raise InvalidQuestionError(f"Question {question.id} leaves a canonical blank empty.")
        canonical = tuple(value.strip() for value in canonical)
    return replace(prepared, canonical_answer=canonical)


def validate_questions(questions: Iterable[Question]) -> tuple[Question, ...]:
    """Validate a whole quiz: at least one question, unique ids, each well formed."""
    prepared = tuple(validate_question(question) for question in questions)
    if not prepared:
        raise InvalidQuestionError("Quiz must contain at least one question.")
    seen: set[int] = set()
    for question in prepared:
        if question.id in seen:
            raise InvalidQuestionError(f"Duplicate question id {question.id}.")
        seen.add(question.id)
    return prepared


def _prepare_kind_fields(question: Question) -> Question:
    kind = question.kind
    if kind in _CHOICE_KINDS:
        options = _clean_texts(question.options, "Option", question.id)
        if len(options) < 2:
            raise InvalidQuestionError(f"Question {question.id} needs at least two options.")
        return replace(question, options=options)

    if kind is QuestionKind.BOOLEAN_CHOICE:
        if question.options and tuple(question.options) != BOOLEAN_OPTIONS:
            raise InvalidQuestionError(
                f"True/false question {question.id} must use options {BOOLEAN_OPTIONS}."
            )
        return replace(question, options=BOOLEAN_OPTIONS)

    if kind is QuestionKind.FILL_IN_BLANKS:
        blanks = _clean_texts(question.blanks, "Blank", question.id)
        if not blanks:
            raise InvalidQuestionError(f"Question {question.id} must define at least one blank.")
        if any(BLANK_PLACEHOLDER not in blank for blank in blanks):
            raise InvalidQuestionError(
                f"Each blank of question {question.id} must contain '{BLANK_PLACEHOLDER}'."
            )
        return replace(question, blanks=blanks)

    if kind is QuestionKind.MATCH_PAIRS:
        return _prepare_pairs(question)

    if kind is QuestionKind.ORDERED_SEQUENCE:
        sequence = _clean_texts(question.sequence, "Item", question.id)
        if len(sequence) < 2:
            raise InvalidQuestionError(f"Question {question.id} needs at least two items to order.")
        if len(set(sequence)) != len(sequence):
            raise InvalidQuestionError(f"Question {question.id} repeats an item to order.")
        canonical = question.canonical_answer
        if isinstance(canonical, (list, tuple)) and all(isinstance(item, str) for item in canonical):
            canonical = tuple(item.strip() for item in canonical)
        return replace(question, sequence=sequence, canonical_answer=canonical)

    if kind is QuestionKind.SHORT_TEXT:
        return question

    raise InvalidQuestionError(f"Question {question.id} has an unsupported kind {kind!r}.")


def _prepare_pairs(question: Question) -> Question:
    pairs: list[tuple[str, str]] = []
    for pair in question.pairs:
        if len(pair) != 2 or not all(isinstance(side, str) for side in pair):
            raise InvalidQuestionError(f"Question {question.id} has a malformed pair {pair!r}.")
        left, right = pair[0].strip(), pair[1].strip()
        if not left or not right:
            raise InvalidQuestionError(f"Question {question.id} has an empty pair side.")
        pairs.append((left, right))
    if not pairs:
        raise InvalidQuestionError(f"Question {question.id} must define at least one pair.")
    lefts = [left for left, _ in pairs]
    rights = [right for _, right in pairs]
    if len(set(lefts)) != len(lefts) or len(set(rights)) != len(rights):
        raise InvalidQuestionError(f"Question {question.id} repeats a left or right item.")

    expected = dict(pairs)
    canonical = question.canonical_answer
    if canonical is not None and (not isinstance(canonical, Mapping) or dict(canonical) != expected):
        raise InvalidQuestionError(
            f"Canonical mapping of question {question.id} does not match its pairs."
        )
    return replace(question, pairs=tuple(pairs), canonical_answer=MappingProxyType(expected))


def _clean_texts(values: Iterable[str], label: str, question_id: int) -> tuple[str, ...]:
    cleaned: list[str] = []
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise InvalidQuestionError(f"{label} text of question {question_id} cannot be empty.")
        cleaned.append(value.strip())
    return tuple(cleaned)
