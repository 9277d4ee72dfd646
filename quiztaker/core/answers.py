"""Per-kind answer shapes and correctness rules.

Each question kind has one rule object that knows how to normalize a raw
answer into the stored shape, whether that shape counts as "no answer", and
whether it equals the question's canonical answer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from quiztaker.constants.quiz_constants import BOOLEAN_OPTIONS, FALSE_INDEX, TRUE_INDEX
from quiztaker.core.errors import AnswerTypeMismatch
from quiztaker.core.models import Question, QuestionKind


def _fold(text: str) -> str:
    return text.strip().casefold()


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _string_items(question: Question, answer: Any) -> tuple[str, ...]:
    if isinstance(answer, (str, bytes)) or not isinstance(answer, Sequence):
        raise AnswerTypeMismatch(
            f"Question {question.id} ({question.kind.value}) expects a list of strings."
        )
    if not all(isinstance(item, str) for item in answer):
        raise AnswerTypeMismatch(f"Question {question.id} only accepts string entries.")
    return tuple(answer)


class _AnswerRule:
    def normalize(self, question: Question, answer: Any) -> Any:
        raise NotImplementedError

    def is_blank(self, value: Any) -> bool:
        raise NotImplementedError

    def canonical(self, question: Question) -> Any:
        return self.normalize(question, question.canonical_answer)

    def matches(self, question: Question, value: Any) -> bool:
        return value == self.canonical(question)


class _SingleChoiceRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> int:
        if not _is_index(answer):
            raise AnswerTypeMismatch(f"Question {question.id} expects a single option index.")
        if not 0 <= answer < len(question.options):
            raise AnswerTypeMismatch(
                f"Option index {answer} is out of range for question {question.id}."
            )
        return answer

    def is_blank(self, value: Any) -> bool:
        return False


class _BooleanChoiceRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> int:
        if isinstance(answer, bool):
            return TRUE_INDEX if answer else FALSE_INDEX
        if not _is_index(answer) or not 0 <= answer < len(BOOLEAN_OPTIONS):
            raise AnswerTypeMismatch(
                f"Question {question.id} expects True/False or index {TRUE_INDEX}/{FALSE_INDEX}."
            )
        return answer

    def is_blank(self, value: Any) -> bool:
        return False


class _MultipleChoiceRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> frozenset[int]:
        if isinstance(answer, (str, bytes, Mapping)) or not isinstance(answer, Iterable):
            raise AnswerTypeMismatch(f"Question {question.id} expects a set of option indices.")
        indices = list(answer)
        if not all(_is_index(index) for index in indices):
            raise AnswerTypeMismatch(f"Question {question.id} only accepts integer indices.")
        if any(not 0 <= index < len(question.options) for index in indices):
            raise AnswerTypeMismatch(
                f"Question {question.id} received an option index out of range."
            )
        return frozenset(indices)

    def is_blank(self, value: Any) -> bool:
        return not value


class _ShortTextRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> str:
        if not isinstance(answer, str):
            raise AnswerTypeMismatch(f"Question {question.id} expects free text.")
        return answer

    def is_blank(self, value: Any) -> bool:
        return not value.strip()

    def matches(self, question: Question, value: Any) -> bool:
        return _fold(value) == _fold(self.canonical(question))


class _FillInBlanksRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> tuple[str, ...]:
        values = _string_items(question, answer)
        if len(values) != len(question.blanks):
            raise AnswerTypeMismatch(
                f"Question {question.id} has {len(question.blanks)} blanks, got {len(values)} answers."
            )
        return values

    def is_blank(self, value: Any) -> bool:
        return all(not item.strip() for item in value)

    def matches(self, question: Question, value: Any) -> bool:
        expected = self.canonical(question)
        return len(value) == len(expected) and all(
            _fold(given) == _fold(wanted) for given, wanted in zip(value, expected)
        )


class _MatchPairsRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> Mapping[str, str]:
        if not isinstance(answer, Mapping):
            raise AnswerTypeMismatch(f"Question {question.id} expects a left -> right mapping.")
        lefts = {left for left, _ in question.pairs}
        rights = {right for _, right in question.pairs}
        for left, right in answer.items():
            if not isinstance(left, str) or not isinstance(right, str):
                raise AnswerTypeMismatch(f"Question {question.id} only accepts text pairs.")
            if left not in lefts:
                raise AnswerTypeMismatch(f"'{left}' is not a left item of question {question.id}.")
            if right not in rights:
                raise AnswerTypeMismatch(f"'{right}' is not a right item of question {question.id}.")
        return MappingProxyType(dict(answer))

    def is_blank(self, value: Any) -> bool:
        return not value

    def canonical(self, question: Question) -> Mapping[str, str]:
        if question.canonical_answer is None:
            return MappingProxyType(dict(question.pairs))
        return self.normalize(question, question.canonical_answer)

    def matches(self, question: Question, value: Any) -> bool:
        return dict(value) == dict(self.canonical(question))


class _OrderedSequenceRule(_AnswerRule):
    def normalize(self, question: Question, answer: Any) -> tuple[str, ...]:
        values = _string_items(question, answer)
        if values and sorted(values) != sorted(question.sequence):
            raise AnswerTypeMismatch(
                f"Ordering for question {question.id} must use each presented item exactly once."
            )
        return values

    def is_blank(self, value: Any) -> bool:
        return not value

    def matches(self, question: Question, value: Any) -> bool:
        return tuple(value) == self.canonical(question)


_RULES: dict[QuestionKind, _AnswerRule] = {
    QuestionKind.SINGLE_CHOICE: _SingleChoiceRule(),
    QuestionKind.MULTIPLE_CHOICE: _MultipleChoiceRule(),
    QuestionKind.BOOLEAN_CHOICE: _BooleanChoiceRule(),
    QuestionKind.SHORT_TEXT: _ShortTextRule(),
    QuestionKind.FILL_IN_BLANKS: _FillInBlanksRule(),
    QuestionKind.MATCH_PAIRS: _MatchPairsRule(),
    QuestionKind.ORDERED_SEQUENCE: _OrderedSequenceRule(),
}

_missing_kinds = set(QuestionKind) - set(_RULES)
if _missing_kinds:
    raise RuntimeError(f"No answer rule registered for: {sorted(k.value for k in _missing_kinds)}")


def normalize_answer(question: Question, answer: Any) -> Any:
    """Return ``answer`` in the stored shape for ``question`` or raise AnswerTypeMismatch."""
    if answer is None:
        raise AnswerTypeMismatch(f"Question {question.id} received no answer value.")
    return _RULES[question.kind].normalize(question, answer)


def is_blank(question: Question, answer: Any) -> bool:
    """True when ``answer`` is missing or the empty value for the question's kind."""
    if answer is None:
        return True
    rule = _RULES[question.kind]
    try:
        value = rule.normalize(question, answer)
    except AnswerTypeMismatch:
        # Malformed input only counts as blank when it carries nothing at all.
        if isinstance(answer, str):
            return not answer.strip()
        if isinstance(answer, (Mapping, Sequence, set, frozenset)):
            return len(answer) == 0
        return False
    return rule.is_blank(value)


def is_correct(question: Question, answer: Any) -> bool:
    """Total correctness predicate; absent or malformed answers are simply incorrect."""
    if answer is None:
        return False
    rule = _RULES[question.kind]
    try:
        value = rule.normalize(question, answer)
        return not rule.is_blank(value) and rule.matches(question, value)
    except AnswerTypeMismatch:
        return False
