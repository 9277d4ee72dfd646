"""Per-question answer slots for a single session."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from quiztaker.core.errors import SessionClosedError, UnknownQuestionError


class AnswerStore:
    """Holds one answer per question id; writable until frozen."""

    def __init__(self, question_ids: Iterable[int]) -> None:
        self._known_ids: frozenset[int] = frozenset(question_ids)
        self._answers: dict[int, Any] = {}
        self._frozen: bool = False

    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True

    def put(self, question_id: int, answer: Any) -> None:
        self._ensure_writable(question_id)
        self._answers[question_id] = answer

    def clear(self, question_id: int) -> None:
        self._ensure_writable(question_id)
        self._answers.pop(question_id, None)

    def get(self, question_id: int) -> Any | None:
        return self._answers.get(question_id)

    def has_answer(self, question_id: int) -> bool:
        return question_id in self._answers

    def answered_count(self) -> int:
        return len(self._answers)

    def as_mapping(self) -> Mapping[int, Any]:
        """Read-only view; a copy is taken so later writes never leak into it."""
        return MappingProxyType(dict(self._answers))

    def _ensure_writable(self, question_id: int) -> None:
        if self._frozen:
            raise SessionClosedError("Answers are frozen once the session is submitted.")
        if question_id not in self._known_ids:
            raise UnknownQuestionError(f"Question {question_id!r} is not part of this session.")
