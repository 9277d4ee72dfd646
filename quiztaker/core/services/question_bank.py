"""Service holding a validated quiz and starting sessions from it."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
from typing import Any

from quiztaker.constants.quiz_constants import DEFAULT_DURATION_MINUTES
from quiztaker.core.errors import InvalidQuestionError
from quiztaker.core.models import Question
from quiztaker.core.question_schema import parse_question_records
from quiztaker.core.services.quiz_session import QuizSession
from quiztaker.core.validation import validate_questions

logger = logging.getLogger(__name__)


class QuestionBank:
    """Keeps an immutable, validated question list for repeated attempts."""

    def __init__(self, duration_minutes: float = DEFAULT_DURATION_MINUTES) -> None:
        self._questions: tuple[Question, ...] = ()
        self._question_counter: int = 0
        self._duration_minutes = duration_minutes

    def load_questions(self, questions: Iterable[Question]) -> None:
        """Replace the current quiz with ``questions`` after validating them."""
        self._questions = validate_questions(questions)
        self._question_counter = max(q.id for q in self._questions)
        logger.info("Loaded quiz with %d question(s)", len(self._questions))

    def load_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Validate raw bank records and load them, numbering records without an id."""
        parsed = parse_question_records(records)
        if not parsed:
            raise InvalidQuestionError("Quiz must contain at least one question.")
        self._question_counter = max((r.id for r in parsed if r.id is not None), default=0)
        questions = [
            record.to_question(record.id if record.id is not None else self._next_question_id())
            for record in parsed
        ]
        self.load_questions(questions)

    def get_questions(self) -> tuple[Question, ...]:
        return self._questions

    def has_questions(self) -> bool:
        return bool(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question_at_index(self, index: int) -> Question:
        if not 0 <= index < len(self._questions):
            raise IndexError(f"Question index {index} out of range")
        return self._questions[index]

    def clear(self) -> None:
        self._questions = ()
        self._question_counter = 0

    def start_session(self, duration_minutes: float | None = None) -> QuizSession:
        """Start a fresh attempt; calling this again is a retake."""
        if not self._questions:
            raise InvalidQuestionError("No quiz loaded.")
        minutes = self._duration_minutes if duration_minutes is None else duration_minutes
        return QuizSession.from_minutes(self._questions, minutes)

    def _next_question_id(self) -> int:
        self._question_counter += 1
        return self._question_counter
