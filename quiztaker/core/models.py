"""Domain models for the quiz-taking engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class QuestionKind(str, Enum):
    """The seven answer-bearing question kinds."""

    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    BOOLEAN_CHOICE = "boolean_choice"
    SHORT_TEXT = "short_text"
    FILL_IN_BLANKS = "fill_in_blanks"
    MATCH_PAIRS = "match_pairs"
    ORDERED_SEQUENCE = "ordered_sequence"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SessionStatus(Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class SubmitReason(Enum):
    MANUAL = "manual"
    TIME_EXPIRED = "time_expired"


class AnswerStatus(Enum):
    """Tri-state classification produced by scoring."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNANSWERED = "unanswered"


class QuestionState(Enum):
    """Navigator state of a question while the quiz is being taken."""

    NOT_VISITED = "not_visited"
    VISITED = "visited"
    ANSWERED = "answered"
    FLAGGED = "flagged"
    ANSWERED_FLAGGED = "answered_flagged"


@dataclass(frozen=True, slots=True)
class Question:
    """A single quiz question.

    Only the fields relevant to ``kind`` are populated: ``options`` for the
    choice kinds, ``blanks`` for fill-in-the-blanks, ``pairs`` for matching and
    ``sequence`` (the presented order) for ordering questions.
    ``canonical_answer`` holds the normalized correct answer for the kind.
    """

    id: int
    kind: QuestionKind
    prompt: str
    canonical_answer: Any
    options: tuple[str, ...] = ()
    pairs: tuple[tuple[str, str], ...] = ()
    sequence: tuple[str, ...] = ()
    blanks: tuple[str, ...] = ()
    difficulty: Difficulty = Difficulty.MEDIUM
    explanation: str = ""


@dataclass(frozen=True, slots=True)
class QuestionOutcome:
    question_id: int
    status: AnswerStatus


@dataclass(frozen=True, slots=True)
class Result:
    """Scored outcome of a closed session."""

    outcomes: tuple[QuestionOutcome, ...]
    score_percent: int
    time_elapsed_seconds: int
    submit_reason: SubmitReason = SubmitReason.MANUAL

    @property
    def total_questions(self) -> int:
        return len(self.outcomes)

    @property
    def correct_count(self) -> int:
        return self._count(AnswerStatus.CORRECT)

    @property
    def incorrect_count(self) -> int:
        return self._count(AnswerStatus.INCORRECT)

    @property
    def unanswered_count(self) -> int:
        return self._count(AnswerStatus.UNANSWERED)

    def status_for(self, question_id: int) -> AnswerStatus:
        for outcome in self.outcomes:
            if outcome.question_id == question_id:
                return outcome.status
        raise KeyError(question_id)

    def _count(self, status: AnswerStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)


@dataclass(frozen=True, slots=True)
class DifficultyTally:
    correct: int = 0
    total: int = 0


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of a session handed to presentation subscribers."""

    status: SessionStatus
    current_index: int
    total_questions: int
    current_question: Question
    remaining_seconds: int
    clock_text: str
    is_time_running_low: bool
    answered_count: int
    progress_percent: float
    question_states: tuple[QuestionState, ...]
    flagged_ids: frozenset[int] = field(default_factory=frozenset)
    result: Result | None = None
