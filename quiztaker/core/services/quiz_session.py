"""Service for running one taker's attempt at a quiz."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
import math
from typing import Any

from quiztaker.constants.quiz_constants import (
    DEFAULT_DURATION_MINUTES,
    TIME_WARNING_WINDOW_SECONDS,
)
from quiztaker.core.answers import is_blank, normalize_answer
from quiztaker.core.errors import InvalidDurationError, SessionClosedError, UnknownQuestionError
from quiztaker.core.models import (
    Question,
    QuestionState,
    Result,
    SessionSnapshot,
    SessionStatus,
    SubmitReason,
)
from quiztaker.core.scoring import score
from quiztaker.core.services.answer_store import AnswerStore
from quiztaker.core.services.countdown import Countdown
from quiztaker.core.validation import validate_questions
from quiztaker.utils.time_format import format_clock

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SessionSnapshot], None]
ResultListener = Callable[[Result], None]


class QuizSession:
    """State machine for a quiz attempt: navigation, answers, countdown and submission.

    The session starts ``IN_PROGRESS`` with its countdown running and moves to
    ``SUBMITTED`` exactly once, either through :meth:`submit` or when the
    countdown expires. After that every mutation raises SessionClosedError,
    while :meth:`submit` keeps returning the cached Result.
    """

    def __init__(self, questions: Iterable[Question], duration_seconds: int) -> None:
        self._countdown = Countdown(duration_seconds)
        self._questions: tuple[Question, ...] = validate_questions(questions)
        self._by_id: dict[int, Question] = {question.id: question for question in self._questions}
        self._answers = AnswerStore(self._by_id)
        self._status = SessionStatus.IN_PROGRESS
        self._current_index: int = 0
        self._visited: set[int] = {self._questions[0].id}
        self._flagged: set[int] = set()
        self._result: Result | None = None
        self._snapshot_listeners: list[SnapshotListener] = []
        self._result_listeners: list[ResultListener] = []

        self._countdown.add_tick_listener(self._handle_tick)
        self._countdown.add_expiry_listener(self._handle_expiry)
        logger.info(
            "Quiz session started with %d question(s) and %ss on the clock",
            len(self._questions),
            duration_seconds,
        )

    @classmethod
    def from_minutes(
        cls,
        questions: Iterable[Question],
        duration_minutes: float = DEFAULT_DURATION_MINUTES,
    ) -> QuizSession:
        """Build a session from a duration configured in minutes."""
        if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, (int, float)):
            raise InvalidDurationError("Duration must be a number of minutes.")
        if not math.isfinite(duration_minutes) or duration_minutes <= 0:
            raise InvalidDurationError("Duration must be a positive number of minutes.")
        duration_seconds = int(round(duration_minutes * 60))
        if duration_seconds <= 0:
            raise InvalidDurationError("Duration is shorter than one second.")
        return cls(questions, duration_seconds)

    # --- Read access ---

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    @property
    def duration_seconds(self) -> int:
        return self._countdown.duration_seconds

    @property
    def remaining_seconds(self) -> int:
        return self._countdown.remaining_seconds

    @property
    def countdown(self) -> Countdown:
        return self._countdown

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_submitted(self) -> bool:
        return self._status is SessionStatus.SUBMITTED

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_question(self) -> Question:
        return self._questions[self._current_index]

    @property
    def result(self) -> Result | None:
        return self._result

    @property
    def flagged_ids(self) -> frozenset[int]:
        return frozenset(self._flagged)

    def answer_for(self, question_id: int) -> Any | None:
        self._question(question_id)
        return self._answers.get(question_id)

    def question_state(self, question_id: int) -> QuestionState:
        self._question(question_id)
        answered = self._answers.has_answer(question_id)
        flagged = question_id in self._flagged
        if answered and flagged:
            return QuestionState.ANSWERED_FLAGGED
        if answered:
            return QuestionState.ANSWERED
        if flagged:
            return QuestionState.FLAGGED
        if question_id in self._visited:
            return QuestionState.VISITED
        return QuestionState.NOT_VISITED

    def snapshot(self) -> SessionSnapshot:
        total = len(self._questions)
        answered = self._answers.answered_count()
        remaining = self._countdown.remaining_seconds
        return SessionSnapshot(
            status=self._status,
            current_index=self._current_index,
            total_questions=total,
            current_question=self.current_question,
            remaining_seconds=remaining,
            clock_text=format_clock(remaining),
            is_time_running_low=(
                self._status is SessionStatus.IN_PROGRESS
                and remaining <= TIME_WARNING_WINDOW_SECONDS
            ),
            answered_count=answered,
            progress_percent=answered / total * 100,
            question_states=tuple(self.question_state(q.id) for q in self._questions),
            flagged_ids=frozenset(self._flagged),
            result=self._result,
        )

    # --- Subscriptions ---

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener; returns a callable that removes it."""
        self._snapshot_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._snapshot_listeners:
                self._snapshot_listeners.remove(listener)

        return unsubscribe

    def add_result_listener(self, listener: ResultListener) -> None:
        """Hand the Result to ``listener`` once; immediately if already submitted."""
        if self._result is not None:
            listener(self._result)
            return
        self._result_listeners.append(listener)

    # --- Answer intake ---

    def set_answer(self, question_id: int, answer: Any) -> None:
        """Store ``answer`` for the question, replacing any earlier one.

        ``None`` or an empty value for the question's kind clears the slot.
        """
        self._ensure_open()
        question = self._question(question_id)
        if answer is None:
            self._answers.clear(question_id)
        else:
            value = normalize_answer(question, answer)
            if is_blank(question, value):
                self._answers.clear(question_id)
            else:
                self._answers.put(question_id, value)
        self._notify()

    def clear_answer(self, question_id: int) -> None:
        self._ensure_open()
        self._question(question_id)
        self._answers.clear(question_id)
        self._notify()

    def toggle_flag(self, question_id: int) -> bool:
        """Flip the review flag of a question and return the new state."""
        self._ensure_open()
        self._question(question_id)
        if question_id in self._flagged:
            self._flagged.discard(question_id)
        else:
            self._flagged.add(question_id)
        self._notify()
        return question_id in self._flagged

    def mark_for_review(self, question_id: int) -> None:
        self._ensure_open()
        self._question(question_id)
        self._flagged.add(question_id)
        self._notify()

    # --- Navigation ---

    def go_to(self, index: int) -> Question:
        """Move to ``index``, clamped to the first and last question."""
        self._ensure_open()
        self._current_index = max(0, min(int(index), len(self._questions) - 1))
        self._visited.add(self.current_question.id)
        self._notify()
        return self.current_question

    def next_question(self) -> Question:
        return self.go_to(self._current_index + 1)

    def previous_question(self) -> Question:
        return self.go_to(self._current_index - 1)

    # --- Submission ---

    def submit(self) -> Result:
        """Close the session and score it; later calls return the same Result."""
        return self._submit(SubmitReason.MANUAL)

    def _submit(self, reason: SubmitReason) -> Result:
        if self._result is not None:
            return self._result

        self._status = SessionStatus.SUBMITTED
        self._answers.freeze()
        self._result = score(
            self._questions,
            self._answers.as_mapping(),
            time_elapsed_seconds=self._countdown.elapsed_seconds,
            submit_reason=reason,
        )
        self._countdown.cancel()
        logger.info(
            "Quiz session submitted (%s): %d%% with %d correct, %d incorrect, %d unanswered",
            reason.value,
            self._result.score_percent,
            self._result.correct_count,
            self._result.incorrect_count,
            self._result.unanswered_count,
        )

        listeners, self._result_listeners = self._result_listeners, []
        for listener in listeners:
            listener(self._result)
        self._notify()
        return self._result

    def _handle_tick(self, remaining_seconds: int) -> None:
        if self._status is SessionStatus.IN_PROGRESS:
            self._notify()

    def _handle_expiry(self) -> None:
        logger.info("Time is up; submitting quiz session automatically")
        self._submit(SubmitReason.TIME_EXPIRED)

    # --- Internals ---

    def _ensure_open(self) -> None:
        if self._status is SessionStatus.SUBMITTED:
            logger.debug("Rejected change to a submitted quiz session")
            raise SessionClosedError("The quiz session has already been submitted.")

    def _question(self, question_id: int) -> Question:
        question = self._by_id.get(question_id)
        if question is None:
            raise UnknownQuestionError(f"Question {question_id!r} is not part of this session.")
        return question

    def _notify(self) -> None:
        if not self._snapshot_listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._snapshot_listeners):
            listener(snapshot)
