"""Scoring of a closed quiz attempt."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from quiztaker.core.answers import is_blank, is_correct
from quiztaker.core.models import (
    AnswerStatus,
    Difficulty,
    DifficultyTally,
    Question,
    QuestionOutcome,
    Result,
    SubmitReason,
)


def classify(question: Question, answers: Mapping[int, Any]) -> AnswerStatus:
    answer = answers.get(question.id)
    if is_blank(question, answer):
        return AnswerStatus.UNANSWERED
    return AnswerStatus.CORRECT if is_correct(question, answer) else AnswerStatus.INCORRECT


def percent_half_up(correct: int, total: int) -> int:
    """``round(100 * correct / total)`` with halves rounded up, in exact integers."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)


def score(
    questions: Sequence[Question],
    answers: Mapping[int, Any],
    time_elapsed_seconds: int = 0,
    submit_reason: SubmitReason = SubmitReason.MANUAL,
) -> Result:
    """Turn questions and their answers into a Result.

    Neither argument is modified; the same inputs always produce an equal Result.
    """
    outcomes = tuple(
        QuestionOutcome(question_id=question.id, status=classify(question, answers))
        for question in questions
    )
    correct = sum(1 for outcome in outcomes if outcome.status is AnswerStatus.CORRECT)
    return Result(
        outcomes=outcomes,
        score_percent=percent_half_up(correct, len(outcomes)),
        time_elapsed_seconds=max(0, int(time_elapsed_seconds)),
        submit_reason=submit_reason,
    )


def breakdown_by_difficulty(
    questions: Sequence[Question], result: Result
) -> dict[Difficulty, DifficultyTally]:
    """Count correct answers per difficulty level for review screens."""
    totals = {difficulty: [0, 0] for difficulty in Difficulty}
    statuses = {outcome.question_id: outcome.status for outcome in result.outcomes}
    for question in questions:
        tally = totals[question.difficulty]
        tally[1] += 1
        if statuses.get(question.id) is AnswerStatus.CORRECT:
            tally[0] += 1
    return {
        difficulty: DifficultyTally(correct=correct, total=total)
        for difficulty, (correct, total) in totals.items()
    }
