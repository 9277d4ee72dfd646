import pytest

from quiztaker.core.models import Difficulty, Question, QuestionKind
from quiztaker.core.validation import validate_question


def make_single(question_id=1, correct=0, options=("120", "130", "110", "140")):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.SINGLE_CHOICE,
            prompt="What is 15 x 8?",
            options=tuple(options),
            canonical_answer=correct,
            difficulty=Difficulty.EASY,
        )
    )


def make_boolean(question_id=2, correct=0):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.BOOLEAN_CHOICE,
            prompt="The sum of two odd numbers is always even.",
            canonical_answer=correct,
        )
    )


def make_multiple(question_id=3, correct=(1, 2)):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.MULTIPLE_CHOICE,
            prompt="Which of the following are prime numbers?",
            options=("15", "17", "19", "21", "25"),
            canonical_answer=list(correct),
            difficulty=Difficulty.HARD,
        )
    )


def make_short_text(question_id=4, correct="78.5"):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.SHORT_TEXT,
            prompt="Area of a circle with radius 5 cm (pi = 3.14)?",
            canonical_answer=correct,
        )
    )


def make_blanks(question_id=5):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.FILL_IN_BLANKS,
            prompt="Complete the equations:",
            blanks=("7 + _____ = 15", "_____ x 4 = 28", "36 / _____ = 6"),
            canonical_answer=["8", "Seven", "6"],
        )
    )


def make_pairs(question_id=6):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.MATCH_PAIRS,
            prompt="Match the fractions with their decimals:",
            pairs=(("1/2", "0.5"), ("1/4", "0.25"), ("3/4", "0.75")),
            canonical_answer=None,
        )
    )


def make_ordering(question_id=7):
    return validate_question(
        Question(
            id=question_id,
            kind=QuestionKind.ORDERED_SEQUENCE,
            prompt="Arrange in ascending order:",
            sequence=("3/4", "1/2", "7/8", "1/4"),
            canonical_answer=("1/4", "1/2", "3/4", "7/8"),
        )
    )


@pytest.fixture
def scenario_questions():
    """Single choice (0), true/false (True), multiple choice ({1, 2})."""
    return [make_single(1, 0), make_boolean(2, 0), make_multiple(3, (1, 2))]


@pytest.fixture
def all_kinds_questions():
    return [
        make_single(),
        make_boolean(),
        make_multiple(),
        make_short_text(),
        make_blanks(),
        make_pairs(),
        make_ordering(),
    ]
