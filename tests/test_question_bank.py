import pytest

from quiztaker.core.errors import InvalidQuestionError
from quiztaker.core.models import Difficulty, Question, QuestionKind
from quiztaker.core.question_schema import QuestionRecord, parse_question_records
from quiztaker.core.services.question_bank import QuestionBank
from quiztaker.core.validation import validate_question

PORTAL_RECORDS = [
    {
        "type": "MSA",
        "question": "What is the result of 15 x 8?",
        "options": ["120", "130", "110", "140"],
        "correctAnswer": 0,
        "difficulty": "Easy",
    },
    {
        "type": "MMA",
        "question": "Which of the following are prime numbers?",
        "options": ["15", "21", "17", "19", "25"],
        "correctAnswer": [2, 3],
        "difficulty": "Medium",
    },
    {"type": "TOF", "question": "The sum of two odd numbers is even.", "correctAnswer": 0},
    {"type": "SAQ", "question": "Area of a circle with r = 5?", "correctAnswer": "78.5"},
    {
        "type": "FIB",
        "question": "Complete the equations:",
        "blanks": ["7 + _____ = 15", "_____ x 4 = 28"],
        "correctAnswer": ["8", "7"],
    },
    {
        "type": "MTF",
        "question": "Match the fractions:",
        "pairs": [{"left": "1/2", "right": "0.5"}, {"left": "1/4", "right": "0.25"}],
    },
    {
        "type": "ORD",
        "question": "Arrange ascending:",
        "sequence": ["3/4", "1/2", "1/4"],
        "correctAnswer": ["1/4", "1/2", "3/4"],
        "difficulty": "Hard",
        "explanation": "Convert to decimals first.",
    },
]


def test_portal_records_load_into_a_bank():
    bank = QuestionBank()
    bank.load_records(PORTAL_RECORDS)

    questions = bank.get_questions()
    assert [q.id for q in questions] == [1, 2, 3, 4, 5, 6, 7]
    assert [q.kind for q in questions] == list(QuestionKind)
    assert questions[1].canonical_answer == frozenset({2, 3})
    assert dict(questions[5].canonical_answer) == {"1/2": "0.5", "1/4": "0.25"}
    assert questions[6].difficulty is Difficulty.HARD


def test_records_keep_bank_ids_and_number_the_rest():
    bank = QuestionBank()
    bank.load_records(
        [
            {"id": 10, "prompt": "A?", "options": ["x", "y"], "canonical_answer": 1},
            {"prompt": "B?", "options": ["x", "y"], "canonical_answer": 0},
        ]
    )
    assert [q.id for q in bank.get_questions()] == [10, 11]


@pytest.mark.parametrize(
    "record",
    [
        {"prompt": "", "options": ["a", "b"], "canonical_answer": 0},
        {"prompt": "Q?", "options": ["a", "b"], "canonical_answer": 0, "colour": "red"},
        {"type": "XYZ", "prompt": "Q?"},
        {"prompt": "Q?", "options": ["a", "b"], "canonical_answer": 0, "difficulty": "extreme"},
        {"type": "MTF", "prompt": "Q?", "pairs": [{"left": "a"}]},
    ],
)
def test_malformed_records_are_rejected(record):
    with pytest.raises(InvalidQuestionError):
        parse_question_records([record])


@pytest.mark.parametrize(
    "record",
    [
        {"prompt": "Q?", "options": ["a", "b"], "canonical_answer": 5},
        {"prompt": "Q?", "options": ["only one"], "canonical_answer": 0},
        {"type": "MMA", "prompt": "Q?", "options": ["a", "b"], "canonical_answer": []},
        {"type": "SAQ", "prompt": "Q?", "canonical_answer": "   "},
        {"type": "FIB", "prompt": "Q?", "blanks": ["_____"], "canonical_answer": ["a", "b"]},
        {"type": "ORD", "prompt": "Q?", "sequence": ["a", "b"], "canonical_answer": ["a", "c"]},
        {"type": "MTF", "prompt": "Q?", "pairs": [["a", "1"], ["a", "2"]]},
        {"type": "TOF", "prompt": "Q?", "options": ["Yes", "No"], "canonical_answer": 0},
    ],
)
def test_inconsistent_questions_are_rejected(record):
    with pytest.raises(InvalidQuestionError):
        QuestionRecord.model_validate(record).to_question(1)


def test_non_mapping_record_is_rejected():
    with pytest.raises(InvalidQuestionError):
        parse_question_records(["not a record"])


def test_validate_question_normalizes_text():
    question = validate_question(
        Question(
            id=1,
            kind=QuestionKind.SHORT_TEXT,
            prompt="  Capital of France?  ",
            canonical_answer="  Paris ",
        )
    )
    assert question.prompt == "Capital of France?"
    assert question.canonical_answer == "Paris"


def test_bank_starts_independent_sessions():
    bank = QuestionBank(duration_minutes=1)
    bank.load_records(PORTAL_RECORDS)

    first = bank.start_session()
    first.set_answer(1, 0)
    first.submit()
    retake = bank.start_session()

    assert retake.duration_seconds == 60
    assert retake.answer_for(1) is None
    assert bank.start_session(duration_minutes=2).duration_seconds == 120


def test_bank_without_questions_cannot_start():
    bank = QuestionBank()
    with pytest.raises(InvalidQuestionError):
        bank.start_session()
    with pytest.raises(InvalidQuestionError):
        bank.load_records([])


def test_bank_index_access():
    bank = QuestionBank()
    bank.load_records(PORTAL_RECORDS)
    assert bank.get_question_count() == 7
    assert bank.get_question_at_index(3).kind is QuestionKind.SHORT_TEXT
    with pytest.raises(IndexError):
        bank.get_question_at_index(7)
    bank.clear()
    assert not bank.has_questions()
