"""Quiz-taking engine: question model, answer rules, scoring, sessions and quiz files."""

from .answers import is_blank, is_correct, normalize_answer
from .errors import (
    AnswerTypeMismatch,
    InvalidDurationError,
    InvalidQuestionError,
    QuizEngineError,
    SessionClosedError,
    UnknownQuestionError,
)
from .models import (
    AnswerStatus,
    Difficulty,
    Question,
    QuestionKind,
    QuestionOutcome,
    QuestionState,
    Result,
    SessionSnapshot,
    SessionStatus,
    SubmitReason,
)
from .question_schema import QuestionRecord, parse_question_records
from .quiz_exporter import save_quiz_to_file, serialize_questions
from .quiz_importer import ImportedQuiz, QuizImportError, load_quiz_from_file, parse_quiz_text
from .scoring import breakdown_by_difficulty, score
from .services.countdown import Countdown
from .services.question_bank import QuestionBank
from .services.quiz_session import QuizSession

__all__ = [
    "AnswerStatus",
    "AnswerTypeMismatch",
    "Countdown",
    "Difficulty",
    "ImportedQuiz",
    "InvalidDurationError",
    "InvalidQuestionError",
    "Question",
    "QuestionBank",
    "QuestionKind",
    "QuestionOutcome",
    "QuestionRecord",
    "QuestionState",
    "QuizEngineError",
    "QuizImportError",
    "QuizSession",
    "Result",
    "SessionClosedError",
    "SessionSnapshot",
    "SessionStatus",
    "SubmitReason",
    "UnknownQuestionError",
    "breakdown_by_difficulty",
    "is_blank",
    "is_correct",
    "load_quiz_from_file",
    "normalize_answer",
    "parse_question_records",
    "parse_quiz_text",
    "save_quiz_to_file",
    "score",
    "serialize_questions",
]
