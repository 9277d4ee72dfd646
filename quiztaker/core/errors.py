"""Exceptions raised by the quiz engine.

Every failure here is a local, synchronous integration error; none of them is
transient and none is retried.
"""

from __future__ import annotations


class QuizEngineError(Exception):
    """Base class for all quiz engine errors."""


class AnswerTypeMismatch(QuizEngineError, TypeError):
    """Raised when an answer's shape does not fit the target question."""


class SessionClosedError(QuizEngineError):
    """Raised when a submitted session is asked to change."""


class InvalidDurationError(QuizEngineError, ValueError):
    """Raised when a session is built with a non-positive duration."""


class InvalidQuestionError(QuizEngineError, ValueError):
    """Raised when question data is malformed."""


class UnknownQuestionError(QuizEngineError, KeyError):
    """Raised when a question id is not part of the session."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""
