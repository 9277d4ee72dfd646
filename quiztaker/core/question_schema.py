"""Pydantic schema for raw question records supplied by a question bank."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from quiztaker.core.errors import InvalidQuestionError
from quiztaker.core.models import Difficulty, Question, QuestionKind
from quiztaker.core.validation import validate_question

# Short type codes used by the portal's question bank.
_KIND_CODES: dict[str, QuestionKind] = {
    "MSA": QuestionKind.SINGLE_CHOICE,
    "MMA": QuestionKind.MULTIPLE_CHOICE,
    "TOF": QuestionKind.BOOLEAN_CHOICE,
    "SAQ": QuestionKind.SHORT_TEXT,
    "FIB": QuestionKind.FILL_IN_BLANKS,
    "MTF": QuestionKind.MATCH_PAIRS,
    "ORD": QuestionKind.ORDERED_SEQUENCE,
}


def parse_kind(value: str) -> QuestionKind:
    """Resolve a kind name or short type code; raises ValueError when unknown."""
    code = value.strip()
    if code.upper() in _KIND_CODES:
        return _KIND_CODES[code.upper()]
    return QuestionKind(code.lower())


class QuestionRecord(BaseModel):
    """One question as delivered by the bank, before domain validation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: int | None = Field(default=None, description="Bank id; assigned when omitted")
    kind: QuestionKind = Field(
        default=QuestionKind.SINGLE_CHOICE,
        validation_alias=AliasChoices("kind", "type"),
    )
    prompt: str = Field(..., min_length=1, validation_alias=AliasChoices("prompt", "question"))
    options: list[str] = Field(default_factory=list)
    pairs: list[tuple[str, str]] = Field(default_factory=list)
    sequence: list[str] = Field(default_factory=list)
    blanks: list[str] = Field(default_factory=list)
    canonical_answer: Any = Field(
        default=None,
        validation_alias=AliasChoices("canonical_answer", "correct", "correctAnswer"),
    )
    difficulty: Difficulty = Difficulty.MEDIUM
    explanation: str = ""

    @field_validator("kind", mode="before")
    @classmethod
    def _accept_kind_codes(cls, value: Any) -> Any:
        return parse_kind(value) if isinstance(value, str) else value

    @field_validator("difficulty", mode="before")
    @classmethod
    def _lowercase_difficulty(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("pairs", mode="before")
    @classmethod
    def _accept_pair_objects(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [
                (item.get("left"), item.get("right")) if isinstance(item, Mapping) else item
                for item in value
            ]
        return value

    def to_question(self, question_id: int | None = None) -> Question:
        """Build and validate the domain Question for this record."""
        resolved_id = self.id if question_id is None else question_id
        if resolved_id is None:
            raise InvalidQuestionError("Question record has no id.")
        return validate_question(
            Question(
                id=resolved_id,
                kind=self.kind,
                prompt=self.prompt,
                canonical_answer=self.canonical_answer,
                options=tuple(self.options),
                pairs=tuple(self.pairs),
                sequence=tuple(self.sequence),
                blanks=tuple(self.blanks),
                difficulty=self.difficulty,
                explanation=self.explanation,
            )
        )


def parse_question_records(records: Iterable[Mapping[str, Any]]) -> list[QuestionRecord]:
    """Validate raw mappings; the first malformed record raises InvalidQuestionError."""
    parsed: list[QuestionRecord] = []
    for position, raw in enumerate(records, start=1):
        if not isinstance(raw, Mapping):
            raise InvalidQuestionError(f"Question record {position} is not a mapping.")
        try:
            parsed.append(QuestionRecord.model_validate(dict(raw)))
        except ValidationError as exc:
            raise InvalidQuestionError(f"Question record {position} is malformed: {exc}") from exc
    return parsed
