"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. The wire format is camelCase
JSON (`questionText`, `correctAnswerIndex`); Python code reads the
snake_case attributes.
"""

from enum import Enum
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

OPTION_COUNT = 4

NonEmptyText = Annotated[str, StringConstraints(strict=True, min_length=1)]


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON.

    Fields are populated by their camelCase alias only, so snake_case keys
    in a request body count as missing.
    """
    model_config = ConfigDict(alias_generator=to_camel)


class Question(WireModel):
    """A single multiple-choice question with exactly four options.

    `options` must be a real list; tuples and sets are rejected so the
    option order, and with it `correct_answer_index`, is well defined.
    """
    id: Optional[NonEmptyText] = None
    question_text: NonEmptyText
    options: List[NonEmptyText] = Field(strict=True, min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correct_answer_index: int = Field(strict=True, ge=0, le=OPTION_COUNT - 1)

    def to_wire(self) -> dict:
        """Serialize to the camelCase JSON shape, omitting an unassigned id."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ViolationKind(str, Enum):
    EMPTY_FIELD = "EmptyField"
    WRONG_COUNT = "WrongCount"
    EMPTY_OPTION = "EmptyOption"
    OUT_OF_RANGE = "OutOfRange"


class Violation(BaseModel):
    """One reason a candidate question fails validation, scoped to a field."""
    field: str
    kind: ViolationKind
    message: str


class QuestionCreated(BaseModel):
    """Confirmation returned by the submission endpoint."""
    message: str
    question: Question


class ErrorResponse(BaseModel):
    """Error body: a violation list or a single request-level message."""
    error: Union[List[Violation], str]
