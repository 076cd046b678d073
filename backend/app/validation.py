"""Validation of candidate questions.

`validate_question` is shared by the authoring form (pre-submit check) and
the submission endpoint (authoritative check). It never raises for bad
input: every problem becomes a `Violation`, and all fields are checked so
the caller sees the full list at once.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import ValidationError

from .schemas import OPTION_COUNT, Question, Violation, ViolationKind

_MESSAGES = {
    "questionText": "Question text is required.",
    "options": f"Exactly {OPTION_COUNT} options are required.",
    "correctAnswerIndex": f"Correct answer must be an option number between 0 and {OPTION_COUNT - 1}.",
    "id": "Question id must not be empty.",
}


@dataclass
class ValidationResult:
    question: Optional[Question] = None
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def _violation_for(loc: tuple) -> Optional[Violation]:
    """Translate a pydantic error location into a domain violation."""
    if not loc:
        return None
    name = loc[0]
    if name == "options":
        if len(loc) > 1 and isinstance(loc[1], int):
            return Violation(
                field=f"options.{loc[1]}",
                kind=ViolationKind.EMPTY_OPTION,
                message=f"Option {loc[1] + 1} is required.",
            )
        return Violation(field="options", kind=ViolationKind.WRONG_COUNT, message=_MESSAGES["options"])
    if name == "correctAnswerIndex":
        return Violation(field=name, kind=ViolationKind.OUT_OF_RANGE, message=_MESSAGES[name])
    if name in ("questionText", "id"):
        return Violation(field=name, kind=ViolationKind.EMPTY_FIELD, message=_MESSAGES[name])
    return None


def validate_question(data: Any) -> ValidationResult:
    """Validate `data` as a Question.

    Returns a `ValidationResult` holding either the normalized question or
    the list of violations. Non-mapping input is checked as an empty mapping.
    """
    if not isinstance(data, dict):
        data = {}
    violations: List[Violation] = []
    question = None
    try:
        question = Question.model_validate(data)
    except ValidationError as exc:
        for err in exc.errors():
            v = _violation_for(tuple(err.get("loc", ())))
            if v is not None and v not in violations:
                violations.append(v)
    options = data.get("options")
    # count is checked here so it is reported even when items also fail
    if isinstance(options, list) and len(options) != OPTION_COUNT:
        wrong_count = Violation(field="options", kind=ViolationKind.WRONG_COUNT, message=_MESSAGES["options"])
        if wrong_count not in violations:
            violations.append(wrong_count)
    if violations:
        return ValidationResult(violations=_ordered(violations))
    return ValidationResult(question=question)


_FIELD_ORDER = ("id", "questionText", "options", "correctAnswerIndex")


def _ordered(violations: List[Violation]) -> List[Violation]:
    """Sort violations by field order, keeping option slots in index order."""
    def key(v: Violation):
        head, _, tail = v.field.partition(".")
        rank = _FIELD_ORDER.index(head) if head in _FIELD_ORDER else len(_FIELD_ORDER)
        return (rank, int(tail) if tail.isdigit() else -1)
    return sorted(violations, key=key)
