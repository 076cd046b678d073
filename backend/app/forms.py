"""Authoring form for multiple-choice questions.

`QuestionForm` holds the state of one form instance: the question text,
four fixed option slots, the selected correct option and the feedback shown
after the last submit. `submit` runs the local validator before anything is
sent, so an invalid form never reaches the network.

States: IDLE -> SUBMITTING -> SUCCESS | FAILED. SUCCESS and FAILED are
resting states and accept a new submit just like IDLE.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .errors import SubmissionInProgress, TransportFailure
from .schemas import OPTION_COUNT, Violation
from .utils.ids import timestamp_id
from .validation import validate_question

logger = logging.getLogger("app.forms")

TRANSPORT_ERROR_MESSAGE = "Could not reach the server. Your question was not saved; please try again."


class FormState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class QuestionForm:
    """State and submit behaviour of one authoring form.

    `id_factory` assigns the question id before sending; pass `None` to
    leave id assignment to the endpoint.
    """
    def __init__(self, id_factory: Optional[Callable[[], str]] = timestamp_id):
        self.id_factory = id_factory
        self.state = FormState.IDLE
        self.question_text = ""
        self._options: List[str] = [""] * OPTION_COUNT
        self.correct_answer_index: Any = 0
        self.field_errors: Dict[str, List[str]] = {}
        self.errors: List[str] = []
        self.notice: Optional[str] = None

    @classmethod
    def from_form_data(cls, data: Mapping[str, Any], **kwargs) -> "QuestionForm":
        """Bind an HTML form post (`questionText`, `option0`..`option3`, `correctAnswerIndex`)."""
        form = cls(**kwargs)
        form.question_text = str(data.get("questionText") or "")
        for i in range(OPTION_COUNT):
            form.set_option(i, str(data.get(f"option{i}") or ""))
        raw_index = data.get("correctAnswerIndex", 0)
        try:
            form.correct_answer_index = int(raw_index)
        except (TypeError, ValueError):
            # left as-is so validation reports it
            form.correct_answer_index = raw_index
        return form

    @property
    def options(self) -> Tuple[str, ...]:
        return tuple(self._options)

    def set_option(self, index: int, text: str) -> None:
        if not 0 <= index < OPTION_COUNT:
            raise IndexError(f"option slot {index} does not exist")
        self._options[index] = text

    @property
    def is_submitting(self) -> bool:
        return self.state is FormState.SUBMITTING

    def to_payload(self) -> dict:
        return {
            "questionText": self.question_text,
            "options": list(self._options),
            "correctAnswerIndex": self.correct_answer_index,
        }

    def reset(self) -> None:
        """Clear every field to its default."""
        self.question_text = ""
        self._options = [""] * OPTION_COUNT
        self.correct_answer_index = 0

    def errors_for(self, field: str) -> List[str]:
        return self.field_errors.get(field, [])

    def _clear_feedback(self) -> None:
        self.field_errors = {}
        self.errors = []
        self.notice = None

    def _show_violations(self, violations: List[Violation]) -> None:
        for v in violations:
            self.field_errors.setdefault(v.field, []).append(v.message)

    async def submit(self, client) -> FormState:
        """Validate locally, then send the question through `client`.

        `client` needs an async `submit_question(payload)` returning a
        `SubmissionResult` (see `app.client.QuestionClient`). Raises
        `SubmissionInProgress` if this form already has an exchange in flight.
        """
        if self.state is FormState.SUBMITTING:
            raise SubmissionInProgress("a submission is already in progress")
        self._clear_feedback()

        payload = self.to_payload()
        local = validate_question(payload)
        if not local.ok:
            self._show_violations(local.violations)
            self.state = FormState.IDLE
            return self.state

        if self.id_factory is not None:
            payload["id"] = self.id_factory()
        self.state = FormState.SUBMITTING
        try:
            result = await client.submit_question(payload)
        except TransportFailure as exc:
            logger.warning("question submission failed: %s", exc)
            self.errors.append(TRANSPORT_ERROR_MESSAGE)
            self.state = FormState.FAILED
            return self.state
        except BaseException:
            self.state = FormState.FAILED
            raise

        if result.ok:
            self.reset()
            self.notice = result.message
            self.state = FormState.SUCCESS
        else:
            self._show_violations(result.violations)
            self.errors.extend(v.message for v in result.violations)
            if result.error:
                self.errors.append(result.error)
            if not self.errors:
                self.errors.append(f"Submission rejected (status {result.status_code}).")
            self.state = FormState.FAILED
        return self.state
