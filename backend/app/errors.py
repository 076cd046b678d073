"""Exceptions raised across the submission flow.

Each error is scoped to a single exchange. HTTP handlers in `app.main`
translate the `SubmissionError` family into `{"error": ...}` responses.
"""

from typing import List

from .schemas import Violation


class SubmissionError(Exception):
    """Base class for failures reported back to the submitter."""


class MalformedBody(SubmissionError):
    """Request body is not a JSON object."""


class QuestionRejected(SubmissionError):
    """Candidate question failed validation."""

    def __init__(self, violations: List[Violation]):
        super().__init__(f"{len(violations)} validation violation(s)")
        self.violations = violations


class StorageFailure(SubmissionError):
    """The storage collaborator could not store the question."""


class TransportFailure(SubmissionError):
    """No usable response was obtained from the submission endpoint."""


class SubmissionInProgress(RuntimeError):
    """A form instance already has an exchange in flight."""


class BodyTooLarge(SubmissionError):
    """Request body exceeds the configured size cap."""
