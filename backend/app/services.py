"""Business logic services used by HTTP controllers.

Services are intentionally thin: they validate input, delegate storage to
a repository and raise `app.errors` exceptions that controllers turn into
responses.
"""

import json
import logging
from typing import Any

from . import repositories
from .errors import MalformedBody, QuestionRejected
from .schemas import Question
from .validation import validate_question

logger = logging.getLogger("app.services")

SUCCESS_MESSAGE = "Question saved successfully"


def parse_body(raw: bytes) -> dict:
    """Decode a request body into a JSON object or raise `MalformedBody`."""
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        raise MalformedBody("request body is not valid JSON")
    if not isinstance(data, dict):
        raise MalformedBody("request body must be a JSON object")
    return data


class SubmissionService:
    """Validate a candidate question and hand it to the repository."""
    def __init__(self, repo: repositories.QuestionRepository):
        self.repo = repo

    def submit(self, data: Any) -> Question:
        """Validate `data` and store it.

        Raises `QuestionRejected` carrying every violation when the input is
        invalid, or `StorageFailure` when the repository rejects the record.
        """
        result = validate_question(data)
        if not result.ok:
            logger.info("question rejected: %s", ", ".join(f"{v.field}:{v.kind.value}" for v in result.violations))
            raise QuestionRejected(result.violations)
        stored = self.repo.save(result.question)
        logger.info("question accepted id=%s", stored.id)
        return stored
