"""HTTP client for the question submission endpoint.

`QuestionClient` posts a serialized question and maps the endpoint's wire
responses to a `SubmissionResult`. Anything that prevents a usable response
from arriving raises `TransportFailure`.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx
from pydantic import ValidationError

from .errors import TransportFailure
from .schemas import Question, Violation

logger = logging.getLogger("app.client")

SUBMIT_PATH = "/api/questions"


@dataclass
class SubmissionResult:
    ok: bool
    status_code: int
    message: Optional[str] = None
    question: Optional[Question] = None
    violations: List[Violation] = field(default_factory=list)
    error: Optional[str] = None


class QuestionClient:
    """Async client bound to one endpoint base URL.

    Pass `transport` to route requests somewhere other than the network,
    e.g. `httpx.ASGITransport(app=app)` to reach an in-process application.
    """
    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def submit_question(self, payload: dict) -> SubmissionResult:
        try:
            response = await self._http.post(SUBMIT_PATH, json=payload)
        except httpx.TransportError as exc:
            logger.warning("submission transport failed: %s", exc)
            raise TransportFailure(str(exc) or exc.__class__.__name__) from exc
        try:
            body = response.json()
        except ValueError as exc:
            raise TransportFailure(f"unreadable response (status {response.status_code})") from exc
        if not isinstance(body, dict):
            raise TransportFailure(f"unexpected response shape (status {response.status_code})")

        if response.status_code == 201:
            try:
                question = Question.model_validate(body.get("question"))
            except ValidationError as exc:
                raise TransportFailure("response did not contain a valid question") from exc
            return SubmissionResult(ok=True, status_code=201, message=body.get("message"), question=question)

        error = body.get("error")
        if isinstance(error, list):
            violations = []
            unrecognised = []
            for item in error:
                try:
                    violations.append(Violation.model_validate(item))
                except ValidationError:
                    unrecognised.append(str(item))
            return SubmissionResult(
                ok=False,
                status_code=response.status_code,
                violations=violations,
                error="; ".join(unrecognised) or None,
            )
        message = error if isinstance(error, str) else f"Request failed with status {response.status_code}."
        return SubmissionResult(ok=False, status_code=response.status_code, error=message)
