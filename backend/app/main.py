"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the question authoring backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON or rendered pages.

Endpoints implemented:
- POST /api/questions
- GET /questions/new
- POST /questions/new
- GET /
- GET /health
"""

from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse, HTMLResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
import httpx
import json
import logging
import os
import time
import uuid
from pathlib import Path
from . import repositories, services
from .client import QuestionClient
from .config import settings
from .errors import BodyTooLarge, MalformedBody, QuestionRejected, StorageFailure
from .forms import QuestionForm
from .navigation import navigation
from .schemas import ErrorResponse, QuestionCreated
from .style import get_style_tokens

app = FastAPI(title="MCQ Question Authoring API")
logger = logging.getLogger("app.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

FORM_PATH = "/questions/new"
navigation.register("Add MCQ Question", FORM_PATH)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

static_dir = Path(__file__).resolve().parent.parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def _log_payload(request: Request, req_id: str, started: float, **extra) -> str:
    """JSON summary of one API request for the access log."""
    payload = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        **extra,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client": request.client.host if request.client else "unknown",
    }
    return json.dumps(payload, ensure_ascii=True)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    logged = request.url.path.startswith("/api")
    try:
        response: Response = await call_next(request)
    except Exception:
        if logged:
            logger.exception("request_failed %s", _log_payload(request, req_id, started))
        raise
    response.headers["X-Request-ID"] = req_id
    if logged:
        logger.info("request_done %s", _log_payload(request, req_id, started, status_code=response.status_code))
    return response


async def _read_capped_body(request: Request, limit: int) -> bytes:
    """Read the request body, raising `BodyTooLarge` once `limit` is passed.

    A declared Content-Length over the limit is refused before reading;
    otherwise the stream is consumed chunk by chunk.
    """
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise BodyTooLarge("request body too large")
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise BodyTooLarge("request body too large")
    return bytes(body)


@app.exception_handler(BodyTooLarge)
async def body_too_large_handler(request: Request, exc: BodyTooLarge):
    logger.warning("rejected body over %d bytes", settings.MAX_BODY_BYTES)
    return JSONResponse(status_code=413, content={"error": str(exc)})


@app.exception_handler(MalformedBody)
async def malformed_body_handler(request: Request, exc: MalformedBody):
    logger.warning("malformed body: %s", exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(QuestionRejected)
async def question_rejected_handler(request: Request, exc: QuestionRejected):
    return JSONResponse(status_code=400, content={"error": [v.model_dump(mode="json") for v in exc.violations]})


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    logger.warning("storage failure: %s", exc)
    return JSONResponse(status_code=503, content={"error": f"Question could not be saved: {exc}"})


def _page_context() -> dict:
    return {"style": get_style_tokens(), "nav_links": navigation.links()}


def build_question_client(request: Request) -> QuestionClient:
    """Client used by the form pages to reach the submission endpoint.

    Without `QUESTION_API_URL` the request is routed to this same app
    in-process, so the form still goes through the JSON wire contract.
    """
    if settings.QUESTION_API_URL:
        return QuestionClient(settings.QUESTION_API_URL, timeout=settings.FORM_TIMEOUT_SECONDS)
    return QuestionClient(
        "http://authoring.local",
        timeout=settings.FORM_TIMEOUT_SECONDS,
        transport=httpx.ASGITransport(app=request.app),
    )


@app.post(
    '/api/questions',
    status_code=201,
    response_model=QuestionCreated,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def submit_question(request: Request, repo: repositories.QuestionRepository = Depends(repositories.get_question_repository)):
    """Validate a question and echo it back with an id.

    The body is the camelCase Question JSON; `id` may be omitted, in which
    case one is generated. Returns 201 with a confirmation message, or 400
    with either the full violation list or a malformed-body message.
    """
    raw = await _read_capped_body(request, settings.MAX_BODY_BYTES)
    data = services.parse_body(raw)
    question = services.SubmissionService(repo).submit(data)
    return QuestionCreated(message=services.SUCCESS_MESSAGE, question=question)


@app.get(FORM_PATH, response_class=HTMLResponse)
def question_form_page(request: Request):
    """Render an empty authoring form."""
    return templates.TemplateResponse(request, "question_form.html", {"form": QuestionForm(), **_page_context()})


@app.post(FORM_PATH, response_class=HTMLResponse)
async def question_form_submit(request: Request):
    """Bind the posted form, submit it and re-render with the outcome.

    Invalid forms are re-rendered with inline errors and never sent; on
    success the fields are cleared and the endpoint's message is shown.
    """
    form = QuestionForm.from_form_data(await request.form())
    async with build_question_client(request) as client:
        await form.submit(client)
    return templates.TemplateResponse(request, "question_form.html", {"form": form, **_page_context()})


@app.get("/", response_class=HTMLResponse)
def home(request: Request):
    """Minimal homepage for quick manual testing."""
    return templates.TemplateResponse(request, "home.html", _page_context())


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
