"""HTTP API for asking questions.

Why: Consumable API without business logic; pure delegation to the
response policy. The index is built once in the lifespan hook before the
first request is served.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

try:
    from fastapi import FastAPI, Request
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse
    from pydantic import BaseModel
except ImportError as err:
    raise ImportError(
        "FastAPI not installed. Install with: pip install guest-assistant"
    ) from err

from guest_assistant.application.dto.query_dto import AskRequest, AskResponse
from guest_assistant.application.use_cases.answer_question import (
    GENERIC_FAILURE_MESSAGE,
    AnswerQuestion,
)
from guest_assistant.config.settings import AppSettings
from guest_assistant.domain.errors import ValidationError
from guest_assistant.domain.models import OutcomeKind

logger = logging.getLogger(__name__)

AnswerFactory = Callable[[], Awaitable[AnswerQuestion]]


# Pydantic models for request/response validation
class AskRequestModel(BaseModel):
    """Request model for /ask endpoint."""

    question: Any = None


class SourceModel(BaseModel):
    id: int
    source: str


class AskResponseModel(BaseModel):
    """Response model for /ask endpoint."""

    answer: str
    sources: list[SourceModel] = []


class ErrorResponseModel(BaseModel):
    error: str


async def _default_factory() -> AnswerQuestion:
    from guest_assistant.config.composition import build_ready_answer_use_case

    return await build_ready_answer_use_case()


def create_app(
    answer_factory: AnswerFactory | None = None,
    settings: AppSettings | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        answer_factory: Async callable returning a ready AnswerQuestion
                        (default: bootstrap from settings/env)
        settings: Used for CORS origins (default: load from environment)
    """
    factory = answer_factory or _default_factory
    cfg = settings or AppSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Blocking init phase: the index is built exactly once per process
        app.state.answer = await factory()
        logger.info("guest assistant ready")
        yield
        app.state.answer = None

    app = FastAPI(title="Guest Assistant RAG API", version="1.0.0", lifespan=lifespan)
    app.state.answer = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins) or ["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        # malformed JSON or a non-object body carries no usable question
        logger.debug("rejected /ask body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": "Missing question"})

    @app.post(
        "/ask",
        response_model=AskResponseModel,
        responses={400: {"model": ErrorResponseModel}, 500: {"model": ErrorResponseModel}},
    )
    async def ask(req: AskRequestModel | None = None) -> Any:
        """Answer a question from the corpus.

        Example:
            POST /ask
            {"question": "What time does the zoo open on Saturdays?"}

        Returns:
            {"answer": "...", "sources": [{"id": 1, "source": "zoo_faq.txt"}]}
        """
        answer_uc: AnswerQuestion | None = app.state.answer
        if answer_uc is None:
            return JSONResponse(status_code=503, content={"error": "Service not initialized"})

        # scalars such as numbers are asked as their text; falsy values are missing
        raw = req.question if req else None
        question = str(raw) if raw else ""
        try:
            outcome = await answer_uc.execute(AskRequest(question=question))
        except ValidationError:
            return JSONResponse(status_code=400, content={"error": "Missing question"})

        if outcome.kind is OutcomeKind.ERROR:
            return JSONResponse(status_code=500, content={"error": GENERIC_FAILURE_MESSAGE})
        return AskResponse.from_outcome(outcome).to_dict()

    @app.get("/health")
    async def health() -> dict[str, Any]:
        """Health check endpoint."""
        answer_uc: AnswerQuestion | None = app.state.answer
        if answer_uc is None:
            return {"status": "starting", "service": "guest-assistant", "chunks": 0}
        return {
            "status": "healthy",
            "service": "guest-assistant",
            "chunks": answer_uc.retriever.vector_store.count(),
        }

    return app
