"""
FastAPI service for draft question generation.
Turns a theme and background into three low-barrier draft survey questions
using Gemini. Runs on port 3001 by default.
"""

import logging
import sys
import time
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from config import Settings, load_settings
from draft_utils.draft_helpers import select_mode
from models.draft import ErrorResponse, GenerateRequest, GenerateResponse, HealthResponse
from services.completion_client import GeminiCompletionClient
from services.draft_generator import CompletionClient, generate_draft
from services.rate_limiter import (
    LONG_LIMIT_MESSAGE,
    SHORT_LIMIT_MESSAGE,
    create_limiter,
    long_limit,
    rate_limit_exceeded_handler,
    short_limit,
)
from services.request_logger import (
    ERROR,
    REQUEST,
    SUCCESS,
    VALIDATION_ERROR,
    client_ip,
    elapsed_ms,
    log_event,
    mask_ip,
    new_request_id,
)
from services.structure_parser import MalformedJson

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "theme と background は必須です"
PARSE_FAILED_MESSAGE = "生成結果の解析に失敗しました"
GENERATION_FAILED_MESSAGE = "問いの生成に失敗しました"


def configure_logging(log_level: str) -> None:
    """One JSON record per line on stdout"""
    logging.basicConfig(stream=sys.stdout, format="%(message)s")
    logging.getLogger().setLevel(log_level)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed bodies with the same 400 as blank required fields."""
    log_event(
        VALIDATION_ERROR,
        new_request_id(),
        mask_ip(client_ip(request)),
        error="request body failed schema validation",
        details=[error.get("msg") for error in exc.errors()],
    )
    return error_response(400, VALIDATION_MESSAGE)


def create_app(
    settings: Optional[Settings] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment when omitted
        completion_client: Completion client; a Gemini client when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="KIKU Draft Question Service",
        description="Generates low-barrier draft questions for surveys and feedback collection",
        version="1.0.0",
    )

    limiter = create_limiter()
    app.state.settings = settings
    app.state.limiter = limiter
    app.state.completion_client = completion_client or GeminiCompletionClient(
        api_key=settings.gemini_api_key,
        model_name=settings.model_name,
    )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse()

    @app.post(
        "/api/generate",
        response_model=GenerateResponse,
        responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    @limiter.limit(long_limit(settings), error_message=LONG_LIMIT_MESSAGE)
    @limiter.limit(short_limit(settings), error_message=SHORT_LIMIT_MESSAGE)
    async def generate(request: Request, payload: GenerateRequest):
        """
        Generate draft questions for a theme and background.

        Mode is lowered_entry when unheard_contexts is non-empty, else default.
        Exactly one structured log record of type validation_error, success or
        error is written per call, plus a request record once input is valid.
        """
        start = time.monotonic()
        request_id = new_request_id()
        masked_ip = mask_ip(client_ip(request))

        if not (payload.theme or "").strip() or not (payload.background or "").strip():
            log_event(
                VALIDATION_ERROR,
                request_id,
                masked_ip,
                error="theme or background is missing",
            )
            return error_response(400, VALIDATION_MESSAGE)

        mode = select_mode(payload.unheard_contexts)

        log_event(
            REQUEST,
            request_id,
            masked_ip,
            input={
                "theme": payload.theme,
                "background": payload.background,
                "unheard_contexts": payload.unheard_contexts or [],
            },
            mode=mode.value,
        )

        try:
            structure, completion = await generate_draft(app.state.completion_client, payload, mode)
        except Exception as e:
            log_event(
                ERROR,
                request_id,
                masked_ip,
                error=str(e),
                error_type=type(e).__name__,
                stack="".join(traceback.format_exception(type(e), e, e.__traceback__)),
                duration=elapsed_ms(start),
            )
            if isinstance(e, MalformedJson):
                return error_response(500, PARSE_FAILED_MESSAGE)
            return error_response(500, GENERATION_FAILED_MESSAGE)

        log_event(
            SUCCESS,
            request_id,
            masked_ip,
            mode=mode.value,
            output={
                "explanation": structure.explanation,
                "question_count": len(structure.questions),
            },
            duration=elapsed_ms(start),
            llm={"model": completion.model, "tokens": completion.total_tokens},
        )

        # Constructed models carry model output verbatim; skip re-validation
        result = GenerateResponse.model_construct(mode=mode, structure=structure)
        return JSONResponse(result.model_dump(mode="json", exclude_none=True, warnings=False))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
