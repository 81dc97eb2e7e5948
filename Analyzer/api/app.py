"""
FastAPI application for the Text Analyzer backend
Exposes the analysis pipeline over REST with per-caller daily quotas
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from azure.monitor.opentelemetry import configure_azure_monitor

from .models import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    HealthResponse,
    KeyTestResponse,
    Usage,
    UsageResponse,
)
from ..config import config
from ..core import AllModelsUnavailable, AnalyzerError, QuotaLedger, RateLimitExceeded
from ..pipeline import AnalysisRequest, ModelInvoker, RequestHandler

logger = logging.getLogger(__name__)

VERSION = "1.0.0"
CLIENT_ID_HEADER = "X-Client-Id"
KEY_TEST_PROMPT = "Hello, this is a test. Please respond with 'API key is working!'"

# Initialize FastAPI app
app = FastAPI(
    title="Text Analyzer API",
    description="Answers questions about text selected on web pages",
    version=VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Configure OpenTelemetry for Azure Monitor
if config.APP_INSIGHTS_CONNECTION_STRING:
    configure_azure_monitor(
        connection_string=config.APP_INSIGHTS_CONNECTION_STRING
    )
    logger.info("Azure Monitor telemetry configured")

# One ledger and invoker per process, shared across requests
request_handler = RequestHandler(
    ledger=QuotaLedger(limit=config.DAILY_REQUEST_LIMIT),
    invoker=ModelInvoker(
        models=config.LLM_CANDIDATE_MODELS,
        timeout=config.LLM_TIMEOUT,
        api_key=config.GEMINI_API_KEY,
        temperature=config.LLM_TEMPERATURE
    ),
    page_content_limit=config.PAGE_CONTENT_LIMIT
)


def get_request_handler() -> RequestHandler:
    return request_handler


def get_caller_id(request: Request) -> str:
    """Explicit client id header, else the request's network origin"""
    client_id = request.headers.get(CLIENT_ID_HEADER)
    if client_id:
        return client_id
    return request.client.host if request.client else "unknown"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/analyze", response_model=AnalyzeResponse, responses=_ERROR_RESPONSES)
async def analyze(
    body: AnalyzeRequest,
    caller_id: str = Depends(get_caller_id),
    handler: RequestHandler = Depends(get_request_handler)
):
    """
    Answer a question about the selected text.

    Errors are raised as AnalyzerError subclasses and rendered by the
    app-level exception handler as {"error": message}.
    """
    result = await handler.handle(
        AnalysisRequest(
            selected_text=body.selected_text,
            question=body.question,
            page_url=body.page_url,
            page_content=body.page_content
        ),
        caller_id
    )
    return AnalyzeResponse(
        answer=result.answer,
        usage=Usage(
            selected_text_length=result.usage.selected_text_length,
            question_length=result.usage.question_length,
            page_content_length=result.usage.page_content_length
        )
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(handler: RequestHandler = Depends(get_request_handler)):
    """Liveness probe; makes no provider calls"""
    return HealthResponse(
        status="healthy",
        timestamp=_timestamp(),
        version=VERSION,
        models=handler.invoker.models
    )


@router.get("/usage/{caller_id}", response_model=UsageResponse)
async def usage(caller_id: str, handler: RequestHandler = Depends(get_request_handler)):
    """Current-day usage for caller_id (read-only)"""
    now = datetime.now()
    return UsageResponse(
        caller_id=caller_id,
        usage=handler.current_usage(caller_id, now),
        limit=handler.ledger.limit,
        date=QuotaLedger.date_key(now)
    )


@router.get("/test-key", response_model=KeyTestResponse, responses=_ERROR_RESPONSES)
async def test_key(
    caller_id: str = Depends(get_caller_id),
    handler: RequestHandler = Depends(get_request_handler)
):
    """
    Check that the provider key works with a short fixed prompt.

    Each call that reaches the provider is charged against the caller's
    daily quota like an analysis request.
    """
    if not handler.invoker.api_key:
        return JSONResponse(
            status_code=400,
            content={
                "error": "No API key found. Please set GEMINI_API_KEY in your .env file."
            }
        )

    decision = handler.ledger.admit(caller_id, datetime.now())
    if not decision.allowed:
        raise RateLimitExceeded(decision.limit)

    try:
        response = await handler.invoker.invoke(KEY_TEST_PROMPT)
    except AllModelsUnavailable as e:
        logger.error(f"API key test failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "API key test failed", "timestamp": _timestamp()}
        )

    return KeyTestResponse(
        status="success",
        message="API key is working!",
        response=response,
        timestamp=_timestamp()
    )


# Served at the root and under /api for existing extension clients
app.include_router(router)
app.include_router(router, prefix="/api", include_in_schema=False)


@app.exception_handler(AnalyzerError)
async def analyzer_error_handler(request: Request, exc: AnalyzerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Server error: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})
