import logging
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.errors import (
    ConfigurationError,
    PromptAnalyzerError,
    UpstreamContractError,
    UpstreamTransportError,
)
from agents.gemini_gateway import GeminiGateway, ModelGateway
from agents.prompt_analyzer import PromptAnalyzerAgent
from api.models import Analysis, AnalyzeRequest, ErrorResponse
from utils.config import Settings, load_settings

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

MISSING_KEY_MESSAGE = "Missing GOOGLE_API_KEY. Set it in your server environment (e.g. .env)."
INVALID_BODY_MESSAGE = "Invalid JSON body."
MISSING_PROMPT_MESSAGE = "Field 'prompt' (non-empty string) is required."
INVALID_JSON_MESSAGE = "Gemini returned an invalid JSON response."
INVALID_SHAPE_MESSAGE = "Gemini returned an analysis that does not match the expected shape."
UPSTREAM_ERROR_MESSAGE = "Error while calling Gemini API."

router = APIRouter()


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    body = ErrorResponse(error=message, **extra).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def create_app(settings: Optional[Settings] = None, gateway: Optional[ModelGateway] = None) -> FastAPI:
    """
    Build the API. Tests pass a fake gateway; the module-level app reads
    GOOGLE_API_KEY from the environment once, at startup.
    """
    if settings is None:
        settings = load_settings()
    if gateway is None:
        gateway = GeminiGateway(api_key=settings.google_api_key, model_name=settings.model_name)

    app = FastAPI(
        title="Prompt Analyzer API",
        description="Grades prompts against a prompt-engineering rubric using Google Gemini",
        version=VERSION,
    )
    app.state.settings = settings
    app.state.analyzer = PromptAnalyzerAgent(gateway)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["POST", "GET"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


@router.get("/")
async def root(request: Request):
    """Root endpoint - API health check"""
    return {
        "message": "Prompt Analyzer API",
        "status": "running",
        "version": VERSION,
    }


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint. Never calls the model."""
    return {
        "status": "healthy",
        "model_configured": request.app.state.analyzer.is_configured(),
        "model": request.app.state.settings.model_name,
    }


@router.post(
    "/api/analyze",
    response_model=Analysis,
    response_model_by_alias=True,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AnalyzeRequest.model_json_schema()}},
        }
    },
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def analyze_prompt(request: Request):
    """
    Grade one prompt. Checks run in order and stop at the first failure:
    credential, JSON body, prompt field.
    """
    analyzer: PromptAnalyzerAgent = request.app.state.analyzer

    if not analyzer.is_configured():
        logger.warning("⚠️  Rejected analysis: GOOGLE_API_KEY is not configured")
        return _error(500, MISSING_KEY_MESSAGE)

    try:
        body = await request.json()
    except (ValueError, RecursionError):
        return _error(400, INVALID_BODY_MESSAGE)

    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not isinstance(prompt, str) or not prompt.strip():
        return _error(400, MISSING_PROMPT_MESSAGE)

    try:
        analysis = await run_in_threadpool(analyzer.analyze, prompt)
    except ConfigurationError:
        logger.warning("⚠️  Rejected analysis: GOOGLE_API_KEY is not configured")
        return _error(500, MISSING_KEY_MESSAGE)
    except UpstreamContractError as e:
        if e.kind == "json_decode":
            logger.error("❌ Failed to parse JSON from Gemini: %s", e.raw_text)
            return _error(502, INVALID_JSON_MESSAGE, raw=e.raw_text)
        logger.error("❌ Gemini analysis failed validation: %s", e.error)
        return _error(502, INVALID_SHAPE_MESSAGE, raw=e.raw_text, details=e.error)
    except UpstreamTransportError:
        logger.exception("❌ Gemini API error")
        return _error(500, UPSTREAM_ERROR_MESSAGE)
    except PromptAnalyzerError:
        logger.exception("❌ Unexpected analysis failure")
        return _error(500, UPSTREAM_ERROR_MESSAGE)

    return analysis.to_response()


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


_settings = load_settings()
_configure_logging(_settings)
app = create_app(_settings)


def run() -> None:
    """Serve the API with uvicorn (`prompt-analyzer-api` console script)."""
    uvicorn.run("api.main:app", host=_settings.api_host, port=_settings.api_port)


if __name__ == "__main__":
    run()
