from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import DEFAULT_SCHOLARSHIP, Settings
from .dispatch import Action, dispatch
from .errors import ConfigError, ProviderError, ValidationError
from .gateway import ModelGateway
from .schemas import ErrorOut, FeedbackTextOut, GeneratedTextOut, ImprovedTextOut, LetterRequestIn

# -------------------------------------------------
# Setup
# -------------------------------------------------

logger = logging.getLogger("uvicorn.error")

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorOut, "description": "Missing or malformed fields"},
    429: {"model": ErrorOut, "description": "Provider rate limit exceeded"},
    500: {"model": ErrorOut, "description": "Model call failed"},
}


# -------------------------------------------------
# Routes
# -------------------------------------------------

@router.get("/")
def index():
    return {"ok": True, "routes": ["/healthz", "/api/generate", "/api/improve", "/api/feedback", "/docs"]}


@router.get("/healthz")
async def healthz():
    return {"ok": True}


async def _handle(action: Action, payload: LetterRequestIn, request: Request):
    state = request.app.state
    return await dispatch(action, payload, state.gateway, scholarship=state.scholarship)


@router.post("/api/generate", response_model=GeneratedTextOut, responses=ERROR_RESPONSES)
async def generate(payload: LetterRequestIn, request: Request):
    """Write a new paragraph for a letter section."""
    return await _handle(Action.GENERATE, payload, request)


@router.post("/api/improve", response_model=ImprovedTextOut, responses=ERROR_RESPONSES)
async def improve(payload: LetterRequestIn, request: Request):
    """Rewrite ``context.existingText`` for a letter section."""
    return await _handle(Action.IMPROVE, payload, request)


@router.post("/api/feedback", response_model=FeedbackTextOut, responses=ERROR_RESPONSES)
async def feedback(payload: LetterRequestIn, request: Request):
    """Critique ``context.existingText`` as a bulleted list."""
    return await _handle(Action.FEEDBACK, payload, request)


# -------------------------------------------------
# Error handlers
# -------------------------------------------------

async def _app_error(request: Request, exc):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _bad_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Request body must be a JSON object with 'section' and 'context'"},
    )


# -------------------------------------------------
# App
# -------------------------------------------------

def create_app(settings: Optional[Settings] = None, gateway: Optional[ModelGateway] = None) -> FastAPI:
    """Build the API around one model gateway.

    - With ``gateway`` given (tests), settings are optional.
    - Otherwise settings come from the environment and a missing
      ``OPENAI_API_KEY`` raises ``ConfigError`` before any route exists.
    """
    if settings is None and gateway is None:
        settings = Settings.from_env()
    if gateway is None:
        gateway = ModelGateway.from_settings(settings)

    app = FastAPI(title="Scholarship Letter AI", version="0.1.0")
    app.state.gateway = gateway
    app.state.scholarship = settings.scholarship_name if settings else DEFAULT_SCHOLARSHIP

    # CORS: the letter editor may be hosted anywhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _app_error)
    app.add_exception_handler(ProviderError, _app_error)
    app.add_exception_handler(RequestValidationError, _bad_body)
    app.include_router(router)
    return app


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.critical("Error: %s", e)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Scholarship AI backend starting on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
