"""
Interview Coach Chat Gateway - Main Application

FastAPI backend with:
- PostgreSQL as the (read-only) source of tracked applications
- Groq (OpenAI-compatible) for chat completions

Run: uvicorn coach_gateway.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coach_gateway import __version__
from coach_gateway.api.routes import api_router
from coach_gateway.core.config import get_settings
from coach_gateway.core.logging_setup import configure_logging
from coach_gateway.db.postgres import test_postgres_connection

logger = logging.getLogger("coach_gateway.main")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_output=not settings.debug)

    app = FastAPI(
        title="Interview Coach Chat Gateway",
        description="""
        Grounded interview-prep chat for tracked job applications.

        ## Features
        - **Chat**: system prompt built from one application record, relayed to the LLM
        - **Provider check**: quick check that the completion provider answers
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        # Unparseable bodies are a caller error: 400, same shape as HTTPException
        logger.info("Rejected request body | path=%s errors=%s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": "Invalid request body"})

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "postgres": "connected" if test_postgres_connection() else "disconnected",
            "llm": "configured" if get_settings().has_llm_credential else "missing_key",
        }

    if not settings.has_llm_credential:
        logger.warning("GROQ_API_KEY is not set; chat requests will fail with 500")

    return app


app = create_app()
