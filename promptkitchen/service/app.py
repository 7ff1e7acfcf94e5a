from __future__ import annotations

import logging
import re
from typing import Any, Dict

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.concurrency import run_in_threadpool

from promptkitchen import __version__
from promptkitchen.errors import EnhancementError
from promptkitchen.models import EnhancementResult
from promptkitchen.service.enhancer import enhance_prompt
from promptkitchen.settings import Settings

logger = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(EnhancementResult.failed(message).to_payload(), status_code=status_code)


def origin_pattern(allowed_origin: str) -> str:
    """Regex accepting the configured origin with or without a trailing slash."""
    return re.escape(allowed_origin.rstrip("/")) + "/?"


def create_app(settings: Settings | None = None, *, llm_transport: httpx.BaseTransport | None = None) -> FastAPI:
    """
    App factory used by uvicorn and tests.

    `llm_transport` overrides the httpx transport of the outbound completion call (tests use
    `httpx.MockTransport`); production leaves it unset.
    """
    s = settings or Settings()
    app = FastAPI(title="Prompt Kitchen relay", version=__version__)
    app.state.settings = s
    app.state.llm_transport = llm_transport

    allowed = re.compile(origin_pattern(s.allowed_origin))
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=allowed.pattern,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_rejected_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and not allowed.fullmatch(origin):
            logger.warning("Rejecting CORS request from: %s, allowed: %s", origin, s.allowed_origin)
        return await call_next(request)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "Prompt enhancement proxy is running"

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True, "version": __version__}

    @app.post("/api/enhance-prompt")
    async def enhance(request: Request) -> JSONResponse:
        try:
            body = await request.json()
        except ValueError:
            return _error("Request body must be valid JSON", 400)
        try:
            result = await run_in_threadpool(
                enhance_prompt,
                body,
                settings=request.app.state.settings,
                transport=request.app.state.llm_transport,
            )
        except EnhancementError as e:
            if e.status_code >= 500:
                logger.error("Enhancement failed (%s): %s", e.status_code, e.message)
            return _error(e.message or "An unexpected error occurred", e.status_code)
        except Exception as e:  # noqa: BLE001
            logger.exception("Server error")
            return _error(str(e) or "An unexpected error occurred", 500)
        return JSONResponse(result.to_payload(), status_code=200)

    return app


app = create_app()
