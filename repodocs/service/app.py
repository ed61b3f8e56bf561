"""FastAPI application exposing documentation generation over HTTP."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import load_config
from ..errors import RepoDocsError
from ..logging import get_logger
from ..models import GenerationResult
from ..orchestrator import MISSING_URL_MESSAGE, Orchestrator

logger = get_logger("service")


class GenerateRequest(BaseModel):
    repoUrl: Optional[str] = None


class RepoInfo(BaseModel):
    name: str
    description: str
    language: str
    stars: int
    files: List[str]


class GenerateResponse(BaseModel):
    readme: str
    gettingStarted: str
    apiDocs: str
    repoInfo: RepoInfo


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator_factory(config_path: Path | None = None) -> Callable[[], Orchestrator]:
    def factory() -> Orchestrator:
        return Orchestrator(load_config(config_path))

    return factory


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] | None = None,
    *,
    config_path: Path | None = None,
) -> FastAPI:
    """Create the FastAPI application exposing the generate endpoint."""

    factory = orchestrator_factory or _default_orchestrator_factory(config_path)
    app = FastAPI(title="repodocs", version="1.0.0")

    def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request so configuration and credentials are re-read.
        return factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        "/api/generate",
        response_model=GenerateResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def generate(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> Any:
        def _run_generate() -> GenerationResult:
            return orchestrator.run(payload.repoUrl)

        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, _run_generate)
        except RepoDocsError:
            raise
        except Exception as exc:
            logger.exception("Error generating docs for %s", payload.repoUrl)
            return _error_response(500, str(exc) or "Failed to generate documentation")
        return GenerateResponse(**result.to_dict())

    @app.exception_handler(RepoDocsError)
    async def repodocs_error_handler(_: Any, exc: RepoDocsError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("Documentation generation failed: %s", exc)
        return _error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Any, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Rejected request body: %s", exc.errors())
        return _error_response(400, MISSING_URL_MESSAGE)

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def run_service(
    host: str = "0.0.0.0",
    port: int = 8000,
    *,
    config_path: Path | None = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(config_path=config_path)
    uvicorn.run(app, host=host, port=port)
