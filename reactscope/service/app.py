"""FastAPI application serving component analysis results."""

from __future__ import annotations

import asyncio
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import ReactScopeError
from ..logging import get_logger
from ..models import AnalysisReport
from ..orchestrator import Orchestrator


class HealthResponse(BaseModel):
    status: str


class ComponentsResponse(BaseModel):
    components: List[Dict[str, Any]]
    timestamp: str


class AnalyzeRequest(BaseModel):
    path: Optional[str] = None


class AnalyzeResponse(BaseModel):
    success: bool
    count: int
    skipped: int
    timestamp: str


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


class _ResultStore:
    """Holds the latest analysis report shared between requests."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.report: AnalysisReport | None = None
        self.lock = threading.Lock()


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def create_app(
    root: str | Path = ".",
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing analysis results for ``root``."""

    app = FastAPI(title="ReactScope Service", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    store = _ResultStore(Path(root).expanduser().resolve())
    app.state.results = store
    logger = get_logger("service")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    async def _analyze(orchestrator: Orchestrator, path: Path) -> AnalysisReport:
        def _run() -> AnalysisReport:
            with store.lock:
                report = orchestrator.run(path)
                store.root = path
                store.report = report
                return report

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/api/components", response_model=ComponentsResponse)
    async def list_components(
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ComponentsResponse:
        report = store.report
        if report is None:
            report = await _analyze(orchestrator, store.root)
        return ComponentsResponse(
            components=[component.to_dict() for component in report.components],
            timestamp=_timestamp(),
        )

    @app.post("/api/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> AnalyzeResponse:
        target = Path(payload.path).expanduser().resolve() if payload.path else store.root
        report = await _analyze(orchestrator, target)
        logger.info("Re-analyzed %s: %d components", target, len(report.components))
        return AnalyzeResponse(
            success=True,
            count=len(report.components),
            skipped=len(report.skipped),
            timestamp=_timestamp(),
        )

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(ReactScopeError)
    async def analysis_error_handler(_: Any, exc: ReactScopeError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": f"Error occurred during analysis: {exc}"})

    return app


def run_service(
    root: str | Path = ".", host: str = "127.0.0.1", port: int = 3000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app(root)
    uvicorn.run(app, host=host, port=port)


__all__ = ["create_app", "run_service"]
