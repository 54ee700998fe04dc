"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..config import WizardConfig
from ..errors import (
    WizardError,
    NotFoundError,
    PhaseTransitionError,
    MappingTransitionError,
)
from ..tracker import MigrationTracker
from ..services.runner import WorkflowRunner
from ..services.storage import JsonFileStorage
from .routes import projects, wizard, upload, discovery, mapping, codegen, validation, profile

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "Something went wrong. Please refresh the page or try again."


def _status_for(exc: WizardError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (PhaseTransitionError, MappingTransitionError)):
        return 409
    return 400


def create_app(config: Optional[WizardConfig] = None, storage=None) -> FastAPI:
    """
    Build the API around one tracker.

    Args:
        config: Wizard configuration (default: from environment)
        storage: State storage (default: JSON file at ``config.state_file``)
    """
    config = config or WizardConfig.from_env()
    storage = storage if storage is not None else JsonFileStorage(config.state_file)

    app = FastAPI(
        title="Migration Wizard API",
        description="API for tracking a schema migration through upload, discovery, mapping, code generation and validation",
        version="1.0.0",
    )
    app.state.config = config
    app.state.tracker = MigrationTracker.load(storage, config)
    app.state.runner = WorkflowRunner(app.state.tracker, config)

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173", "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(WizardError)
    async def wizard_error_handler(request: Request, exc: WizardError):
        return JSONResponse(status_code=_status_for(exc), content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def fallback_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": FALLBACK_MESSAGE})

    # Include routers
    app.include_router(wizard.router, prefix="/api/wizard", tags=["wizard"])
    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(upload.router, prefix="/api/upload", tags=["upload"])
    app.include_router(discovery.router, prefix="/api/discovery", tags=["discovery"])
    app.include_router(mapping.router, prefix="/api/mapping", tags=["mapping"])
    app.include_router(codegen.router, prefix="/api/codegen", tags=["codegen"])
    app.include_router(validation.router, prefix="/api/validation", tags=["validation"])
    app.include_router(profile.router, prefix="/api/profile", tags=["profile"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
