"""FastAPI application factory for the vacdiag engine."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vacdiag import __version__
from vacdiag.core.assistant import DiagnosticAssistant, create_assistant
from vacdiag.engine.routes import chat, health, knowledge

logger = logging.getLogger(__name__)


def create_app(assistant: DiagnosticAssistant | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Without an explicit assistant, settings are loaded from the project
    found above the working directory. CORS is enabled when
    VACDIAG_CORS_ORIGINS (comma-separated) is set.
    """
    if assistant is None:
        from vacdiag.config import load_settings
        from vacdiag.utils.paths import find_project_root

        assistant = create_assistant(load_settings(find_project_root()))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # A malformed corpus must stop startup rather than surface per request
        index = app.state.assistant.index_holder.initialize()
        logger.info("Knowledge index ready: %d entries", len(index))
        yield

    app = FastAPI(
        title="vacdiag Engine",
        version=__version__,
        description="Vacuum pump diagnostic assistant with knowledge retrieval",
        lifespan=lifespan,
    )
    app.state.assistant = assistant

    cors_env = os.environ.get("VACDIAG_CORS_ORIGINS")
    if cors_env:
        from starlette.middleware.cors import CORSMiddleware

        app.add_middleware(
            CORSMiddleware,
            allow_origins=[o.strip() for o in cors_env.split(",")],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(knowledge.router)

    return app
