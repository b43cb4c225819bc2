# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Frame Application Entry Point.

FastAPI app exposing catalog resources and the build tools.
Run with ``frame-context serve`` or ``uvicorn frame_context.main:app``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from frame_context.api.errors import frame_error_handler
from frame_context.api.routes import router as frame_router
from frame_context.core.config import get_settings
from frame_context.core.errors import FrameError
from frame_context.core.metrics import frame_metrics

logger = logging.getLogger("frame.main")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("[Frame] Serving project root %s", settings.project_root_path)
    yield
    logger.info("[Frame] Shutdown complete")


app = FastAPI(
    title="Frame",
    description="Context curation over a Markdown entity catalog",
    version=VERSION,
    lifespan=lifespan,
)

# ── Error Handlers ──────────────────────────────────────────
app.add_exception_handler(FrameError, frame_error_handler)

# ── Routes ──────────────────────────────────────────────────
app.include_router(frame_router)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "version": VERSION,
        "metrics": frame_metrics.snapshot(),
    }
