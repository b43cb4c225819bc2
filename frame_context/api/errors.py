# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
API Error Handling — FrameError → structured JSON response.
"""

from __future__ import annotations

import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from frame_context.core.errors import FrameError


async def frame_error_handler(request: Request, exc: FrameError) -> JSONResponse:
    """Global exception handler for FrameError."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.code,
            "message": exc.message,
            "trace_id": request.headers.get("X-Trace-Id") or str(uuid.uuid4()),
            "details": exc.details,
        },
    )
