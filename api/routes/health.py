"""
Health check route reporting service status and the streaming window fill level.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.responses import HealthResponse
from api.routes.exception import handle_exceptions
from api.routes.rise import rise_engine

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
@handle_exceptions
async def health() -> HealthResponse:
    return HealthResponse(status="ok", streaming_window_size=rise_engine.window.size())
