"""
Rise detection routes: streaming point ingestion into a shared window and one-shot detection over points, values or a caller-supplied window.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import threading

from fastapi import APIRouter

from api.requests import DataPointRequest, RisePointsRequest, RiseValuesRequest, RiseWindowRequest
from api.responses import WindowAlertResponse
from api.routes.exception import handle_exceptions
from config import settings
from engine.detection import AlertReport, RiseDetectionEngine, build_window

router = APIRouter(tags=["Rise"])

rise_engine = RiseDetectionEngine(window_size=settings.window_max_size)
_stream_lock = threading.Lock()


@router.post("/anomaly/window/point", response_model=WindowAlertResponse)
@handle_exceptions
async def add_point(req: DataPointRequest) -> WindowAlertResponse:
    with _stream_lock:
        report = rise_engine.add_point_and_detect(req.date, req.value, req.config)
        window = rise_engine.window
        return WindowAlertResponse(
            report=report,
            window_size=window.size(),
            window=window.to_simple_records(),
        )


@router.post("/anomaly/window/points", response_model=AlertReport)
@handle_exceptions
async def detect_points(req: RisePointsRequest) -> AlertReport:
    return rise_engine.detect_with_points(req.data_points, req.config)


@router.post("/anomaly/window/values", response_model=AlertReport)
@handle_exceptions
async def detect_values(req: RiseValuesRequest) -> AlertReport:
    return rise_engine.detect_with_values(req.values, req.config)


@router.post("/anomaly/window/detect", response_model=AlertReport)
@handle_exceptions
async def detect_window(req: RiseWindowRequest) -> AlertReport:
    payload = req.data_window
    window = build_window(
        payload.data_points,
        max_size=payload.max_size,
        short_term_days=payload.short_term_days,
        long_term_days=payload.long_term_days,
    )
    return rise_engine.detect(window, req.config)
