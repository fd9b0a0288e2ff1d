"""
Decline detection routes over dated points or plain value lists.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.requests import DeclinePointsRequest, DeclineValuesRequest
from api.routes.exception import handle_exceptions
from config import settings
from engine.detection import AlertReport, DeclineDetectionEngine

router = APIRouter(tags=["Decline"])

decline_engine = DeclineDetectionEngine(window_size=settings.window_max_size)


@router.post("/decline/points", response_model=AlertReport)
@handle_exceptions
async def detect_points(req: DeclinePointsRequest) -> AlertReport:
    return decline_engine.detect_with_points(req.data_points, req.config)


@router.post("/decline/values", response_model=AlertReport)
@handle_exceptions
async def detect_values(req: DeclineValuesRequest) -> AlertReport:
    return decline_engine.detect_with_values(req.values, req.config)
