"""
Alert report returned by every detection call, plus helpers for building the neutral report used when nothing (or not enough data) is found.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date as Date
from typing import Any, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, model_serializer

from engine.enums import AlertType, SeverityLevel

NO_ANOMALY = "no anomaly detected"
NO_DATA = "no data points provided"
INSUFFICIENT_DATA = "insufficient data points for detection"


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    return obj


class AlertReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Date
    total_score: float = 0.0
    alert_type: AlertType = AlertType.NO_ISSUE
    description: str = NO_ANOMALY
    is_alert: bool = False
    severity_level: SeverityLevel = SeverityLevel.NORMAL

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


def normal_report(day: Optional[Date], reason: str = NO_ANOMALY) -> AlertReport:
    return AlertReport(
        date=day or Date.today(),
        total_score=0.0,
        alert_type=AlertType.NO_ISSUE,
        description=reason,
        is_alert=False,
        severity_level=SeverityLevel.NORMAL,
    )
