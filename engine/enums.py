"""
Enumerations for alert types and severity levels

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import SEVERITY_WEIGHTS

_ALERT_LABELS = {
    "SINGLE_DAY_SPIKE": "Single-day spike",
    "STEADY_RISE": "Steady rise",
    "ABNORMAL_VOLATILITY": "Abnormal volatility",
    "SINGLE_DAY_DROP": "Single-day drop",
    "STEADY_DECLINE": "Steady decline",
    "NO_ISSUE": "No issue",
}


class AlertType(str, Enum):
    SINGLE_DAY_SPIKE = "SINGLE_DAY_SPIKE"
    STEADY_RISE = "STEADY_RISE"
    ABNORMAL_VOLATILITY = "ABNORMAL_VOLATILITY"
    SINGLE_DAY_DROP = "SINGLE_DAY_DROP"
    STEADY_DECLINE = "STEADY_DECLINE"
    NO_ISSUE = "NO_ISSUE"

    @property
    def label(self) -> str:
        return _ALERT_LABELS[self.value]


class SeverityLevel(str, Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @classmethod
    def from_score(cls, score: float, critical: float, warning: float) -> SeverityLevel:
        if score >= critical:
            return cls.CRITICAL
        if score >= warning:
            return cls.WARNING
        return cls.NORMAL

    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self.value]
