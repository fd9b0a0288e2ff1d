"""
Rise and decline detection engines over data windows.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.detection.decline import DeclineDetectionEngine
from engine.detection.inputs import DataPoint, build_window, values_to_points
from engine.detection.report import AlertReport, normal_report
from engine.detection.rise import RiseDetectionEngine
from engine.detection.thresholds import (
    DeclineConfig,
    DeclineOverride,
    RiseConfig,
    RiseOverride,
    merge,
)

__all__ = [
    "AlertReport",
    "DataPoint",
    "DeclineConfig",
    "DeclineDetectionEngine",
    "DeclineOverride",
    "RiseConfig",
    "RiseDetectionEngine",
    "RiseOverride",
    "build_window",
    "merge",
    "normal_report",
    "values_to_points",
]
