"""
Common entry points shared by the rise and decline engines: config ownership and per-call overrides, the streaming window, list-based inputs, and the guard that turns unexpected failures into a neutral report.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date as Date
from typing import Any, Generic, Optional, Sequence, TypeVar

from config import DEFAULT_WINDOW_SIZE, settings
from engine.detection.inputs import build_window, values_to_points
from engine.detection.report import INSUFFICIENT_DATA, NO_DATA, AlertReport, normal_report
from engine.detection.thresholds import DetectionConfig
from engine.window import DataWindow

log = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=DetectionConfig)

MIN_DETECTION_POINTS = 2


class DetectionEngine(Generic[ConfigT]):
    name = "detection"

    def __init__(self, config: Optional[ConfigT] = None, window_size: int = DEFAULT_WINDOW_SIZE) -> None:
        self._config: ConfigT = config if config is not None else self.default_config()
        self._window = DataWindow(
            window_size if window_size > 0 else DEFAULT_WINDOW_SIZE,
            settings.window_short_term_days,
            settings.window_long_term_days,
        )

    def default_config(self) -> ConfigT:
        raise NotImplementedError

    def _classify(self, window: DataWindow, config: ConfigT) -> AlertReport:
        raise NotImplementedError

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def window(self) -> DataWindow:
        return self._window

    def replace_config(self, config: Optional[ConfigT]) -> None:
        self._config = config if config is not None else self.default_config()

    def update_config(self, override: Any) -> ConfigT:
        self._config = self._config.merge(override)
        return self._config

    def effective_config(self, override: Any = None) -> ConfigT:
        return self._config.merge(override)

    def detect(self, window: Optional[DataWindow], override: Any = None) -> AlertReport:
        if window is None or window.is_empty():
            return normal_report(None, NO_DATA)
        if window.size() < MIN_DETECTION_POINTS:
            return normal_report(window.latest_date(), INSUFFICIENT_DATA)

        config = self.effective_config(override)
        try:
            report = self._classify(window, config)
        except Exception as exc:
            log.exception("%s detection failed on %d points", self.name, window.size())
            return normal_report(window.latest_date(), f"detection failed: {exc}")

        log.info(
            "%s detection: points=%d type=%s score=%.4f severity=%s",
            self.name,
            window.size(),
            report.alert_type.value,
            report.total_score,
            report.severity_level.value,
        )
        return report

    def add_point_and_detect(
        self,
        date: Date,
        value: float,
        override: Any = None,
        window: Optional[DataWindow] = None,
    ) -> AlertReport:
        target = window if window is not None else self._window
        target.add_data_point(date, value)
        return self.detect(target, override)

    def detect_with_points(self, points: Optional[Sequence[Any]], override: Any = None) -> AlertReport:
        if not points:
            return normal_report(None, NO_DATA)
        window = build_window(points)
        log.debug("%s detection on %d dated points", self.name, window.size())
        return self.detect(window, override)

    def detect_with_values(self, values: Optional[Sequence[Optional[float]]], override: Any = None) -> AlertReport:
        if not values:
            return normal_report(None, NO_DATA)
        return self.detect_with_points(values_to_points(values), override)
