"""
Decline classification over a data window: single-day drops and steady declines.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date as Date
from typing import Sequence

from config import PERCENT_CHANGE_EPSILON, settings
from engine.detection.base import MIN_DETECTION_POINTS, DetectionEngine
from engine.detection.report import INSUFFICIENT_DATA, AlertReport, normal_report
from engine.detection.thresholds import DeclineConfig
from engine.enums import AlertType, SeverityLevel
from engine.stats import index_regression, mean, stddev
from engine.window import DataWindow

log = logging.getLogger(__name__)


def change_percent(from_value: float, to_value: float) -> float:
    """Percentage change with near-zero bases clamped to ``PERCENT_CHANGE_EPSILON``."""
    if abs(from_value) < PERCENT_CHANGE_EPSILON:
        from_value = PERCENT_CHANGE_EPSILON
    return (to_value - from_value) / abs(from_value) * 100.0


def detect_sudden_drop(values: Sequence[float], day: Date, config: DeclineConfig) -> AlertReport:
    if len(values) < MIN_DETECTION_POINTS:
        return normal_report(day, INSUFFICIENT_DATA)

    current, previous = values[-1], values[-2]
    absolute = current - previous
    pct = change_percent(previous, current)
    sd = stddev(values)
    deviation = (current - mean(values)) / sd if sd > 0 else 0.0
    log.debug(
        "drop check: current=%s previous=%s pct=%.2f deviation=%.2f absolute=%.4f",
        current, previous, pct, deviation, absolute,
    )

    if abs(absolute) <= config.sudden_drop_min_absolute_change:
        return normal_report(day)

    pct_threshold = config.sudden_drop_change_percent_threshold
    multiplier = config.sudden_drop_std_deviation_multiplier
    by_pct = pct < -pct_threshold
    by_deviation = deviation < -multiplier
    if not (by_pct or by_deviation):
        return normal_report(day)

    score = min(1.0, max(abs(pct) / pct_threshold, abs(deviation) / multiplier))
    reasons = []
    if by_pct:
        reasons.append(f"single-day drop of {abs(pct):.2f}%")
    if by_deviation:
        reasons.append(f"{abs(deviation):.2f} standard deviations below the window mean")

    return AlertReport(
        date=day,
        total_score=score * config.sudden_drop_weight,
        alert_type=AlertType.SINGLE_DAY_DROP,
        description=", ".join(reasons),
        is_alert=True,
    )


def detect_steady_decline(values: Sequence[float], day: Date, config: DeclineConfig) -> AlertReport:
    n = len(values)
    if n < max(MIN_DETECTION_POINTS, config.steady_decline_min_data_points):
        return normal_report(day, INSUFFICIENT_DATA)

    first, last = values[0], values[-1]
    if abs(last - first) <= config.sudden_drop_min_absolute_change:
        log.debug("decline of %.4f within absolute floor", abs(last - first))
        return normal_report(day)

    regression = index_regression(values)
    slope, r_squared = regression.slope, regression.r_squared
    total_change = change_percent(first, last)

    down_days = 0
    consecutive = 0
    max_consecutive = 0
    for i in range(1, n):
        if values[i] < values[i - 1]:
            down_days += 1
            consecutive += 1
            max_consecutive = max(max_consecutive, consecutive)
        else:
            consecutive = 0
    declines = [c for c in (change_percent(values[i - 1], values[i]) for i in range(1, n)) if c < 0]
    avg_daily = mean(declines)

    total_threshold = config.steady_decline_total_change_threshold
    daily_threshold = config.steady_daily_average_decline_threshold
    trend = (
        slope < 0
        and r_squared > config.steady_decline_r_squared_threshold
        and max_consecutive >= config.steady_decline_min_consecutive_days
    )
    cumulative = total_change < -total_threshold and r_squared > settings.trend_total_change_min_r_squared
    intermittent = (
        down_days >= n // 2
        and avg_daily < -daily_threshold
        and total_change < -total_threshold / 2
    )
    log.debug(
        "decline check: slope=%.4f r2=%.4f total=%.2f down_days=%d/%d avg_daily=%.2f "
        "trend=%s cumulative=%s intermittent=%s",
        slope, r_squared, total_change, down_days, n, avg_daily, trend, cumulative, intermittent,
    )

    findings = []
    if trend:
        findings.append((
            r_squared,
            f"consecutive decline over {max_consecutive} days, "
            f"slope {slope:.4f} per day, fit R²={r_squared:.2f}",
        ))
    if cumulative:
        findings.append((
            min(1.0, abs(total_change) / (2 * total_threshold)),
            f"cumulative decline of {abs(total_change):.2f}%, fit R²={r_squared:.2f}",
        ))
    if intermittent:
        findings.append((
            min(1.0, abs(avg_daily) / (2 * daily_threshold)),
            f"intermittent decline on {down_days} of {n - 1} days, "
            f"average daily decline {abs(avg_daily):.2f}%, total change {total_change:.2f}%",
        ))
    if not findings:
        return normal_report(day)

    score, description = max(findings, key=lambda f: f[0])
    return AlertReport(
        date=day,
        total_score=min(1.0, score) * config.steady_decline_weight,
        alert_type=AlertType.STEADY_DECLINE,
        description=description,
        is_alert=True,
    )


def grade(report: AlertReport, config: DeclineConfig) -> AlertReport:
    severity = SeverityLevel.from_score(
        report.total_score, config.score_critical_threshold, config.score_warning_threshold
    )
    return report.model_copy(update={"severity_level": severity})


class DeclineDetectionEngine(DetectionEngine[DeclineConfig]):
    name = "decline"

    def default_config(self) -> DeclineConfig:
        return DeclineConfig.from_settings()

    def _classify(self, window: DataWindow, config: DeclineConfig) -> AlertReport:
        values = window.values()
        day = window.latest_date()

        for classifier in (detect_sudden_drop, detect_steady_decline):
            report = classifier(values, day, config)
            if report.is_alert:
                return grade(report, config)
        return normal_report(day)
