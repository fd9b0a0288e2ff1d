"""
Rise classification over a data window: single-day spikes, steady rises and abnormal periodic volatility, scored by type weight and graded into severity levels.

Classifiers run in priority order (spike, then gradual rise) and the first
positive result wins. Periodicity is only consulted when neither fired, so a
window ending in a spike is never reported as volatility.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import date as Date
from typing import List, Sequence

from config import settings
from engine.detection.base import MIN_DETECTION_POINTS, DetectionEngine
from engine.detection.report import INSUFFICIENT_DATA, NO_ANOMALY, AlertReport, normal_report
from engine.detection.thresholds import RiseConfig
from engine.enums import AlertType, SeverityLevel
from engine.stats import (
    DescriptiveStats,
    autocorrelation,
    coefficient_of_variation,
    index_regression,
    mean,
    stddev,
)
from engine.window import DataWindow

log = logging.getLogger(__name__)


def _percent_change(previous: float, current: float) -> float:
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100.0


def detect_sudden_spike(values: Sequence[float], day: Date, config: RiseConfig) -> AlertReport:
    if len(values) < MIN_DETECTION_POINTS:
        return normal_report(day, INSUFFICIENT_DATA)

    last, previous = values[-1], values[-2]
    pct = _percent_change(previous, last)
    sd = stddev(values)
    deviation = (last - mean(values)) / sd if sd != 0 else 0.0
    absolute = last - previous

    pct_threshold = config.sudden_spike_percentage_change_threshold
    multiplier = config.sudden_spike_std_deviation_multiplier
    by_pct = pct > pct_threshold
    by_deviation = deviation > multiplier
    log.debug(
        "spike check: pct=%.2f deviation=%.2f absolute=%.4f", pct, deviation, absolute
    )

    if not (by_pct or by_deviation) or absolute <= config.sudden_spike_min_absolute_change or pct <= 0:
        return normal_report(day)

    confidence = min(1.0, max(pct / pct_threshold, deviation / multiplier))
    reasons = []
    if by_pct:
        reasons.append(f"single-day increase of {pct:.2f}%")
    if by_deviation:
        reasons.append(f"{deviation:.2f} standard deviations above the window mean")
    reasons.append(f"absolute change {absolute:.2f}")

    return AlertReport(
        date=day,
        total_score=confidence,
        alert_type=AlertType.SINGLE_DAY_SPIKE,
        description=", ".join(reasons),
        is_alert=True,
    )


def detect_gradual_increase(values: Sequence[float], day: Date, config: RiseConfig) -> AlertReport:
    n = len(values)
    if n < MIN_DETECTION_POINTS:
        return normal_report(day, INSUFFICIENT_DATA)

    regression = index_regression(values)
    slope, r_squared = regression.slope, regression.r_squared
    first, last = values[0], values[-1]
    total_change = _percent_change(first, last) if first > 0 else 0.0

    up_days = 0
    consecutive = 0
    max_consecutive = 0
    daily_increases: List[float] = []
    for i in range(1, n):
        if values[i] > values[i - 1]:
            up_days += 1
            consecutive += 1
            max_consecutive = max(max_consecutive, consecutive)
            if values[i - 1] > 0:
                daily_increases.append(_percent_change(values[i - 1], values[i]))
        else:
            consecutive = 0
    avg_daily = mean(daily_increases)
    closing_up = last > values[-2]

    slope_threshold = config.gradual_increase_slope_threshold
    total_threshold = config.gradual_increase_total_change_percent_threshold
    log.debug(
        "gradual check: slope=%.4f r2=%.4f total=%.2f up_days=%d max_consecutive=%d avg_daily=%.2f",
        slope, r_squared, total_change, up_days, max_consecutive, avg_daily,
    )

    # (score, description) per satisfied condition; the strongest one describes the report
    findings = []
    if (
        slope > slope_threshold
        and r_squared > config.gradual_increase_min_r_squared
        and max_consecutive >= config.gradual_increase_min_consecutive_increases
    ):
        findings.append((
            r_squared,
            f"steady upward trend over {max_consecutive} consecutive rising days, "
            f"slope {slope:.4f} per day, fit R²={r_squared:.2f}",
        ))
    if (
        total_change >= total_threshold
        and r_squared > settings.trend_total_change_min_r_squared
        and closing_up
    ):
        findings.append((
            min(1.0, total_change / (2 * total_threshold)),
            f"cumulative rise of {total_change:.2f}%, fit R²={r_squared:.2f}",
        ))
    if (
        up_days >= n // 2
        and avg_daily >= slope_threshold * 100
        and total_change >= total_threshold / 2
        and last > first * (1 + total_threshold / 200)
        and closing_up
    ):
        findings.append((
            min(1.0, avg_daily / (2 * slope_threshold * 100)),
            f"intermittent rise on {up_days} of {n - 1} days, "
            f"average daily increase {avg_daily:.2f}%, total change {total_change:.2f}%",
        ))

    if not findings:
        return normal_report(day)

    confidence, description = max(findings, key=lambda f: f[0])
    return AlertReport(
        date=day,
        total_score=min(1.0, confidence),
        alert_type=AlertType.STEADY_RISE,
        description=description,
        is_alert=True,
    )


def count_direction_changes(values: Sequence[float]) -> int:
    if len(values) < 3:
        return 0
    changes = 0
    rising = values[1] > values[0]
    for i in range(2, len(values)):
        now_rising = values[i] > values[i - 1]
        if now_rising != rising:
            changes += 1
            rising = now_rising
    return changes


def has_periodicity(values: Sequence[float], config: RiseConfig) -> bool:
    n = len(values)
    if n < settings.periodicity_min_points:
        return False

    # a large final move after an already oscillating series counts as volatility
    last_move = abs(_percent_change(values[-2], values[-1]))
    if last_move > config.sudden_spike_percentage_change_threshold / 2 and n > 4:
        if count_direction_changes(values[:-1]) >= 2:
            return True

    if coefficient_of_variation(values) < settings.periodicity_min_variation_coefficient:
        return False

    changes = count_direction_changes(values)
    if changes >= 3 and n <= 8:
        return True

    max_corr = 0.0
    for lag in range(1, min(config.periodicity_max_period_days, n // 2) + 1):
        if n - lag < 2:
            continue
        r = autocorrelation(values, lag)
        if abs(r) > abs(max_corr):
            max_corr = r
        if abs(r) > config.periodicity_autocorrelation_threshold:
            log.debug("periodicity: lag=%d r=%.4f", lag, r)
            return True

    return abs(max_corr) > settings.periodicity_relaxed_correlation and changes >= 2 and n >= 5


def periodic_report(values: Sequence[float], day: Date, config: RiseConfig) -> AlertReport:
    n = len(values)
    best_period = 0
    best_corr = 0.0
    for lag in range(1, min(config.periodicity_max_period_days, n // 3) + 1):
        r = autocorrelation(values, lag)
        if abs(r) > abs(best_corr):
            best_corr = r
            best_period = lag

    stats = DescriptiveStats.of(values)
    if best_period:
        description = (
            f"periodic fluctuation with a period of about {best_period} days, "
            f"autocorrelation {best_corr:.2f}"
        )
    else:
        description = f"irregular fluctuation between {stats.min:.2f} and {stats.max:.2f}"

    return AlertReport(
        date=day,
        total_score=abs(best_corr),
        alert_type=AlertType.ABNORMAL_VOLATILITY,
        description=description,
        is_alert=True,
    )


def calculate_total_score(report: AlertReport, config: RiseConfig) -> AlertReport:
    weights = {
        AlertType.SINGLE_DAY_SPIKE: config.score_sudden_spike_weight,
        AlertType.STEADY_RISE: config.score_gradual_increase_weight,
        AlertType.ABNORMAL_VOLATILITY: config.score_periodic_weight,
    }
    score = report.total_score * weights.get(report.alert_type, 0.0)
    severity = SeverityLevel.from_score(
        score, config.score_critical_threshold, config.score_warning_threshold
    )

    if severity is SeverityLevel.NORMAL:
        log.debug("%s scored %.4f, below warning level", report.alert_type.value, score)
        return report.model_copy(
            update={
                "total_score": score,
                "alert_type": AlertType.NO_ISSUE,
                "description": NO_ANOMALY,
                "is_alert": False,
                "severity_level": SeverityLevel.NORMAL,
            }
        )

    prefix = f"{report.alert_type.label}: "
    description = report.description
    if not description.startswith(prefix):
        description = prefix + description
    return report.model_copy(
        update={"total_score": score, "description": description, "severity_level": severity}
    )


class RiseDetectionEngine(DetectionEngine[RiseConfig]):
    name = "rise"

    def default_config(self) -> RiseConfig:
        return RiseConfig.from_settings()

    def _classify(self, window: DataWindow, config: RiseConfig) -> AlertReport:
        values = window.values()
        day = window.latest_date()
        log.debug("rise window: %s", DescriptiveStats.of(values).summary())

        for classifier in (detect_sudden_spike, detect_gradual_increase):
            report = classifier(values, day, config)
            if report.is_alert:
                return calculate_total_score(report, config)

        if has_periodicity(values, config):
            return calculate_total_score(periodic_report(values, day, config), config)
        return normal_report(day)
