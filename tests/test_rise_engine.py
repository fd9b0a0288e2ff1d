"""
Test cases for the rise detection engine covering spikes, steady rises, periodic volatility, scoring and suppression, overrides and the list and streaming entry points.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datetime import date

import pytest

from engine.detection import rise
from engine.detection.report import AlertReport
from engine.detection.rise import (
    RiseDetectionEngine,
    calculate_total_score,
    count_direction_changes,
    has_periodicity,
)
from engine.detection.thresholds import DeclineOverride, RiseConfig, RiseOverride
from engine.enums import AlertType, SeverityLevel
from engine.exceptions import InvalidArgument
from engine.window import DataWindow


SPIKE = [100, 102, 99, 101, 100, 103, 210]
GRADUAL = [100, 130, 170, 225, 300, 400, 550]
STABLE = [100] * 7


def _periodic_series(n=56):
    pattern = {0: 200, 3: 50}
    return [pattern.get(i % 7, 100) for i in range(n)]


@pytest.fixture
def engine():
    return RiseDetectionEngine()


def test_single_day_spike(engine):
    report = engine.detect_with_values(SPIKE)
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE
    assert report.is_alert
    assert report.total_score == pytest.approx(10.0)
    assert report.severity_level == SeverityLevel.CRITICAL
    assert report.description.startswith("Single-day spike: ")
    assert report.date == date.today()


def test_gradual_rise(engine):
    report = engine.detect_with_values(GRADUAL)
    assert report.alert_type == AlertType.STEADY_RISE
    assert report.is_alert
    assert report.total_score == pytest.approx(5.0)
    assert report.severity_level == SeverityLevel.WARNING
    assert "450.00%" in report.description


def test_zigzag_rise_is_cumulative(engine):
    report = engine.detect_with_values([100, 150, 140, 200, 185, 250, 300])
    assert report.alert_type == AlertType.STEADY_RISE
    assert report.severity_level == SeverityLevel.WARNING


def test_stable_series(engine):
    report = engine.detect_with_values(STABLE)
    assert report.alert_type == AlertType.NO_ISSUE
    assert not report.is_alert
    assert report.total_score == 0.0
    assert report.severity_level == SeverityLevel.NORMAL


def test_normal_noise_is_not_an_alert(engine):
    report = engine.detect_with_values([100, 102, 99, 101, 98, 103, 100])
    assert report.alert_type == AlertType.NO_ISSUE
    assert not report.is_alert


def test_override_lowers_spike_threshold(engine):
    values = [100, 102, 99, 101, 100, 103, 140]
    assert not engine.detect_with_values(values).is_alert

    override = RiseOverride(sudden_spike_percentage_change_threshold=30.0)
    report = engine.detect_with_values(values, override)
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE
    assert report.severity_level == SeverityLevel.CRITICAL
    # the override applies to that call only
    assert engine.config.sudden_spike_percentage_change_threshold == 100.0


def test_absolute_floor_blocks_small_baseline_spikes(engine):
    report = engine.detect_with_values([1, 1, 1, 1, 1, 1, 5])
    assert report.alert_type != AlertType.SINGLE_DAY_SPIKE


@pytest.mark.parametrize("values", [[], None])
def test_empty_input(engine, values):
    report = engine.detect_with_values(values)
    assert report.alert_type == AlertType.NO_ISSUE
    assert not report.is_alert
    assert report.description


@pytest.mark.parametrize("points", [[], None])
def test_empty_points(engine, points):
    report = engine.detect_with_points(points)
    assert report.alert_type == AlertType.NO_ISSUE
    assert not report.is_alert
    assert report.description


def test_none_points_are_skipped(engine, consecutive_days):
    days = consecutive_days(len(SPIKE))
    report = engine.detect_with_points([None] + list(zip(days, SPIKE)) + [None])
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE
    assert report.date == days[-1]


def test_single_point_is_insufficient(engine):
    report = engine.detect_with_values([100])
    assert report.alert_type == AlertType.NO_ISSUE
    assert "insufficient" in report.description


def test_missing_values_are_skipped(engine):
    report = engine.detect_with_values([100, None, 102, float("nan"), 101, 103, 210])
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE


def test_repeated_calls_are_identical(engine):
    assert engine.detect_with_values(GRADUAL) == engine.detect_with_values(GRADUAL)


def test_detect_with_points_sorts_input(engine, consecutive_days):
    days = consecutive_days(len(SPIKE))
    points = list(zip(days, SPIKE))
    report = engine.detect_with_points(list(reversed(points)))
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE
    assert report.date == days[-1]


def test_streaming_points(engine, consecutive_days):
    days = consecutive_days(6)
    reports = [
        engine.add_point_and_detect(d, v)
        for d, v in zip(days, [100, 120, 150, 180, 220, 450])
    ]
    assert reports[-1].alert_type == AlertType.SINGLE_DAY_SPIKE
    assert engine.window.size() == 6


def test_streaming_window_is_bounded(consecutive_days):
    engine = RiseDetectionEngine(window_size=3)
    for d in consecutive_days(5):
        engine.add_point_and_detect(d, 100)
    assert engine.window.size() == 3


def test_caller_window_is_used(engine, consecutive_days):
    window = DataWindow()
    for d, v in zip(consecutive_days(6), SPIKE[:-1]):
        window.add_data_point(d, v)
    report = engine.add_point_and_detect(consecutive_days(7)[-1], 210, window=window)
    assert report.alert_type == AlertType.SINGLE_DAY_SPIKE
    assert engine.window.is_empty()


def test_periodic_volatility(consecutive_days):
    values = _periodic_series()
    window = DataWindow(len(values))
    window.add_data_points(consecutive_days(len(values)), values)
    engine = RiseDetectionEngine()

    assert has_periodicity(values, engine.config)

    suppressed = engine.detect(window)
    assert suppressed.alert_type == AlertType.NO_ISSUE

    report = engine.detect(window, RiseOverride(score_periodic_weight=10.0))
    assert report.alert_type == AlertType.ABNORMAL_VOLATILITY
    assert report.severity_level == SeverityLevel.CRITICAL
    assert "period of about 7 days" in report.description


def test_periodicity_needs_four_points():
    assert not has_periodicity([100, 200, 100], RiseConfig())


def test_count_direction_changes():
    assert count_direction_changes([1, 2]) == 0
    assert count_direction_changes([1, 2, 1, 2]) == 2
    assert count_direction_changes([1, 2, 3, 4]) == 0


def test_low_confidence_is_suppressed():
    config = RiseConfig()
    candidate = AlertReport(
        date=date(2024, 3, 1),
        total_score=0.5,
        alert_type=AlertType.STEADY_RISE,
        description="cumulative rise",
        is_alert=True,
    )
    report = calculate_total_score(candidate, config)
    assert report.alert_type == AlertType.NO_ISSUE
    assert not report.is_alert
    assert report.severity_level == SeverityLevel.NORMAL


def test_severity_is_monotonic_in_confidence():
    config = RiseConfig()
    weights = []
    for confidence in (0.1, 0.5, 0.8, 1.0):
        candidate = AlertReport(
            date=date(2024, 3, 1),
            total_score=confidence,
            alert_type=AlertType.SINGLE_DAY_SPIKE,
            description="spike",
            is_alert=True,
        )
        report = calculate_total_score(candidate, config)
        weights.append(report.severity_level.weight())
        assert report.is_alert == (report.severity_level != SeverityLevel.NORMAL)
    assert weights == sorted(weights)
    assert weights[-1] == SeverityLevel.CRITICAL.weight()


def test_label_prefix_is_not_duplicated():
    candidate = AlertReport(
        date=date(2024, 3, 1),
        total_score=1.0,
        alert_type=AlertType.SINGLE_DAY_SPIKE,
        description="Single-day spike: already labelled",
        is_alert=True,
    )
    report = calculate_total_score(candidate, RiseConfig())
    assert report.description == "Single-day spike: already labelled"


def test_config_management(engine):
    engine.update_config(RiseOverride(score_warning_threshold=2.0))
    assert engine.config.score_warning_threshold == 2.0
    assert engine.config.score_critical_threshold == 7.5

    engine.replace_config(RiseConfig(score_periodic_weight=3.0))
    assert engine.config.score_periodic_weight == 3.0
    assert engine.config.score_warning_threshold == 5.0

    engine.replace_config(None)
    assert engine.config == RiseConfig.from_settings()


def test_unexpected_failure_returns_neutral_report(engine, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("broken classifier")

    monkeypatch.setattr(rise, "detect_sudden_spike", boom)
    report = engine.detect_with_values(SPIKE)
    assert report.alert_type == AlertType.NO_ISSUE
    assert "broken classifier" in report.description


def test_foreign_override_is_rejected(engine):
    with pytest.raises(InvalidArgument):
        engine.update_config(DeclineOverride(sudden_drop_weight=0.5))
    assert engine.config == RiseConfig.from_settings()
    assert "sudden_drop_weight" not in engine.config.__dict__

    with pytest.raises(InvalidArgument):
        engine.detect_with_values(SPIKE, DeclineOverride(sudden_drop_weight=0.5))
