"""
Test cases for the sliding data window: eviction and ordering, chain and moving-average metrics on both the incremental and the full recalculation path, sub windows and export.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json
from datetime import date, datetime, timedelta

import pytest

from engine.exceptions import InvalidArgument
from engine.window import DataWindow


def _filled(days, values, **kwargs):
    window = DataWindow(**kwargs)
    window.add_data_points(days, values)
    return window


def test_overfilled_window_keeps_latest_in_order(consecutive_days):
    days = consecutive_days(10)
    window = _filled(days, list(range(10)), max_size=4)

    assert window.size() == 4
    assert len(window) == 4
    assert window.is_full()
    assert window.dates() == days[-4:]
    assert window.values() == [6.0, 7.0, 8.0, 9.0]
    assert all(a < b for a, b in zip(window.dates(), window.dates()[1:]))


def test_out_of_order_inserts_are_sorted(consecutive_days):
    d0, d1, d2 = consecutive_days(3)
    window = DataWindow()
    window.add_data_point(d2, 3)
    window.add_data_point(d0, 1)
    window.add_data_point(d1, 2)
    assert window.dates() == [d0, d1, d2]
    assert window.latest_date() == d2


def test_datetime_is_reduced_to_date():
    window = DataWindow()
    window.add_data_point(datetime(2024, 3, 1, 14, 30), 5)
    assert window.dates() == [date(2024, 3, 1)]


def test_chain_metrics(consecutive_days):
    d0, d1 = consecutive_days(2)
    window = _filled([d0, d1], [100, 110])
    latest = window.points()[-1]
    assert latest.chain_diff == pytest.approx(10.0)
    assert latest.chain_ratio == pytest.approx(1.1)


def test_chain_ratio_zero_predecessor(consecutive_days):
    window = _filled(consecutive_days(2), [0, 50])
    latest = window.points()[-1]
    assert latest.chain_diff == 50.0
    assert latest.chain_ratio == 0.0


def test_date_gap_differs_between_incremental_and_recalculated_metrics(start_day):
    window = DataWindow()
    window.add_data_point(start_day, 100)
    window.add_data_point(start_day + timedelta(days=2), 120)
    # no point dated the day before, so the incremental path leaves chain metrics at zero
    assert window.points()[-1].chain_diff == 0.0

    window.short_term_days = 3
    latest = window.points()[-1]
    assert latest.chain_diff == pytest.approx(20.0)
    assert latest.chain_ratio == pytest.approx(1.2)


def test_moving_averages(consecutive_days):
    window = _filled(consecutive_days(4), [10, 20, 30, 40], short_term_days=3, long_term_days=7)
    latest = window.points()[-1]
    assert latest.ma_short == pytest.approx(30.0)
    assert latest.ma_long == pytest.approx(25.0)


def test_long_average_follows_short_when_not_longer(consecutive_days):
    window = _filled(consecutive_days(4), [10, 20, 30, 40], short_term_days=3, long_term_days=2)
    latest = window.points()[-1]
    assert latest.ma_long == latest.ma_short


def test_eviction_happens_before_metric_calculation(consecutive_days):
    window = _filled(consecutive_days(3), [100, 200, 300], max_size=2)
    latest = window.points()[-1]
    # the evicted 100 no longer contributes to the averages
    assert latest.ma_short == pytest.approx(250.0)
    assert latest.ma_long == pytest.approx(250.0)


def test_recalculation_uses_trailing_index_windows(consecutive_days):
    window = _filled(consecutive_days(5), [10, 20, 30, 40, 50])
    window.long_term_days = 2
    points = window.points()
    assert points[0].ma_long == 10.0
    assert points[-1].ma_long == pytest.approx(45.0)
    assert points[-1].ma_short == pytest.approx(40.0)


def test_invalid_parameters():
    window = DataWindow()
    with pytest.raises(InvalidArgument):
        window.short_term_days = 0
    with pytest.raises(InvalidArgument):
        window.long_term_days = -1
    with pytest.raises(InvalidArgument):
        window.max_size = 0
    with pytest.raises(InvalidArgument):
        DataWindow(short_term_days=0)
    with pytest.raises(InvalidArgument):
        window.add_data_points([date(2024, 1, 1)], [1.0, 2.0])


def test_non_positive_capacity_falls_back_to_default():
    assert DataWindow(max_size=0).max_size == 7
    assert DataWindow(max_size=-3).max_size == 7


def test_shrinking_capacity_evicts_earliest(consecutive_days):
    days = consecutive_days(5)
    window = _filled(days, [1, 2, 3, 4, 5])
    window.max_size = 2
    assert window.dates() == days[-2:]


def test_slide(consecutive_days):
    days = consecutive_days(3)
    window = DataWindow()
    assert window.slide(days[0], 1) is None
    window.add_data_point(days[1], 2)

    removed = window.slide(days[2], 3)
    assert removed.date == days[0]
    assert window.values() == [2.0, 3.0]


def test_sub_window_copies_metrics(consecutive_days):
    window = _filled(consecutive_days(5), [10, 20, 30, 40, 50])
    sub = window.sub_window(2)

    assert sub.values() == [40.0, 50.0]
    assert sub.points()[-1].ma_short == window.points()[-1].ma_short
    assert sub.points()[0].chain_diff == window.points()[-2].chain_diff

    sub.points()[0].value = 999
    assert window.values()[-2] == 40.0
    assert window.sub_window(10).size() == 5


def test_clear_and_iteration(consecutive_days):
    window = _filled(consecutive_days(3), [1, 2, 3])
    assert [p.value for p in window] == [1.0, 2.0, 3.0]
    window.clear()
    assert window.is_empty()
    assert window.latest_date() is None


def test_json_export(consecutive_days):
    assert DataWindow().to_json() == "[]"

    window = _filled(consecutive_days(2), [1, 2])
    simple = json.loads(window.to_json(simple=True))
    assert simple == [{"date": "2024-03-01", "value": 1.0}, {"date": "2024-03-02", "value": 2.0}]

    full = json.loads(window.to_json())
    assert set(full[1]) == {"date", "value", "chain_diff", "chain_ratio", "ma_short", "ma_long"}
    assert full[1]["chain_diff"] == 1.0
