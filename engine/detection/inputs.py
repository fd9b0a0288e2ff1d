"""
Input adapters turning raw caller data (dated points or bare value lists) into a populated data window.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from datetime import date as Date, timedelta
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from config import DEFAULT_LONG_TERM_DAYS, DEFAULT_SHORT_TERM_DAYS, DEFAULT_WINDOW_SIZE
from engine.window import DataWindow


class DataPoint(BaseModel):
    date: Date
    value: float


def _is_missing(value: Optional[float]) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def as_data_point(item: Any) -> DataPoint:
    if isinstance(item, DataPoint):
        return item
    if isinstance(item, (tuple, list)):
        day, value = item
        return DataPoint(date=day, value=value)
    if isinstance(item, dict):
        return DataPoint.model_validate(item)
    return DataPoint(date=item.date, value=item.value)


def values_to_points(values: Sequence[Optional[float]], today: Optional[Date] = None) -> List[DataPoint]:
    """Treat ``values`` as consecutive days ending today.

    Dates follow the position in the input, so a skipped ``None``/NaN entry
    leaves a gap instead of shifting the later values.
    """
    today = today or Date.today()
    n = len(values)
    points = []
    for i, value in enumerate(values):
        if _is_missing(value):
            continue
        points.append(DataPoint(date=today - timedelta(days=n - 1 - i), value=float(value)))
    return points


def build_window(
    points: Iterable[Any],
    max_size: Optional[int] = None,
    short_term_days: int = DEFAULT_SHORT_TERM_DAYS,
    long_term_days: int = DEFAULT_LONG_TERM_DAYS,
) -> DataWindow:
    """Window over ``points`` in date order, sized to hold all of them unless ``max_size`` is given.

    ``None`` entries are skipped, as missing values are in a value list.
    """
    ordered = sorted((as_data_point(p) for p in points if p is not None), key=lambda p: p.date)
    capacity = max_size or max(DEFAULT_WINDOW_SIZE, len(ordered))
    window = DataWindow(capacity, short_term_days, long_term_days)
    for point in ordered:
        window.add_data_point(point.date, point.value)
    return window
