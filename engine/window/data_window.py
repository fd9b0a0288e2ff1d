"""
Sliding data window holding a fixed number of daily observations in date order, maintaining chain (day-over-day) metrics and short/long moving averages as points arrive, so that detectors can work on a compact, consistently ordered view of recent metric history.

There are two metric paths. Points added one at a time look up their
predecessor by calendar date and choose moving-average inputs by date, so a
missing day leaves the chain metrics at zero. A full recalculation (triggered
by changing the moving-average spans) works on index order only and ignores
date gaps. Windows with gaps therefore produce different metrics depending on
which path last touched them.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from datetime import date as Date, datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional, Sequence

from config import DEFAULT_LONG_TERM_DAYS, DEFAULT_SHORT_TERM_DAYS, DEFAULT_WINDOW_SIZE
from engine.exceptions import InvalidArgument
from engine.window.points import Observation

log = logging.getLogger(__name__)


def _as_date(value: Date) -> Date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _require_positive(name: str, value: int) -> int:
    if value <= 0:
        raise InvalidArgument(f"{name} must be greater than 0, got {value}")
    return int(value)


class DataWindow:

    def __init__(
        self,
        max_size: int = DEFAULT_WINDOW_SIZE,
        short_term_days: int = DEFAULT_SHORT_TERM_DAYS,
        long_term_days: int = DEFAULT_LONG_TERM_DAYS,
    ) -> None:
        self._max_size = max_size if max_size > 0 else DEFAULT_WINDOW_SIZE
        self._short_term_days = _require_positive("short_term_days", short_term_days)
        self._long_term_days = _require_positive("long_term_days", long_term_days)
        self._points: List[Observation] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Observation]:
        return iter(list(self._points))

    def __repr__(self) -> str:
        return (
            f"DataWindow(size={len(self._points)}, max_size={self._max_size}, "
            f"short_term_days={self._short_term_days}, long_term_days={self._long_term_days})"
        )

    # ----------------------------------------------------------------- mutation

    def add_data_point(self, date: Date, value: float) -> None:
        if len(self._points) >= self._max_size:
            evicted = self._points.pop(0)
            log.debug("window full, evicted %s", evicted.date)

        point = Observation(date=_as_date(date), value=float(value))
        self._calculate_metrics(point)
        self._points.append(point)
        self._points.sort(key=lambda p: p.date)

    def add_data_points(self, dates: Sequence[Date], values: Sequence[float]) -> None:
        if len(dates) != len(values):
            raise InvalidArgument(
                f"dates and values must have the same length ({len(dates)} != {len(values)})"
            )
        for d, v in zip(dates, values):
            self.add_data_point(d, v)

    def slide(self, date: Date, value: float) -> Optional[Observation]:
        removed = self._points.pop(0) if self._points else None
        self.add_data_point(date, value)
        return removed

    def clear(self) -> None:
        self._points.clear()

    # ------------------------------------------------------------ parameters

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        self._max_size = _require_positive("max_size", value)
        while len(self._points) > self._max_size:
            self._points.pop(0)

    @property
    def short_term_days(self) -> int:
        return self._short_term_days

    @short_term_days.setter
    def short_term_days(self, value: int) -> None:
        self._short_term_days = _require_positive("short_term_days", value)
        self.recalculate_metrics()

    @property
    def long_term_days(self) -> int:
        return self._long_term_days

    @long_term_days.setter
    def long_term_days(self, value: int) -> None:
        self._long_term_days = _require_positive("long_term_days", value)
        self.recalculate_metrics()

    # --------------------------------------------------------------- metrics

    def _find_by_date(self, day: Date) -> Optional[Observation]:
        return next((p for p in self._points if p.date == day), None)

    def _calculate_metrics(self, point: Observation) -> None:
        yesterday = self._find_by_date(point.date - timedelta(days=1))
        if yesterday is not None:
            point.set_chain(yesterday.value)

        # predecessors nearest first; the long average continues where the short one stops
        earlier = sorted(
            (p for p in self._points if p.date < point.date),
            key=lambda p: p.date,
            reverse=True,
        )
        short_span = self._short_term_days - 1
        short_inputs = [point.value] + [p.value for p in earlier[:short_span]]
        point.ma_short = sum(short_inputs) / len(short_inputs)

        long_inputs = list(short_inputs)
        if self._long_term_days > self._short_term_days:
            extra = self._long_term_days - self._short_term_days
            long_inputs.extend(p.value for p in earlier[short_span:short_span + extra])
        point.ma_long = sum(long_inputs) / len(long_inputs)

    def recalculate_metrics(self) -> None:
        if not self._points:
            return
        self._points.sort(key=lambda p: p.date)

        for i, point in enumerate(self._points):
            point.reset_chain()
            if i > 0:
                point.set_chain(self._points[i - 1].value)

        values = [p.value for p in self._points]
        for i, point in enumerate(self._points):
            short = values[max(0, i - self._short_term_days + 1):i + 1]
            long = values[max(0, i - self._long_term_days + 1):i + 1]
            point.ma_short = sum(short) / len(short)
            point.ma_long = sum(long) / len(long)

    # ---------------------------------------------------------------- queries

    def size(self) -> int:
        return len(self._points)

    def is_empty(self) -> bool:
        return not self._points

    def is_full(self) -> bool:
        return len(self._points) >= self._max_size

    def values(self) -> List[float]:
        return [p.value for p in self._points]

    def dates(self) -> List[Date]:
        return [p.date for p in self._points]

    def points(self) -> List[Observation]:
        return list(self._points)

    def latest_date(self) -> Optional[Date]:
        return self._points[-1].date if self._points else None

    def sub_window(self, days: int) -> DataWindow:
        days = min(days, len(self._points))
        sub = DataWindow(days, self._short_term_days, self._long_term_days)
        ordered = sorted(self._points, key=lambda p: p.date)
        # metrics are carried over as computed here, not recomputed for the smaller window
        sub._points = [p.copy() for p in ordered[len(ordered) - days:]] if days > 0 else []
        return sub

    # ----------------------------------------------------------------- export

    def to_records(self) -> List[Dict[str, Any]]:
        return [p.to_record() for p in self._points]

    def to_simple_records(self) -> List[Dict[str, Any]]:
        return [p.to_simple_record() for p in self._points]

    def to_json(self, simple: bool = False) -> str:
        if not self._points:
            return "[]"
        return json.dumps(self.to_simple_records() if simple else self.to_records())
