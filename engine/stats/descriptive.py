"""
Descriptive statistics over short metric series: mean, sample standard deviation, Pearson correlation and a summary bundle, with neutral results for empty or degenerate input so that callers never have to guard against division by zero.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

import numpy as np


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float]) -> float:
    arr = _as_array(values)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def stddev(values: Sequence[float]) -> float:
    """Sample standard deviation; 0.0 when fewer than two values exist."""
    arr = _as_array(values)
    if arr.size <= 1:
        return 0.0
    return float(np.std(arr, ddof=1))


def correlation(x: Sequence[float], y: Sequence[float]) -> float:
    ax = _as_array(x)
    ay = _as_array(y)
    if ax.size != ay.size or ax.size == 0:
        return 0.0

    dx = ax - ax.mean()
    dy = ay - ay.mean()
    sum_x2 = float(np.sum(dx * dx))
    sum_y2 = float(np.sum(dy * dy))
    if sum_x2 == 0.0 or sum_y2 == 0.0:
        return 0.0
    return float(np.sum(dx * dy) / (np.sqrt(sum_x2) * np.sqrt(sum_y2)))


def autocorrelation(values: Sequence[float], lag: int) -> float:
    """Pearson correlation between the series and itself shifted by ``lag``."""
    arr = _as_array(values)
    if lag <= 0 or arr.size - lag < 2:
        return 0.0
    return correlation(arr[:-lag], arr[lag:])


def coefficient_of_variation(values: Sequence[float]) -> float:
    avg = mean(values)
    if avg == 0:
        return 0.0
    return stddev(values) / avg


@dataclass(frozen=True)
class DescriptiveStats:
    values: tuple = field(default_factory=tuple)

    @classmethod
    def of(cls, values: Sequence[float]) -> DescriptiveStats:
        return cls(values=tuple(float(v) for v in values))

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def mean(self) -> float:
        return mean(self.values)

    @property
    def stddev(self) -> float:
        return stddev(self.values)

    @property
    def min(self) -> float:
        return float(min(self.values)) if self.values else 0.0

    @property
    def max(self) -> float:
        return float(max(self.values)) if self.values else 0.0

    def summary(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "sum": float(sum(self.values)),
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
        }
