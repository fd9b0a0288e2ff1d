"""
Ordinary least squares regression used to judge how steadily a metric trends, exposing slope, intercept and coefficient of determination, with support for appending observations and lazy refitting on the next read.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
from scipy.stats import linregress

from engine.exceptions import InvalidArgument


class LinearRegression:

    def __init__(self) -> None:
        self._x: List[float] = []
        self._y: List[float] = []
        self._slope = 0.0
        self._intercept = 0.0
        self._r_squared = 0.0
        self._stale = True

    def __len__(self) -> int:
        return len(self._x)

    def add_point(self, x: float, y: float) -> None:
        self._x.append(float(x))
        self._y.append(float(y))
        self._stale = True

    def add_data(self, x: Sequence[float], y: Sequence[float]) -> None:
        if len(x) != len(y):
            raise InvalidArgument("x and y must have the same length")
        self._x.extend(float(v) for v in x)
        self._y.extend(float(v) for v in y)
        self._stale = True

    def _calculate(self) -> None:
        if not self._stale:
            return
        if len(self._x) < 2:
            # nothing to fit yet; keep the neutral values until more data arrives
            self._slope = self._intercept = self._r_squared = 0.0
            return

        x = np.array(self._x, dtype=float)
        y = np.array(self._y, dtype=float)
        flat_y = np.ptp(y) == 0

        if np.ptp(x) == 0:
            slope, intercept = 0.0, float(y.mean())
        elif flat_y:
            slope, intercept = 0.0, float(y[0])
        else:
            fit = linregress(x, y)
            slope, intercept = float(fit.slope), float(fit.intercept)

        if flat_y:
            r_squared = 1.0
        else:
            predicted = intercept + slope * x
            ss_res = float(np.sum((y - predicted) ** 2))
            ss_tot = float(np.sum((y - y.mean()) ** 2))
            r_squared = 1.0 - ss_res / ss_tot

        self._slope = slope
        self._intercept = intercept
        self._r_squared = r_squared
        self._stale = False

    @property
    def slope(self) -> float:
        self._calculate()
        return self._slope

    @property
    def intercept(self) -> float:
        self._calculate()
        return self._intercept

    @property
    def r_squared(self) -> float:
        self._calculate()
        return self._r_squared


def linear_regression(x: Sequence[float], y: Sequence[float]) -> LinearRegression:
    regression = LinearRegression()
    regression.add_data(x, y)
    return regression


def index_regression(values: Sequence[float]) -> LinearRegression:
    """Fit values against their position (0, 1, 2, ...)."""
    return linear_regression(list(range(len(values))), values)
