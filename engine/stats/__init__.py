"""
Statistics helpers for trend classification: descriptive statistics, Pearson correlation and an incremental least squares regression.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.stats.descriptive import (
    DescriptiveStats,
    autocorrelation,
    coefficient_of_variation,
    correlation,
    mean,
    stddev,
)
from engine.stats.regression import LinearRegression, index_regression, linear_regression

__all__ = [
    "DescriptiveStats",
    "LinearRegression",
    "autocorrelation",
    "coefficient_of_variation",
    "correlation",
    "index_regression",
    "linear_regression",
    "mean",
    "stddev",
]
