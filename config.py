"""
Constants and configuration for trendsentry.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os

from pydantic_settings import BaseSettings


TRENDSENTRY_LOG_LEVEL: str = os.getenv("TRENDSENTRY_LOG_LEVEL", "INFO").upper()
TRENDSENTRY_API_HOST: str = os.getenv("TRENDSENTRY_API_HOST", "0.0.0.0")
TRENDSENTRY_API_PORT: int = int(os.getenv("TRENDSENTRY_API_PORT", "8080"))

# window defaults shared by engines and the data window itself
DEFAULT_WINDOW_SIZE = 7
DEFAULT_SHORT_TERM_DAYS = 3
DEFAULT_LONG_TERM_DAYS = 7

# percentages below this magnitude are treated as zero denominators
PERCENT_CHANGE_EPSILON = 0.00001

# weight values assigned to severity labels for comparison and ranking
SEVERITY_WEIGHTS: dict[str, int] = {
    "NORMAL": 0,
    "WARNING": 1,
    "CRITICAL": 2,
}


class Settings(BaseSettings):
    log_level: str = TRENDSENTRY_LOG_LEVEL
    api_host: str = TRENDSENTRY_API_HOST
    api_port: int = TRENDSENTRY_API_PORT

    window_max_size: int = DEFAULT_WINDOW_SIZE
    window_short_term_days: int = DEFAULT_SHORT_TERM_DAYS
    window_long_term_days: int = DEFAULT_LONG_TERM_DAYS

    # gradual increase
    rise_gradual_increase_slope_threshold: float = 0.25
    rise_gradual_increase_min_r_squared: float = 0.6
    rise_gradual_increase_min_consecutive_increases: int = 3
    rise_gradual_increase_total_change_percent_threshold: float = 100.0

    # sudden spike
    rise_sudden_spike_percentage_change_threshold: float = 100.0
    rise_sudden_spike_std_deviation_multiplier: float = 3.0
    # minimum absolute change, keeps small baselines from alerting
    rise_sudden_spike_min_absolute_change: float = 10.0

    # periodicity
    rise_periodicity_autocorrelation_threshold: float = 0.7
    rise_periodicity_max_period_days: int = 7

    # rise scoring
    rise_score_sudden_spike_weight: float = 10.0
    rise_score_gradual_increase_weight: float = 5.0
    rise_score_periodic_weight: float = 1.0
    rise_score_critical_threshold: float = 7.5
    rise_score_warning_threshold: float = 5.0

    # sudden drop
    decline_sudden_drop_change_percent_threshold: float = 30.0
    decline_sudden_drop_weight: float = 0.8
    decline_sudden_drop_std_deviation_multiplier: float = 3.0
    decline_sudden_drop_min_absolute_change: float = 10.0

    # steady decline
    decline_steady_decline_r_squared_threshold: float = 0.6
    decline_steady_decline_min_consecutive_days: int = 3
    decline_steady_decline_total_change_threshold: float = 50.0
    decline_steady_daily_average_decline_threshold: float = 15.0
    decline_steady_decline_min_data_points: int = 5
    decline_steady_decline_weight: float = 0.7

    # decline scoring
    decline_score_critical_threshold: float = 7.5
    decline_score_warning_threshold: float = 5.0

    # relaxed periodicity heuristics
    periodicity_min_points: int = 4
    periodicity_min_variation_coefficient: float = 0.05
    periodicity_relaxed_correlation: float = 0.5

    # minimum fit quality for the total-change trend conditions
    trend_total_change_min_r_squared: float = 0.5

    model_config = {
        "env_prefix": "TRENDSENTRY_",
        "extra": "ignore",
    }


settings = Settings()
