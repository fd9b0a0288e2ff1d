"""
Threshold and weight configurations for the rise and decline engines, along with partial override models that callers can merge onto a base config for a single detection call.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import ClassVar, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, NonNegativeFloat, PositiveFloat, PositiveInt

from config import Settings, settings
from engine.exceptions import InvalidArgument

ConfigT = TypeVar("ConfigT", bound="DetectionConfig")


class RiseOverride(BaseModel):
    """Per-call rise thresholds; ``None`` leaves the base value in place."""

    model_config = ConfigDict(extra="forbid")

    gradual_increase_slope_threshold: Optional[PositiveFloat] = None
    gradual_increase_min_r_squared: Optional[PositiveFloat] = None
    gradual_increase_min_consecutive_increases: Optional[PositiveInt] = None
    gradual_increase_total_change_percent_threshold: Optional[PositiveFloat] = None

    sudden_spike_percentage_change_threshold: Optional[PositiveFloat] = None
    sudden_spike_std_deviation_multiplier: Optional[PositiveFloat] = None
    sudden_spike_min_absolute_change: Optional[NonNegativeFloat] = None

    periodicity_autocorrelation_threshold: Optional[PositiveFloat] = None
    periodicity_max_period_days: Optional[PositiveInt] = None

    score_sudden_spike_weight: Optional[PositiveFloat] = None
    score_gradual_increase_weight: Optional[PositiveFloat] = None
    score_periodic_weight: Optional[PositiveFloat] = None
    score_critical_threshold: Optional[PositiveFloat] = None
    score_warning_threshold: Optional[PositiveFloat] = None


class DeclineOverride(BaseModel):
    """Per-call decline thresholds; ``None`` leaves the base value in place."""

    model_config = ConfigDict(extra="forbid")

    sudden_drop_change_percent_threshold: Optional[PositiveFloat] = None
    sudden_drop_weight: Optional[PositiveFloat] = None
    sudden_drop_std_deviation_multiplier: Optional[PositiveFloat] = None
    sudden_drop_min_absolute_change: Optional[NonNegativeFloat] = None

    steady_decline_r_squared_threshold: Optional[PositiveFloat] = None
    steady_decline_min_consecutive_days: Optional[PositiveInt] = None
    steady_decline_total_change_threshold: Optional[PositiveFloat] = None
    steady_daily_average_decline_threshold: Optional[PositiveFloat] = None
    steady_decline_min_data_points: Optional[PositiveInt] = None
    steady_decline_weight: Optional[PositiveFloat] = None

    score_critical_threshold: Optional[PositiveFloat] = None
    score_warning_threshold: Optional[PositiveFloat] = None


class DetectionConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    settings_prefix: ClassVar[str] = ""
    override_type: ClassVar[Optional[Type[BaseModel]]] = None

    @classmethod
    def from_settings(cls: type[ConfigT], source: Optional[Settings] = None) -> ConfigT:
        source = source or settings
        values = {}
        for name in cls.model_fields:
            key = f"{cls.settings_prefix}{name}"
            if hasattr(source, key):
                values[name] = getattr(source, key)
        return cls(**values)

    def merge(self: ConfigT, override: Optional[BaseModel]) -> ConfigT:
        if override is None:
            return self
        expected = type(self).override_type
        if expected is None or not isinstance(override, expected):
            expected_name = expected.__name__ if expected is not None else "no override"
            raise InvalidArgument(
                f"{type(self).__name__} takes {expected_name}, got {type(override).__name__}"
            )
        return self.model_copy(update=override.model_dump(exclude_none=True))


class RiseConfig(DetectionConfig):
    settings_prefix: ClassVar[str] = "rise_"
    override_type: ClassVar[Optional[Type[BaseModel]]] = RiseOverride

    gradual_increase_slope_threshold: PositiveFloat = 0.25
    gradual_increase_min_r_squared: PositiveFloat = 0.6
    gradual_increase_min_consecutive_increases: PositiveInt = 3
    gradual_increase_total_change_percent_threshold: PositiveFloat = 100.0

    sudden_spike_percentage_change_threshold: PositiveFloat = 100.0
    sudden_spike_std_deviation_multiplier: PositiveFloat = 3.0
    sudden_spike_min_absolute_change: NonNegativeFloat = 10.0

    periodicity_autocorrelation_threshold: PositiveFloat = 0.7
    periodicity_max_period_days: PositiveInt = 7

    score_sudden_spike_weight: PositiveFloat = 10.0
    score_gradual_increase_weight: PositiveFloat = 5.0
    score_periodic_weight: PositiveFloat = 1.0
    score_critical_threshold: PositiveFloat = 7.5
    score_warning_threshold: PositiveFloat = 5.0


class DeclineConfig(DetectionConfig):
    settings_prefix: ClassVar[str] = "decline_"
    override_type: ClassVar[Optional[Type[BaseModel]]] = DeclineOverride

    sudden_drop_change_percent_threshold: PositiveFloat = 30.0
    sudden_drop_weight: PositiveFloat = 0.8
    sudden_drop_std_deviation_multiplier: PositiveFloat = 3.0
    sudden_drop_min_absolute_change: NonNegativeFloat = 10.0

    steady_decline_r_squared_threshold: PositiveFloat = 0.6
    steady_decline_min_consecutive_days: PositiveInt = 3
    steady_decline_total_change_threshold: PositiveFloat = 50.0
    steady_daily_average_decline_threshold: PositiveFloat = 15.0
    steady_decline_min_data_points: PositiveInt = 5
    steady_decline_weight: PositiveFloat = 0.7

    score_critical_threshold: PositiveFloat = 7.5
    score_warning_threshold: PositiveFloat = 5.0


def merge(
    base: Union[RiseConfig, DeclineConfig],
    override: Optional[Union[RiseOverride, DeclineOverride]],
) -> Union[RiseConfig, DeclineConfig]:
    return base.merge(override)
