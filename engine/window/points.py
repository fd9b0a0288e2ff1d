"""
Observation type held by the data window: a dated metric value together with the day-over-day and moving-average metrics derived when it enters a window.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from typing import Any, Dict


@dataclass
class Observation:
    date: Date
    value: float
    chain_diff: float = 0.0
    chain_ratio: float = 0.0
    ma_short: float = 0.0
    ma_long: float = 0.0

    def copy(self) -> Observation:
        return Observation(
            date=self.date,
            value=self.value,
            chain_diff=self.chain_diff,
            chain_ratio=self.chain_ratio,
            ma_short=self.ma_short,
            ma_long=self.ma_long,
        )

    def reset_chain(self) -> None:
        self.chain_diff = 0.0
        self.chain_ratio = 0.0

    def set_chain(self, previous_value: float) -> None:
        self.chain_diff = self.value - previous_value
        self.chain_ratio = self.value / previous_value if previous_value != 0 else 0.0

    def to_record(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "value": self.value,
            "chain_diff": self.chain_diff,
            "chain_ratio": self.chain_ratio,
            "ma_short": self.ma_short,
            "ma_long": self.ma_long,
        }

    def to_simple_record(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}
