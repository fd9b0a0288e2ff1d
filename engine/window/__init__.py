"""
Sliding window of dated metric observations with derived chain and moving-average metrics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.window.data_window import DataWindow
from engine.window.points import Observation

__all__ = ["DataWindow", "Observation"]
