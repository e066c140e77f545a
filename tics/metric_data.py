#
# tics-tools
# Copyright (C) 2025 Olivier Korach
# mailto:olivier.korach AT gmail DOT com
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 3 of the License, or (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program; if not, write to the Free Software Foundation,
# Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301, USA.
#

"""Value objects holding the metrics of a TICS path, as produced by the report builder"""
from __future__ import annotations

from typing import Optional, Any

import tics.utilities as util

CURRENT = "Current"
PREVIOUS = "ΔPrevious"
DELTA_PREFIX = "Δ"


class RunMetricValue(object):
    """Value of one metric in one run row"""

    def __init__(self, status: Optional[str], formatted_value: Optional[str], letter: Optional[str], value: Optional[float] = None) -> None:
        self.status = status
        self.formatted_value = formatted_value
        self.letter = letter
        self.value = value  #: Raw numeric value, a delta for delta rows

    def to_json(self) -> dict[str, Any]:
        return {"status": self.status, "formattedValue": self.formatted_value, "letter": self.letter}


class Run(object):
    """A named report row: current values, or deltas with a previous run or a baseline"""

    def __init__(
        self,
        name: str,
        description: str,
        metric_names: list[str],
        metric_values: list[RunMetricValue],
        date: Optional[str],
        expressions: Optional[list[str]] = None,
    ) -> None:
        self.name = name
        self.description = description
        self.metric_names = list(metric_names)
        self.metric_values = list(metric_values)
        self.date = date  #: Date of the run, ISO format
        self.expressions = list(expressions or [])  #: Metric expressions, aligned with metric_names

    def __str__(self) -> str:
        return f"run '{self.name}'"

    def is_delta(self) -> bool:
        return self.name != CURRENT

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "date": self.date,
            "metrics": [{"name": n, **v.to_json()} for n, v in zip(self.metric_names, self.metric_values)],
        }


class MetricData(object):
    """Full metrics report of one TICS path"""

    def __init__(self, metrics: list[str], runs: list[Run], tics_path: str, error_message: Optional[str] = None) -> None:
        if error_message is not None and len(runs) > 0:
            raise ValueError("MetricData with an error message can't have runs")
        self.tics_path = tics_path
        self.metrics = list(metrics)
        self.runs = list(runs)
        self.measurement_date = util.now_iso()
        self.error_message = error_message

    def __str__(self) -> str:
        return f"metrics of '{self.tics_path}'"

    @classmethod
    def error(cls, tics_path: str, message: str) -> MetricData:
        return cls([], [], tics_path, message)

    def is_error(self) -> bool:
        return self.error_message is not None

    def run(self, name: str) -> Optional[Run]:
        """Returns the run row of a given name, or None"""
        return next((r for r in self.runs if r.name == name), None)

    def to_json(self) -> dict[str, Any]:
        return {
            "ticsPath": self.tics_path,
            "measurementDate": self.measurement_date,
            "metrics": self.metrics,
            "runs": [r.to_json() for r in self.runs],
            "errorMessage": self.error_message,
        }
