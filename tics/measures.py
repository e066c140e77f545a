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

"""Abstraction of the TICS Viewer Measure API (api/public/v1/Measure)"""
from __future__ import annotations

import datetime
import functools
from typing import Optional, Any, Callable

import tics.logging as log
import tics.utilities as util
from tics import formatting
from tics.api_call import ApiCall, DEFAULT_HTTP_TIMEOUT
from tics.auth import Credentials
from tics.proxy import ProxyConfig

METRICS_3_11 = "tqi,tqiTestCoverage,tqiAbstrInt,tqiComplexity,tqiCompWarn,tqiCodingStd,tqiDupCode,tqiFanOut,tqiDeadCode,loc"
METRICS_4_0 = "tqi,tqiTestCoverage,tqiAbstrInt,tqiComplexity,tqiCompWarn,tqiCodingStd,tqiDupCode,tqiFanOut,tqiSecurity,loc"
TQI_VERSION = "tqiVersion"
RUNS = "runs"
BASELINES = "baselines"

_LOGGING_PREFIX = "[TICS Measure]"


@functools.total_ordering
class TqiVersion(object):
    """Version of the TQI definition, ordered on (major, minor)"""

    def __init__(self, major: int, minor: int) -> None:
        self.major = int(major)
        self.minor = int(minor)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def __repr__(self) -> str:
        return f"TqiVersion({self.major}, {self.minor})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TqiVersion):
            return NotImplemented
        return (self.major, self.minor) == (other.major, other.minor)

    def __lt__(self, other: TqiVersion) -> bool:
        return (self.major, self.minor) < (other.major, other.minor)

    def __hash__(self) -> int:
        return hash((self.major, self.minor))


class RunDate(object):
    """A past TICS analysis of a project"""

    def __init__(self, started: str) -> None:
        self.started = started

    def start_date(self) -> Optional[datetime.datetime]:
        return util.string_to_date(self.started)


class Baseline(object):
    """A named historical snapshot of a project"""

    def __init__(self, name: Optional[str], instant: str) -> None:
        self.name = name if name is not None else "?"
        self.instant = instant

    def start_date(self) -> Optional[datetime.datetime]:
        return util.string_to_date(self.instant)


class MetricValue(object):
    """One value of a Measure API answer"""

    def __init__(self, value: Any = None, status: Optional[str] = None, letter: Optional[str] = None, formatted_value: Optional[str] = None) -> None:
        self.value = value
        self.status = status
        self.letter = letter
        self.formatted_value = formatted_value


class Metric(object):
    """Metric description of a Measure API answer"""

    def __init__(self, expression: Optional[str], full_name: Optional[str]) -> None:
        self.expression = expression or ""
        self.full_name = full_name

    def is_percentage(self) -> bool:
        """TQI metrics are percentages, all others are counts"""
        return formatting.is_percentage(self.expression)


class MeasureResponse(object):
    """Part of the Measure API answer used by tics-tools"""

    def __init__(self, data: list[MetricValue], metrics: list[Metric]) -> None:
        self.data = data
        self.metrics = metrics

    @classmethod
    def load(cls, json_data: dict[str, Any], value_kind: Callable[[Any], Any] = lambda v: v) -> MeasureResponse:
        """Creates a response from the decoded JSON, converting each value with value_kind"""
        data = []
        for d in json_data.get("data") or []:
            raw = d.get("value")
            data.append(
                MetricValue(
                    value=None if raw is None else value_kind(raw),
                    status=d.get("status"),
                    letter=d.get("letter"),
                    formatted_value=d.get("formattedValue"),
                )
            )
        metrics = [Metric(m.get("expression"), m.get("fullName")) for m in json_data.get("metrics") or []]
        return cls(data, metrics)

    def first_value(self) -> Any:
        """Returns the value of the first data item, or None"""
        if len(self.data) == 0:
            return None
        return self.data[0].value


def to_float(value: Any) -> Optional[float]:
    """Measure value converter for numeric metrics"""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_tqi_version(value: dict[str, int]) -> TqiVersion:
    """Measure value converter for the tqiVersion metric"""
    return TqiVersion(value.get("major", 0), value.get("minor", 0))


def to_runs(value: list[dict[str, str]]) -> list[RunDate]:
    """Measure value converter for the runs metric"""
    return [RunDate(r.get("started")) for r in value or []]


def to_baselines(value: list[dict[str, str]]) -> list[Baseline]:
    """Measure value converter for the baselines metric"""
    return [Baseline(b.get("name"), b.get("instant")) for b in value or []]


def delta_expression(metrics: str, date: datetime.datetime) -> str:
    """Wraps each metric of a comma separated list as Delta(<metric>,<unix seconds>)"""
    seconds = util.to_unix_seconds(date)
    return ",".join(f"Delta({m},{seconds})" for m in util.csv_to_list(metrics))


class MeasureApiCall(ApiCall):
    """Calls to api/public/v1/Measure"""

    def __init__(
        self, measure_api_url: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None, http_timeout: int = DEFAULT_HTTP_TIMEOUT
    ) -> None:
        if not measure_api_url.endswith("/Measure"):
            raise ValueError(f"Measure API URL {measure_api_url} must end with /Measure")
        super().__init__(_LOGGING_PREFIX, credentials=credentials, proxy=proxy, http_timeout=http_timeout)
        self.url = measure_api_url

    def execute(
        self, value_kind: Callable[[Any], Any], paths: str, metrics: str, date: Optional[datetime.datetime] = None
    ) -> MeasureResponse:
        """Queries metric values

        :param value_kind: Converter of each returned value (to_float, to_tqi_version, to_runs, to_baselines)
        :param paths: TICS path(s) of the node(s), e.g. HIE://project/branch
        :param metrics: Metric expression, comma separated
        :param date: Optional historical date to query, sent as unix seconds
        :raises ApiCallError: if the API does not answer 200
        """
        params = {"nodes": paths, "metrics": metrics}
        if date is not None:
            params["dates"] = str(util.to_unix_seconds(date))
        json_data = self.get_json(self.url, params=params)
        log.debug("Measure answer for %s: %s", metrics, util.json_dump(json_data))
        return MeasureResponse.load(json_data, value_kind)
