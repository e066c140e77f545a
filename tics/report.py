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
"""

    Builds the TQI metrics report of a TICS path: current values and
    deltas with the previous run and the latest baseline

"""

import datetime
from typing import Optional

from bs4 import BeautifulSoup
from requests import RequestException

import tics.logging as log
from tics import exceptions, measures
from tics.formatting import format_value, format_delta_value
from tics.measures import MeasureApiCall, MeasureResponse, Baseline, RunDate, TqiVersion
from tics.metric_data import MetricData, Run, RunMetricValue, CURRENT, PREVIOUS, DELTA_PREFIX

NO_RUNS_YET = "Project has no runs yet"
SECURITY_TQI_VERSION = TqiVersion(4, 0)

_UNSET = object()


def strip_html(text: Optional[str]) -> Optional[str]:
    """Returns the plain text of a possibly HTML formatted value"""
    if text is None:
        return None
    return BeautifulSoup(text, "html.parser").get_text()


def _long_date(date: Optional[datetime.datetime]) -> str:
    return date.strftime("%B %d, %Y %H:%M:%S %Z").strip() if date else "?"


class TqiReportBuilder(object):
    """Assembles the MetricData of one TICS path, one instance per report"""

    def __init__(self, measure_call: MeasureApiCall, tics_path: str) -> None:
        self.measure_call = measure_call
        self.tics_path = tics_path
        self._runs = None
        self._baseline = _UNSET

    def __str__(self) -> str:
        return f"report builder of '{self.tics_path}'"

    def run(self) -> MetricData:
        """Builds the report, errors are downgraded to a MetricData with an error message"""
        try:
            return self.build_report()
        except (exceptions.TicsException, RequestException) as e:
            log.error("Error while building %s", str(self), exc_info=True)
            msg = e.message if isinstance(e, exceptions.TicsException) else str(e)
            return MetricData.error(self.tics_path, f"An error occurred while retrieving metrics: {msg}")

    def build_report(self) -> MetricData:
        """Builds the report

        :raises ApiCallError: if the runs or the current metrics can't be retrieved
        """
        metrics = measures.METRICS_4_0 if self.has_security_metric() else measures.METRICS_3_11
        runs = self.runs()
        if len(runs) == 0:
            log.warning("%s: %s", self.tics_path, NO_RUNS_YET)
            return MetricData.error(self.tics_path, NO_RUNS_YET)

        current = self.measure_call.execute(measures.to_float, self.tics_path, metrics)
        metric_names = [m.full_name for m in current.metrics]
        last_run = runs[-1].start_date()
        expressions = [m.expression for m in current.metrics]
        rows = [self._to_run(CURRENT, f"Last TICS run was at {_long_date(last_run)}", metric_names, expressions, current, last_run)]

        if len(runs) > 1:
            previous_run = runs[-2].start_date()
            desc = f"Delta with previous TICS run at {_long_date(previous_run)}"
            row = self._delta_run(PREVIOUS, desc, metric_names, expressions, metrics, previous_run)
            if row is not None:
                rows.append(row)

        baseline = self.baseline()
        if baseline is not None:
            bl_date = baseline.start_date()
            desc = f"Delta with baseline '{baseline.name}' at {_long_date(bl_date)}"
            row = self._delta_run(f"{DELTA_PREFIX}{baseline.name}", desc, metric_names, expressions, metrics, bl_date)
            if row is not None:
                rows.append(row)

        return MetricData(metric_names, rows, self.tics_path, None)

    def has_security_metric(self) -> bool:
        """Returns whether the TQI definition of the path includes the security metric (TQI version 4.0+)"""
        try:
            version = self.measure_call.execute(measures.to_tqi_version, self.tics_path, measures.TQI_VERSION).first_value()
        except (exceptions.ApiCallError, ValueError, AttributeError) as e:
            log.warning("Can't determine TQI version of %s, using legacy metrics: %s", self.tics_path, str(e))
            return False
        log.debug("TQI version of %s is %s", self.tics_path, str(version))
        return version is not None and version >= SECURITY_TQI_VERSION

    def runs(self) -> list[RunDate]:
        """Returns the past runs of the path, oldest first"""
        if self._runs is None:
            resp = self.measure_call.execute(measures.to_runs, self.tics_path, measures.RUNS)
            self._runs = resp.first_value() or []
        return self._runs

    def baseline(self) -> Optional[Baseline]:
        """Returns the most recent baseline of the path, or None"""
        if self._baseline is _UNSET:
            self._baseline = None
            try:
                baselines = self.measure_call.execute(measures.to_baselines, self.tics_path, measures.BASELINES).first_value()
            except exceptions.ApiCallError as e:
                log.warning("Can't retrieve baselines of %s: %s", self.tics_path, e.message)
                return None
            if baselines:
                self._baseline = baselines[-1]
        return self._baseline

    def _delta_run(
        self, name: str, description: str, metric_names: list[str], expressions: list[str], metrics: str, date: Optional[datetime.datetime]
    ) -> Optional[Run]:
        """Queries the deltas of the metrics since a date, None if that fails"""
        if date is None:
            log.warning("No date for %s of %s, row skipped", name, self.tics_path)
            return None
        try:
            resp = self.measure_call.execute(measures.to_float, self.tics_path, measures.delta_expression(metrics, date))
        except exceptions.ApiCallError as e:
            log.error("Can't retrieve %s of %s, row skipped: %s", name, self.tics_path, e.message, exc_info=True)
            return None
        return self._to_run(name, description, metric_names, expressions, resp, date)

    @staticmethod
    def _to_run(
        name: str, description: str, metric_names: list[str], expressions: list[str], resp: MeasureResponse, date: Optional[datetime.datetime]
    ) -> Run:
        values = []
        for i, v in enumerate(resp.data):
            expression = expressions[i] if i < len(expressions) else ""
            if v.formatted_value is not None:
                text = strip_html(v.formatted_value)
            elif name == CURRENT:
                text = format_value(expression, v.value)
            else:
                text, _ = format_delta_value(expression, v.value)
            values.append(RunMetricValue(v.status, text, v.letter, v.value))
        return Run(name, description, metric_names, values, date.isoformat() if date else None, expressions)


def build_report(measure_call: MeasureApiCall, tics_path: str) -> MetricData:
    """Builds the metrics report of a TICS path, never raises on API errors"""
    return TqiReportBuilder(measure_call, tics_path).run()
