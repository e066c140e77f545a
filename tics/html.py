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

    HTML rendering of metrics reports and quality gate results

"""
from __future__ import annotations

import html
from typing import Optional, Iterable, Union

from tics import formatting
from tics.metric_data import MetricData, Run, DELTA_PREFIX
from tics.qualitygates import QualityGateData, viewer_gate_url

GREEN_FLAG = "/plugin/tics/greenFlag.png"
RED_FLAG = "/plugin/tics/redFlag.png"

_SEPARATORS = {"style": "; ", "data-bind": ", "}


class HtmlTag(object):
    """Immutable HTML tag builder, attributes may have several values"""

    def __init__(self, tag: str, attrs: Optional[dict[str, tuple[str, ...]]] = None) -> None:
        self.tag = tag
        self._attrs = dict(attrs or {})

    def __str__(self) -> str:
        return f"HtmlTag({self.tag})"

    def attr(self, name: str, values: Union[str, Iterable[str]]) -> HtmlTag:
        """Returns a copy of the tag with value(s) appended to attribute name"""
        if isinstance(values, str):
            values = (values,)
        attrs = dict(self._attrs)
        attrs[name] = attrs.get(name, ()) + tuple(values)
        return HtmlTag(self.tag, attrs)

    def attr_if(self, state: bool, name: str, value: str) -> HtmlTag:
        return self.attr(name, value) if state else self

    def open(self) -> str:
        attrs = "".join(f' {k}="{_SEPARATORS.get(k, " ").join(v)}"' for k, v in self._attrs.items())
        return f"<{self.tag}{attrs}>"

    def close(self) -> str:
        return f"</{self.tag}>"

    def open_close(self, inner: str = "") -> str:
        return f"{self.open()}{inner}{self.close()}"


def letter_badge_html(letter: Optional[str]) -> str:
    """Returns the colored badge of a TQI letter, empty string for unknown letters"""
    colors = formatting.letter_badge(letter)
    if colors is None:
        return ""
    bg, fg = colors
    return (
        HtmlTag("span")
        .attr("style", f"color: {fg}")
        .attr("style", f"background-color: {bg}")
        .attr("style", "padding: 0 7px 0 7px")
        .attr("style", "border-radius: 5px")
        .attr("style", "font-weight: bold")
        .attr("style", "text-align: center")
        .attr("style", "box-shadow: 0px 0px 3px #888888")
        .open_close(letter.upper())
    )


def _error_block(message: str) -> str:
    return HtmlTag("p").attr("style", "color: red").open_close(html.escape(message))


def _header(run: Run) -> str:
    th = HtmlTag("th").attr("style", ["text-align: right", "width: 80px", "cursor: help"]).attr("title", html.escape(run.description, quote=True))
    if not run.is_delta():
        return th.open_close(run.name) + '<th style="width: 26px"><!-- Letter --></th>'
    div = HtmlTag("div").attr("style", ["overflow: hidden", "text-overflow: clip", "white-space: nowrap", "width: 80px"])
    return th.open_close(div.open_close("&Delta;" + html.escape(run.name[len(DELTA_PREFIX):])))


def _delta_cell(td: HtmlTag, run: Run, i: int) -> str:
    expression = run.expressions[i] if i < len(run.expressions) else ""
    mv = run.metric_values[i] if i < len(run.metric_values) else None
    if mv is None or (mv.value is None and not mv.formatted_value):
        return td.open_close(formatting.NO_VALUE)
    text, color = formatting.format_delta_value(expression, mv.value)
    # The text is the one of the JSON output, the raw delta only gives the color
    if mv.formatted_value:
        text = html.escape(mv.formatted_value)
    td = td.attr("style", "text-align: right")
    if color == formatting.GRAY:
        return td.open_close(f'<span style="color: {color}">{text}</span>')
    return td.attr_if(color is not None, "style", f"color: {color}").open_close(text)


def render_metric_table(data: MetricData) -> str:
    """Renders the metrics report of a TICS path as an HTML table"""
    title = HtmlTag("h3").open_close(html.escape(data.tics_path))
    if data.is_error():
        return title + _error_block(data.error_message)
    parts = [title, HtmlTag("table").attr("style", ["border-spacing: 0px", "border: 1px solid #CCC"]).open(), "<thead><tr>"]
    parts.append(HtmlTag("th").attr("style", "text-align: left").open_close("Metric"))
    parts += [_header(run) for run in data.runs]
    parts.append("</tr></thead><tbody>")
    for i, name in enumerate(data.metrics):
        td = HtmlTag("td").attr("style", "padding-top: 2px; padding-bottom: 2px;").attr("style", f"background-color: {'#EEE' if i % 2 == 0 else '#FFF'}")
        parts.append("<tr>")
        parts.append(td.open_close(html.escape(name or "")))
        for run in data.runs:
            if run.is_delta():
                parts.append(_delta_cell(td, run, i))
                continue
            mv = run.metric_values[i] if i < len(run.metric_values) else None
            right = td.attr("style", "text-align: right")
            parts.append(right.open_close(html.escape(mv.formatted_value) if mv and mv.formatted_value else formatting.NO_VALUE))
            parts.append(right.open_close(letter_badge_html(mv.letter) if mv else ""))
        parts.append("</tr>")
    parts.append("</tbody></table>")
    return "".join(parts)


def _flag(passed: bool) -> str:
    return f"<img src='{GREEN_FLAG if passed else RED_FLAG}' width='30' height='20'>"


def render_quality_gate(data: QualityGateData, tiobeweb_base_url: str) -> str:
    """Renders a quality gate result: project, message, and the conditions of each gate"""
    if data.error_message is not None:
        return _error_block(data.error_message)
    parts = [f"<p><b>Project:</b> {html.escape(data.project)}/{html.escape(data.branch)}</p>", f"<p>{html.escape(data.message())}</p>"]
    for gate in data.gates():
        div = HtmlTag("div").attr("style", "margin-top: 15px")
        parts.append(div.open())
        parts.append(
            f"<div style='float: right; display: inline;'>{_flag(False)} {gate.nbr_failed()} failed "
            f"<img style='margin-left: 5px' src='{GREEN_FLAG}' width='30' height='20'> {gate.nbr_passed()} passed</div>"
        )
        parts.append(f"<h4 style='margin-bottom: 6px'>{html.escape(gate.name)}</h4>")
        parts.append(div.close())
        table = HtmlTag("table").attr("id", "quality-gate").attr("style", ["border-spacing: 0px", "border-collapse: collapse", "margin-bottom: 20px"])
        parts.append(table.open())
        parts.append("<thead><tr></tr></thead><colgroup><col><col style='width: 100%'><col></colgroup><tbody>")
        td = HtmlTag("td").attr("style", ["padding-top: 2px", "background-color: #FFF", "padding: 4px 5px "])
        for cond in gate.conditions:
            parts.append(HtmlTag("tr").attr("style", "border-top: 1px solid #CCC").open())
            parts.append(td.open_close(_flag(cond.passed)))
            parts.append(td.attr("style", "text-align: left").open_close(html.escape(cond.message)))
            parts.append("</tr>")
        parts.append("</tbody></table>")
    url = viewer_gate_url(tiobeweb_base_url, data)
    if url:
        parts.append(f"<p><a href=\"{url}\">See the quality gate details in the TICS Viewer</a></p>")
    return "".join(parts)
