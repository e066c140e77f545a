#!/usr/bin/env python3
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
    Publishes the TQI metrics and the quality gate status of TICS paths
    as JSON or HTML
"""

from typing import Any

from requests import RequestException

import tics.logging as log
import tics.utilities as util
from tics import errcodes, exceptions, config, viewer, report, qualitygates, auth, html
from tics.measures import MeasureApiCall
from tics.proxy import ProxyConfig
from cli import options

TOOL_NAME = "tics-publish"


def __parse_args(desc: str) -> object:
    """Sets and parses CLI arguments"""
    parser = options.set_common_args(desc)
    parser = options.set_output_file_args(parser, allowed_formats=("json", "html"))
    parser.add_argument(
        f"-{options.PATHS_SHORT}",
        f"--{options.PATHS}",
        required=False,
        action="append",
        default=[],
        help="TICS path of the project branch to publish, e.g. HIE://PROJECT/BRANCH. Can be repeated",
    )
    options.add_optional_arg(parser, f"--{options.QUALITY_GATE}", action="store_true", help="Also check the quality gate of each path")
    options.add_optional_arg(
        parser, f"--{options.FAIL_ON_QG}", action="store_true", help=f"Exit with code {errcodes.QUALITY_GATE_FAILED} if a quality gate fails"
    )
    options.add_config_arg(parser, f".{config.CONFIG_NAME}.properties")
    return options.parse_and_check(parser=parser, logger_name=TOOL_NAME)


def __check_url(url: str) -> str:
    """Verifies the TICS Viewer URL and returns the tiobeweb base URL"""
    if (err := viewer.check_viewer_url_is_empty(url)) is not None:
        raise options.ArgumentsError(f"TICS Viewer URL (-{options.URL_SHORT}): {err}")
    if (warning := viewer.check_viewer_url_warnings(url)) is not None:
        log.warning(warning)
    return viewer.resolve_base_url(url)


def __to_json(base_url: str, reports: list[Any], gates: list[Any]) -> str:
    data = {"viewerUrl": base_url, "reports": [], "qualityGates": [g.to_json() for g in gates]}
    for r in reports:
        data["reports"].append({"dashboardUrl": viewer.dashboard_url(base_url, r.tics_path)} | r.to_json())
    return util.json_dump(data)


def __to_html(base_url: str, reports: list[Any], gates: list[Any]) -> str:
    parts = ["<html><body>"]
    for r in reports:
        parts.append(html.render_metric_table(r))
        parts.append(f"<p><a href=\"{viewer.dashboard_url(base_url, r.tics_path)}\">Open the TICS Viewer dashboard</a></p>")
    for g in gates:
        parts.append(html.render_quality_gate(g, base_url))
    parts.append("</body></html>")
    return "".join(parts)


def __write_output(base_url: str, reports: list[Any], gates: list[Any], file: str, fmt: str) -> None:
    text = __to_html(base_url, reports, gates) if fmt == "html" else __to_json(base_url, reports, gates)
    with util.open_file(file) as fd:
        print(text, file=fd)
    log.info("%s report written to %s", fmt.upper(), file or "stdout")


def __check_quality_gates(
    base_url: str, paths: list[str], settings: dict[str, Any], credentials: auth.Credentials, proxy: ProxyConfig
) -> list[qualitygates.QualityGateData]:
    """Checks the quality gate of each path, all gates are in error if the viewer is too old for quality gating"""
    if (err := viewer.check_version_compatibility(base_url, settings[config.MIN_VERSION], credentials, proxy)) is not None:
        log.error("%s, quality gates are not checked", err)
        return [qualitygates.QualityGateData.error(err) for _ in paths]
    qg_url = viewer.quality_gate_api_url(base_url)
    return [qualitygates.check_quality_gate(qg_url, path, credentials, proxy, settings[config.HTTP_TIMEOUT]) for path in paths]


def publish(kwargs: dict[str, Any], settings: dict[str, Any]) -> int:
    """Builds and writes the report of all paths, returns the exit code"""
    base_url = __check_url(settings.get(config.VIEWER_URL))
    if len(kwargs[options.PATHS]) == 0:
        raise options.ArgumentsError(f"At least one TICS path (-{options.PATHS_SHORT}) is required")
    credentials = auth.lookup_credentials(kwargs[options.USERNAME], kwargs[options.PASSWORD], kwargs[options.TOKEN])
    proxy = ProxyConfig.from_settings(settings) or ProxyConfig.from_environment()
    timeout = settings[config.HTTP_TIMEOUT]

    measure_call = MeasureApiCall(viewer.measure_api_url(base_url), credentials, proxy, timeout)
    reports = [report.build_report(measure_call, path) for path in kwargs[options.PATHS]]
    gates = []
    if kwargs[options.QUALITY_GATE]:
        gates = __check_quality_gates(base_url, kwargs[options.PATHS], settings, credentials, proxy)

    fmt = util.deduct_format(kwargs[options.FORMAT], kwargs[options.REPORT_FILE])
    __write_output(base_url, reports, gates, kwargs[options.REPORT_FILE], fmt)

    failed = [g for g in gates if qualitygates.gate_failed(g)]
    for g in failed:
        log.warning("Quality gate failed for %s, see %s", str(g), qualitygates.viewer_gate_url(base_url, g))
    if failed and settings[config.FAIL_ON_QG]:
        return errcodes.QUALITY_GATE_FAILED
    return errcodes.OK


def main() -> None:
    """tics-publish entry point"""
    start_time = util.start_clock()
    try:
        kwargs = vars(__parse_args("Publishes the TQI metrics and quality gate status of TICS project branches"))
        if kwargs[options.CONFIG]:
            config.configure()
            util.final_exit(errcodes.OK)
        settings = options.load_settings(kwargs)
        exit_code = publish(kwargs, settings)
    except exceptions.TicsException as e:
        util.final_exit(e.errcode, e.message)
    except RequestException as e:
        util.final_exit(errcodes.CONNECTION_ERROR, f"Error while connecting to the TICS Viewer: {e}")
    except (PermissionError, FileNotFoundError) as e:
        util.final_exit(errcodes.OS_ERROR, f"OS error while writing report: {e}")
    if exit_code == errcodes.QUALITY_GATE_FAILED:
        util.final_exit(exit_code, "Quality gate failed", start_time=start_time)
    util.final_exit(errcodes.OK, start_time=start_time)


if __name__ == "__main__":
    main()
