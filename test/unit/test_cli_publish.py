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

""" tics-publish tests """

import json
from collections.abc import Generator

import utilities as util
from tics import errcodes
from cli import publish
import cli.options as opt

CMD = f"tics-publish.py -{opt.URL_SHORT} {util.VIEWER_URL} -{opt.PATHS_SHORT} {util.TICS_PATH}"


def test_publish_json(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_publish_json"""
    assert util.run_cmd(publish.main, f"{CMD} --{opt.REPORT_FILE} {json_file}") == errcodes.OK
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert data["viewerUrl"] == util.VIEWER_URL
    assert data["reports"][0]["ticsPath"] == util.TICS_PATH
    assert data["reports"][0]["dashboardUrl"].endswith(f"ClientData({util.TICS_PATH})")
    assert [r["name"] for r in data["reports"][0]["runs"]] == ["Current", "ΔPrevious", "ΔRelease2"]
    assert data["qualityGates"] == []


def test_publish_html(fake_viewer: util.FakeViewer, html_file: Generator[str]) -> None:
    """test_publish_html"""
    assert util.run_cmd(publish.main, f"{CMD} --{opt.QUALITY_GATE} -{opt.REPORT_FILE_SHORT} {html_file}") == errcodes.OK
    assert util.file_contains(html_file, "<table")
    assert util.file_contains(html_file, "&Delta;Previous")
    assert util.file_contains(html_file, "Project passed 1 quality gate")


def test_publish_token(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_publish_token"""
    assert util.run_cmd(publish.main, f"{CMD} -{opt.TOKEN_SHORT} {util.TOKEN} --{opt.REPORT_FILE} {json_file}") == errcodes.OK
    assert fake_viewer.calls[-1][2]["auth"] == (util.USER, util.PASSWORD)


def test_quality_gate_failed(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_quality_gate_failed"""
    fake_viewer.quality_gate = util.QG_FAILED
    cmd = f"{CMD} --{opt.QUALITY_GATE} --{opt.REPORT_FILE} {json_file}"
    assert util.run_cmd(publish.main, cmd) == errcodes.OK
    assert util.run_cmd(publish.main, f"{cmd} --{opt.FAIL_ON_QG}") == errcodes.QUALITY_GATE_FAILED
    assert util.run_cmd(publish.main, f"{cmd} -Dqualitygate.failBuild=true") == errcodes.QUALITY_GATE_FAILED
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert data["qualityGates"][0]["passed"] is False


def test_quality_gate_error_does_not_fail(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_quality_gate_error_does_not_fail"""
    fake_viewer.quality_gate = "not a json object"
    cmd = f"{CMD} --{opt.QUALITY_GATE} --{opt.FAIL_ON_QG} --{opt.REPORT_FILE} {json_file}"
    assert util.run_cmd(publish.main, cmd) == errcodes.OK


def test_no_runs(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_no_runs"""
    fake_viewer.runs = []
    assert util.run_cmd(publish.main, f"{CMD} --{opt.REPORT_FILE} {json_file}") == errcodes.OK
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert data["reports"][0]["errorMessage"] == "Project has no runs yet"


def test_old_viewer(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_old_viewer"""
    fake_viewer.version = "2020.3.1"
    assert util.run_cmd(publish.main, f"{CMD} --{opt.REPORT_FILE} {json_file}") == errcodes.OK
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert [r["name"] for r in data["reports"][0]["runs"]] == ["Current", "ΔPrevious", "ΔRelease2"]
    assert not any(url.endswith("api/v1/version") for url, _, _ in fake_viewer.calls)

    cmd = f"{CMD} --{opt.QUALITY_GATE} --{opt.FAIL_ON_QG} --{opt.REPORT_FILE} {json_file}"
    assert util.run_cmd(publish.main, cmd) == errcodes.OK
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert len(data["reports"][0]["runs"]) == 3
    assert data["qualityGates"][0]["passed"] is False
    assert data["qualityGates"][0]["errorMessage"].startswith("The feature is not supported for version 2020.3.1")
    assert not any(url.endswith("QualityGateStatus") for url, _, _ in fake_viewer.calls)


def test_unparseable_viewer_version(fake_viewer: util.FakeViewer, json_file: Generator[str]) -> None:
    """test_unparseable_viewer_version"""
    fake_viewer.version = "2022"
    assert util.run_cmd(publish.main, f"{CMD} --{opt.QUALITY_GATE} --{opt.REPORT_FILE} {json_file}") == errcodes.OK
    with open(json_file, encoding="utf-8") as fd:
        data = json.load(fd)
    assert data["qualityGates"][0]["passed"] is True


def test_bad_args() -> None:
    """test_bad_args"""
    assert util.run_cmd(publish.main, f"tics-publish.py -{opt.PATHS_SHORT} {util.TICS_PATH}") == errcodes.ARGS_ERROR
    assert util.run_cmd(publish.main, f"tics-publish.py -{opt.URL_SHORT} {util.VIEWER_URL}") == errcodes.ARGS_ERROR
    assert util.run_cmd(publish.main, f"{CMD} --notAnOption") == errcodes.ARGS_ERROR
    assert util.run_cmd(publish.main, "tics-publish.py -u http://host/tiobeweb -p HIE://P/B") == errcodes.INVALID_VIEWER_URL


def test_malformed_token() -> None:
    """test_malformed_token"""
    assert util.run_cmd(publish.main, f"{CMD} -{opt.TOKEN_SHORT} xyz") == errcodes.MALFORMED_TOKEN
