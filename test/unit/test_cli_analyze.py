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

""" tics-analyze tests """

from unittest.mock import patch

import pytest

import utilities as util
from tics import errcodes
from cli import analyze

CMD = "tics-analyze.py --project cpp-game --branchname main --branchdir . --calc LOC,CODINGSTANDARD --recalc FINALIZE,COMPILERWARNING"
EXPECTED = "TICSQServer -project cpp-game -branchname main -branchdir . -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE"


def test_analyze(capsys: pytest.CaptureFixture) -> None:
    """test_analyze"""
    assert util.run_cmd(analyze.main, CMD) == errcodes.OK
    assert capsys.readouterr().out.strip() == EXPECTED


def test_analyze_maintenance(capsys: pytest.CaptureFixture) -> None:
    """test_analyze_maintenance"""
    assert util.run_cmd(analyze.main, f"{CMD} --maintenance --windows --ticsPath /opt/tics") == errcodes.OK
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[0] == "/opt/tics/TICSMaintenance.exe -project cpp-game -branchname main -branchdir ."
    assert lines[1].startswith("/opt/tics/TICSQServer.exe -project cpp-game")


def test_analyze_bootstrap(capsys: pytest.CaptureFixture) -> None:
    """test_analyze_bootstrap"""
    cfg = "http://viewer/tiobeweb/TICS/api/cfg?name=default"
    assert util.run_cmd(analyze.main, f"{CMD} --ticsConfiguration {cfg}") == errcodes.OK
    assert capsys.readouterr().out.strip() == f"bash -c \". <(curl --silent --show-error '{cfg}') && {EXPECTED}\""


def test_analyze_install_tics(capsys: pytest.CaptureFixture) -> None:
    """test_analyze_install_tics"""
    script = "http://viewer/tiobeweb/TICS/api/public/v1/fapi/installtics/Script?platform=linux64"
    with patch("tics.api_call.requests.get", return_value=util.make_response(200, {"links": {"installTics": script}})):
        assert util.run_cmd(analyze.main, f"{CMD} --installTicsUrl http://viewer/tiobeweb/TICS/api/public/v1/fapi/installtics") == errcodes.OK
    assert script in capsys.readouterr().out


def test_analyze_errors() -> None:
    """test_analyze_errors"""
    assert util.run_cmd(analyze.main, f"{CMD} --calc NOTAMETRIC") == errcodes.UNSUPPORTED_METRIC
    assert util.run_cmd(analyze.main, "tics-analyze.py --maintenance --project p") == errcodes.ARGS_ERROR
    assert util.run_cmd(analyze.main, "tics-analyze.py --branchname main") == errcodes.ARGS_ERROR


def test_analyze_env(capsys: pytest.CaptureFixture) -> None:
    """test_analyze_env"""
    cmd = "tics-analyze.py --project $PRJ --tmpdir ${SCRATCH}/tics --env PRJ=cpp-game --env SCRATCH=/scratch"
    assert util.run_cmd(analyze.main, cmd) == errcodes.OK
    assert capsys.readouterr().out.strip() == "TICSQServer -project cpp-game -tmpdir /scratch/tics"
