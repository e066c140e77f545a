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

""" TICS analysis command line tests """

import pytest

from tics import analyzer, exceptions

CALC = ["LOC", "CODINGSTANDARD"]
RECALC = ["FINALIZE", "compilerwarning"]
CONFIG_URL = "http://192.168.1.204:42506/tiobeweb/TICS/api/cfg?name=default"
WIN_BRANCHDIR = r"D:\Development\dev_test\projects\cpp-game-vs"
WIN_TMPDIR = r"D:\Development\dev_test\tmp\33733-tmpdir"
LINUX_BRANCHDIR = "/home/leila/development/dev-test/projects/game-gcc"
LINUX_TMPDIR = "/home/leila/development/dev-test/tmp/33733-tmpdir"


def test_check_metrics() -> None:
    """test_check_metrics"""
    assert len(analyzer.METRIC_NAMES) == 32
    assert analyzer.check_metrics(["loc", " CodingStandard", "", "LOC"]) == ["CODINGSTANDARD", "LOC"]
    assert analyzer.check_metrics(None) == []
    with pytest.raises(exceptions.UnsupportedMetric) as e:
        analyzer.check_metrics(["LOC", "FOO"])
    assert e.value.metric == "FOO"


def test_tics_executable() -> None:
    """test_tics_executable"""
    assert analyzer.get_tics_executable(None, analyzer.QSERVER) == "TICSQServer"
    assert analyzer.get_tics_executable("", analyzer.QSERVER, windows=True) == "TICSQServer.exe"
    assert analyzer.get_tics_executable("/opt/tics/bin", analyzer.QSERVER) == "/opt/tics/bin/TICSQServer"
    assert analyzer.get_tics_executable("C:\\TICS\\", analyzer.MAINTENANCE, windows=True) == "C:\\TICS\\TICSMaintenance.exe"


def test_qserver_windows() -> None:
    """test_qserver_windows"""
    args = analyzer.build_qserver_command("cpp-game-vs", "master", WIN_TMPDIR, None, CALC, RECALC, windows=True, branchdir=WIN_BRANCHDIR)
    expected = f"TICSQServer.exe -project cpp-game-vs -branchname master -branchdir {WIN_BRANCHDIR} -tmpdir {WIN_TMPDIR} -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE"
    assert analyzer.command_line(args, windows=True) == expected
    args = analyzer.build_qserver_command("cpp-game-vs", "master", WIN_TMPDIR, None, CALC, None, windows=True, branchdir=WIN_BRANCHDIR)
    assert analyzer.command_line(args, windows=True).endswith(f"-tmpdir {WIN_TMPDIR} -calc CODINGSTANDARD,LOC")
    args = analyzer.build_qserver_command("cpp-game", "", "", None, CALC, RECALC, windows=True)
    assert analyzer.command_line(args, windows=True) == "TICSQServer.exe -project cpp-game -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE"


def test_qserver_linux() -> None:
    """test_qserver_linux"""
    args = analyzer.build_qserver_command("game-gcc", "master", LINUX_TMPDIR, None, CALC, RECALC, branchdir=LINUX_BRANCHDIR)
    expected = f"TICSQServer -project game-gcc -branchname master -branchdir {LINUX_BRANCHDIR} -tmpdir {LINUX_TMPDIR} -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE"
    assert analyzer.command_line(args) == expected
    args = analyzer.build_qserver_command("game-gcc", "master", LINUX_TMPDIR, None, None, RECALC, branchdir=LINUX_BRANCHDIR)
    assert analyzer.command_line(args).endswith(f"-tmpdir {LINUX_TMPDIR} -recalc COMPILERWARNING,FINALIZE")


def test_extra_args_and_macros() -> None:
    """test_extra_args_and_macros"""
    env = {"WORKSPACE": "/var/ws", "JOB": "nightly"}
    args = analyzer.build_qserver_command(
        "proj-$JOB", "main", " $WORKSPACE/tmp ", '-log 9 -viewer "$WORKSPACE/my dir"', ["LOC"], None, env=env, tics_path="/opt/tics"
    )
    assert args == [
        "/opt/tics/TICSQServer",
        "-project",
        "proj-nightly",
        "-branchname",
        "main",
        "-tmpdir",
        "/var/ws/tmp",
        "-log",
        "9",
        "-viewer",
        "/var/ws/my dir",
        "-calc",
        "LOC",
    ]


def test_unsupported_metric() -> None:
    """test_unsupported_metric"""
    with pytest.raises(exceptions.UnsupportedMetric):
        analyzer.build_qserver_command("p", calc=["NOTAMETRIC"])


def test_maintenance() -> None:
    """test_maintenance"""
    args = analyzer.build_maintenance_command("proj", "$BRANCH", "/src", {"BRANCH": "main"})
    assert args == ["TICSMaintenance", "-project", "proj", "-branchname", "main", "-branchdir", "/src"]


def test_create_command_linux() -> None:
    """test_create_command_linux"""
    args = analyzer.build_qserver_command("cpp-game", "main", "", None, CALC, RECALC, branchdir=".")
    bootstrap = analyzer.bootstrap_command(CONFIG_URL)
    cmd = analyzer.create_command(bootstrap, args)
    assert cmd == (
        f"bash -c \". <(curl --silent --show-error '{CONFIG_URL}') && TICSQServer -project cpp-game -branchname main "
        "-branchdir . -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE\""
    )
    cmd = analyzer.create_command("", args)
    assert cmd == 'bash -c " TICSQServer -project cpp-game -branchname main -branchdir . -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE"'


def test_create_command_windows() -> None:
    """test_create_command_windows"""
    args = analyzer.build_qserver_command("cpp-game", "main", "", None, CALC, RECALC, windows=True, branchdir=".")
    bootstrap = analyzer.bootstrap_command(CONFIG_URL, windows=True)
    cmd = analyzer.create_command(bootstrap, args, windows=True)
    assert cmd == (
        'powershell "[System.Net.ServicePointManager]::SecurityProtocol = [System.Net.ServicePointManager]::SecurityProtocol -bor 3072; '
        f"iex ((New-Object System.Net.WebClient).DownloadString('{CONFIG_URL}')); if ($?) {{ TICSQServer.exe -project cpp-game "
        '-branchname main -branchdir . -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE }"'
    )
    cmd = analyzer.create_command("", args, windows=True)
    assert cmd == 'powershell "; if ($?) { TICSQServer.exe -project cpp-game -branchname main -branchdir . -calc CODINGSTANDARD,LOC -recalc COMPILERWARNING,FINALIZE }"'
    assert analyzer.bootstrap_command("default", windows=True) == ""
