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

    Builds the TICSQServer and TICSMaintenance command lines of a TICS analysis

"""

import shlex
import subprocess
from typing import Optional, Iterable

import tics.logging as log
from tics import exceptions
from tics.auth import replace_macro

QSERVER = "TICSQServer"
MAINTENANCE = "TICSMaintenance"

METRIC_NAMES = (
    "ABSTRACTINTERPRETATION",
    "ACCUCHANGERATE",
    "ACCUFIXRATE",
    "ACCULINESADDED",
    "ACCULINESCHANGED",
    "ACCULINESDELETED",
    "ALL",
    "AVGCYCLOMATICCOMPLEXITY",
    "BUILDRELATIONS",
    "CHANGEDFILES",
    "CHANGERATE",
    "CODINGSTANDARD",
    "COMPILERWARNING",
    "DEADCODE",
    "DUPLICATEDCODE",
    "ELOC",
    "FANOUT",
    "FINALIZE",
    "FIXRATE",
    "GLOC",
    "INCLUDERELATIONS",
    "INTEGRATIONTESTCOVERAGE",
    "LINESADDED",
    "LINESCHANGED",
    "LINESDELETED",
    "LOC",
    "MAXCYCLOMATICCOMPLEXITY",
    "PREPARE",
    "SECURITY",
    "SYSTEMTESTCOVERAGE",
    "TOTALTESTCOVERAGE",
    "UNITTESTCOVERAGE",
)

_LOGGING_PREFIX = "[TICS Analyzer]"


def _is_not_empty(value: Optional[str]) -> bool:
    return (value or "").strip() != ""


def check_metrics(names: Optional[Iterable[str]]) -> list[str]:
    """Validates metric names and returns them upper-cased, in the TICSQServer metric order

    :raises UnsupportedMetric: if a name is not a TICSQServer metric
    """
    selected = set()
    for name in names or []:
        name = name.strip().upper()
        if name == "":
            continue
        if name not in METRIC_NAMES:
            raise exceptions.UnsupportedMetric(name)
        selected.add(name)
    return [m for m in METRIC_NAMES if m in selected]


def get_tics_executable(tics_path: Optional[str], name: str, windows: bool = False) -> str:
    """Prefixes a TICS command with the TICS installation directory, if any"""
    if windows:
        name += ".exe"
    path = (tics_path or "").strip()
    if path == "":
        return name
    if not path.endswith(("/", "\\")):
        path += "/"
    return path + name


def build_qserver_command(
    project: Optional[str],
    branch: Optional[str] = None,
    tmpdir: Optional[str] = None,
    extra_arguments: Optional[str] = None,
    calc: Optional[Iterable[str]] = None,
    recalc: Optional[Iterable[str]] = None,
    env: Optional[dict[str, str]] = None,
    windows: bool = False,
    branchdir: Optional[str] = None,
    tics_path: Optional[str] = None,
) -> list[str]:
    """Returns the TICSQServer arguments, options with an empty value are omitted

    :param extra_arguments: Additional arguments, tokenized like a shell would
    :param env: Build environment used to substitute $VAR macros in values
    """
    env = env or {}
    args = [get_tics_executable(tics_path, QSERVER, windows)]
    if _is_not_empty(project):
        args += ["-project", replace_macro(project, env)]
    if _is_not_empty(branch):
        args += ["-branchname", replace_macro(branch, env)]
    if _is_not_empty(branchdir):
        args += ["-branchdir", replace_macro(branchdir.strip(), env)]
    if _is_not_empty(tmpdir):
        args += ["-tmpdir", replace_macro(tmpdir.strip(), env)]
    if _is_not_empty(extra_arguments):
        args += shlex.split(replace_macro(extra_arguments.strip(), env), posix=not windows)
    for option, metrics in (("-calc", calc), ("-recalc", recalc)):
        names = check_metrics(metrics)
        if names:
            args += [option, ",".join(names)]
    log.debug("%s TICSQServer command: %s", _LOGGING_PREFIX, str(args))
    return args


def build_maintenance_command(
    project: str, branch: str, branchdir: str, env: Optional[dict[str, str]] = None, windows: bool = False, tics_path: Optional[str] = None
) -> list[str]:
    """Returns the TICSMaintenance arguments that set the branch directory of a project branch"""
    env = env or {}
    return [
        get_tics_executable(tics_path, MAINTENANCE, windows),
        "-project",
        replace_macro(project, env),
        "-branchname",
        replace_macro(branch, env),
        "-branchdir",
        replace_macro(branchdir, env),
    ]


def command_line(args: list[str], windows: bool = False) -> str:
    """Joins arguments into a single command line for the target shell"""
    if windows:
        return subprocess.list2cmdline(args)
    return shlex.join(args)


def bootstrap_command(tics_configuration: Optional[str], windows: bool = False) -> str:
    """Returns the shell snippet that loads the TICS environment from a TICS Viewer configuration URL, or an empty string"""
    url = (tics_configuration or "").strip()
    if not url.startswith(("http://", "https://")):
        return ""
    if windows:
        return (
            "[System.Net.ServicePointManager]::SecurityProtocol = [System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
            f"iex ((New-Object System.Net.WebClient).DownloadString('{url}'))"
        )
    return f". <(curl --silent --show-error '{url}')"


def create_command(bootstrap: str, args: list[str], windows: bool = False) -> str:
    """Wraps a TICSQServer command and its optional bootstrap in a bash or powershell invocation"""
    cmd = command_line(args, windows)
    if windows:
        return f'powershell "{bootstrap}; if ($?) {{ {cmd} }}"'
    separator = " && " if bootstrap else " "
    return f'bash -c "{bootstrap}{separator}{cmd}"'
