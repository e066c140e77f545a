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
    Prints the TICSQServer command line of a TICS analysis
"""

import os
from typing import Any

from requests import RequestException

import tics.logging as log
import tics.utilities as util
from tics import errcodes, exceptions, analyzer, auth, install
from tics.proxy import ProxyConfig
from cli import options

TOOL_NAME = "tics-analyze"

PROJECT = "project"
BRANCH = "branchname"
BRANCH_DIR = "branchdir"
TMPDIR = "tmpdir"
CALC = "calc"
RECALC = "recalc"
EXTRA_ARGS = "extraArguments"
TICS_PATH = "ticsPath"
TICS_CONFIGURATION = "ticsConfiguration"
INSTALL_TICS_URL = "installTicsUrl"
WINDOWS = "windows"
MAINTENANCE = "maintenance"
ENV = "env"


def __parse_args(desc: str) -> object:
    """Sets and parses CLI arguments"""
    parser = options.set_base_args(desc)
    parser.add_argument(f"--{PROJECT}", required=True, help="TICS project name")
    options.add_optional_arg(parser, f"--{BRANCH}", help="TICS branch name")
    options.add_optional_arg(parser, f"--{BRANCH_DIR}", help="Branch directory, the root of the sources to analyze")
    options.add_optional_arg(parser, f"--{TMPDIR}", help="Directory for temporary analysis files")
    options.add_optional_arg(parser, f"--{CALC}", help="Comma separated metrics to calculate, e.g. CODINGSTANDARD,LOC")
    options.add_optional_arg(parser, f"--{RECALC}", help="Comma separated metrics to recalculate")
    options.add_optional_arg(parser, f"--{EXTRA_ARGS}", help="Additional TICSQServer arguments")
    options.add_optional_arg(parser, f"--{TICS_PATH}", help="Directory where TICS is installed, TICSQServer is taken from the PATH if not set")
    options.add_optional_arg(parser, f"--{TICS_CONFIGURATION}", help="TICS Viewer configuration URL used to bootstrap the TICS environment")
    options.add_optional_arg(
        parser, f"--{INSTALL_TICS_URL}", help="TICS Viewer API URL returning the Install TICS script, used instead of the configuration URL"
    )
    options.add_optional_arg(parser, f"--{WINDOWS}", action="store_true", help="Build the command for a Windows agent")
    options.add_optional_arg(parser, f"--{MAINTENANCE}", action="store_true", help="Also print the TICSMaintenance command setting the branch directory")
    options.add_optional_arg(
        parser, f"--{ENV}", action="append", default=[], help="KEY=VALUE environment variable, usable as $KEY in the other options. Can be repeated"
    )
    return options.parse_and_check(parser=parser, logger_name=TOOL_NAME)


def __bootstrap_url(kwargs: dict[str, Any]) -> str:
    """Returns the URL the TICS environment is bootstrapped from"""
    if not kwargs[INSTALL_TICS_URL]:
        return kwargs[TICS_CONFIGURATION]
    credentials = auth.lookup_credentials()
    proxy = ProxyConfig.from_environment()
    return install.InstallTicsApiCall(kwargs[INSTALL_TICS_URL], credentials, proxy).retrieve()


def commands(kwargs: dict[str, Any], env: dict[str, str]) -> list[str]:
    """Returns the command lines to run, the TICSQServer one last"""
    windows = kwargs[WINDOWS]
    out = []
    if kwargs[MAINTENANCE]:
        if not kwargs[BRANCH] or not kwargs[BRANCH_DIR]:
            raise options.ArgumentsError(f"--{MAINTENANCE} requires --{BRANCH} and --{BRANCH_DIR}")
        args = analyzer.build_maintenance_command(kwargs[PROJECT], kwargs[BRANCH], kwargs[BRANCH_DIR], env, windows, kwargs[TICS_PATH])
        out.append(analyzer.command_line(args, windows))
    args = analyzer.build_qserver_command(
        kwargs[PROJECT],
        branch=kwargs[BRANCH],
        tmpdir=kwargs[TMPDIR],
        extra_arguments=kwargs[EXTRA_ARGS],
        calc=util.csv_to_list(kwargs[CALC]),
        recalc=util.csv_to_list(kwargs[RECALC]),
        env=env,
        windows=windows,
        branchdir=kwargs[BRANCH_DIR],
        tics_path=kwargs[TICS_PATH],
    )
    bootstrap = analyzer.bootstrap_command(__bootstrap_url(kwargs), windows)
    if bootstrap:
        out.append(analyzer.create_command(bootstrap, args, windows))
    else:
        out.append(analyzer.command_line(args, windows))
    return out


def main() -> None:
    """tics-analyze entry point"""
    start_time = util.start_clock()
    try:
        kwargs = vars(__parse_args("Builds the TICSQServer command line of a TICS analysis"))
        env = dict(os.environ)
        env |= auth.get_env_map(env, "\n".join(kwargs[ENV]))
        for cmd in commands(kwargs, env):
            log.info("Command: %s", cmd)
            print(cmd)
    except exceptions.TicsException as e:
        util.final_exit(e.errcode, e.message)
    except RequestException as e:
        util.final_exit(errcodes.CONNECTION_ERROR, f"Error while connecting to the TICS Viewer: {e}")
    except ValueError as e:
        util.final_exit(errcodes.TICS_API, str(e))
    util.final_exit(errcodes.OK, start_time=start_time)


if __name__ == "__main__":
    main()
