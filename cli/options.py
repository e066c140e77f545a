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

Cmd line options

"""

import os
import sys
from argparse import ArgumentParser
from typing import Optional, Any

import tics.logging as log
import tics.utilities as util
from tics import errcodes, version, exceptions, config

# Command line options

URL_SHORT = "u"
URL = "url"

USERNAME = "username"
PASSWORD = "password"

TOKEN_SHORT = "t"
TOKEN = "token"

VERBOSE_SHORT = "v"
VERBOSE = "verbosity"

HTTP_TIMEOUT = "httpTimeout"

REPORT_FILE_SHORT = "f"
REPORT_FILE = "file"
FORMAT = "format"

LOGFILE_SHORT = "l"
LOGFILE = "logfile"

PATHS_SHORT = "p"
PATHS = "path"

QUALITY_GATE = "qualityGate"
FAIL_ON_QG = "failIfQualityGateFails"

SETTINGS = "settings"
CONFIG = "config"

SECRET_OPTS = (PASSWORD, TOKEN)


class ArgumentsError(exceptions.TicsException):
    """
    Arguments error
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.ARGS_ERROR)


def __check_file_writeable(file: Optional[str]) -> None:
    """If not stdout, verifies that the chosen output file is writeable"""
    if file and file != "-":
        try:
            with open(file, mode="w", encoding="utf-8"):
                pass
        except (PermissionError, FileNotFoundError) as e:
            raise exceptions.TicsException(f"Can't write to file '{file}': {e}", errcodes.OS_ERROR) from e
        os.remove(file)


def parse_and_check(parser: ArgumentParser, logger_name: Optional[str] = None) -> object:
    """Parses arguments, sets up logging and performs common checks"""
    try:
        args = parser.parse_args()
    except SystemExit:
        sys.exit(errcodes.ARGS_ERROR)

    kwargs = vars(args)
    log.set_logger(filename=kwargs[LOGFILE], logger_name=logger_name)
    log.set_debug_level(kwargs.pop(VERBOSE))
    log.info("tics-tools version %s", version.PACKAGE_VERSION)
    log.debug("CLI arguments = %s", util.json_dump({k: util.redacted_password(v) if k in SECRET_OPTS else v for k, v in kwargs.items()}))
    __check_file_writeable(kwargs.get(REPORT_FILE))
    return args


def load_settings(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Returns the tics-tools settings, command line options win over -D settings that win over config files"""
    overrides = config.parse_settings_args(kwargs.get(SETTINGS))
    if kwargs.get(URL):
        overrides[config.VIEWER_URL] = kwargs[URL]
    if kwargs.get(HTTP_TIMEOUT) is not None:
        overrides[config.HTTP_TIMEOUT] = str(kwargs[HTTP_TIMEOUT])
    if kwargs.get(FAIL_ON_QG):
        overrides[config.FAIL_ON_QG] = "true"
    return config.load(overrides)


def add_optional_arg(parser: ArgumentParser, *args: Any, **kwargs: Any) -> ArgumentParser:
    """Adds an optional argument to the parser"""
    kwargs = {"required": False, "default": None} | kwargs
    if kwargs.get("action") == "store_true":
        kwargs["default"] = False
    parser.add_argument(*args, **kwargs)
    return parser


def set_base_args(desc: str) -> ArgumentParser:
    """Parses options common to all tics-tools scripts"""
    parser = ArgumentParser(description=desc)
    args = [f"-{VERBOSE_SHORT}", f"--{VERBOSE}"]
    parser = add_optional_arg(parser, *args, choices=["WARN", "INFO", "DEBUG"], default="INFO", help="Logging verbosity level")

    args = [f"-{LOGFILE_SHORT}", f"--{LOGFILE}"]
    parser = add_optional_arg(parser, *args, help="Define location of logfile, logs are only sent to stderr if not set")
    return parser


def set_common_args(desc: str) -> ArgumentParser:
    """Parses options common to all tics-tools scripts connecting to a TICS Viewer"""
    parser = set_base_args(desc)
    args = [f"-{URL_SHORT}", f"--{URL}"]
    help_str = """URL of the TICS Viewer, e.g. http://www.example.com:42506/tiobeweb/TICS,
        default is environment variable $TICS_VIEWER_URL, then the viewer.url setting"""
    parser = add_optional_arg(parser, *args, default=os.getenv("TICS_VIEWER_URL", None), help=help_str)

    parser = add_optional_arg(parser, f"--{USERNAME}", help="TICS Viewer user name, for viewers that require authentication")
    parser = add_optional_arg(parser, f"--{PASSWORD}", help="TICS Viewer password")

    args = [f"-{TOKEN_SHORT}", f"--{TOKEN}"]
    help_str = "TICS Viewer authentication token, default is environment variable $TICSAUTHTOKEN"
    parser = add_optional_arg(parser, *args, help=help_str)

    args = [f"--{HTTP_TIMEOUT}"]
    parser = add_optional_arg(parser, *args, type=int, help="HTTP timeout for requests to the TICS Viewer, 300 by default (in seconds)")
    parser = add_settings_arg(parser)
    return parser


def set_output_file_args(parser: ArgumentParser, help_str: Optional[str] = None, allowed_formats: tuple[str, ...] = ("json", "html")) -> ArgumentParser:
    """Sets the output file CLI options"""
    help_str = help_str or "Report file, stdout by default"
    parser.add_argument(f"-{REPORT_FILE_SHORT}", f"--{REPORT_FILE}", required=False, default=None, help=help_str)
    if len(allowed_formats) > 1:
        help_str = f"Output format for generated report.\nIf not specified, it is the output file extension if {' or '.join(allowed_formats)}, then {allowed_formats[0]} by default"
        parser = add_optional_arg(parser, f"--{FORMAT}", choices=allowed_formats, help=help_str)
    return parser


def add_settings_arg(parser: ArgumentParser) -> ArgumentParser:
    """Adds the settings argument to the parser"""
    parser.add_argument(
        "-D",
        required=False,
        action="append",
        dest=SETTINGS,
        nargs="*",
        help="Pass configuration settings on command line (-D<setting>=<value>)",
    )
    return parser


def add_config_arg(parser: ArgumentParser, file: str) -> ArgumentParser:
    """Adds the config argument to the parser"""
    help_str = f"Creates the $HOME/{file} configuration file, if not already present or outputs to stdout if it already exist"
    add_optional_arg(parser, f"--{CONFIG}", dest=CONFIG, action="store_true", help=help_str)
    return parser
