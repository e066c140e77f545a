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
"""Loads tics-tools configuration from properties files"""

import os
from pathlib import Path
from typing import Optional, Any, Union

import jprops

import tics.logging as log
import tics.utilities as util

CONFIG_NAME = "tics-tools"

VIEWER_URL = "viewer.url"
HTTP_TIMEOUT = "http.timeout"
PROXY_HOST = "proxy.host"
PROXY_PORT = "proxy.port"
PROXY_USER = "proxy.user"
PROXY_PASSWORD = "proxy.password"
NO_PROXY_HOSTS = "proxy.noProxyHosts"
FAIL_ON_QG = "qualitygate.failBuild"
MIN_VERSION = "version.minimum"

_RAW_STRING_KEYS = (VIEWER_URL, PROXY_USER, PROXY_PASSWORD, NO_PROXY_HOSTS, MIN_VERSION)

DEFAULTS = {
    HTTP_TIMEOUT: 300,
    FAIL_ON_QG: False,
    MIN_VERSION: "2021.4",
}


def _load_properties_file(file: Union[str, Path]) -> dict[str, Any]:
    """Loads a properties file"""
    with open(file, encoding="utf-8") as fp:
        log.info("Loading properties config file %s", file)
        return jprops.load_properties(fp) or {}


def load(overrides: Optional[dict[str, Any]] = None, config_name: str = CONFIG_NAME) -> dict[str, Any]:
    """Loads the packaged defaults, then ~/.<config_name>.properties, then ./.<config_name>.properties

    :param overrides: settings given on the command line, they win over any file
    :return: the merged and type converted settings
    """
    files = (
        Path(__file__).parent / f"{config_name}.properties",
        f"{os.path.expanduser('~')}{os.sep}.{config_name}.properties",
        f"{os.getcwd()}{os.sep}.{config_name}.properties",
    )
    settings = dict(DEFAULTS)
    for file in files:
        try:
            settings |= _load_properties_file(file)
        except FileNotFoundError:
            pass
        except PermissionError:
            log.warning("Insufficient permissions to open file %s, configuration will be skipped", file)
    settings |= overrides or {}
    # Versions must stay strings, 2021.10 is not 2021.1
    settings = {k: v if k in _RAW_STRING_KEYS else util.convert_string(v) for k, v in settings.items() if v != ""}
    log.debug("Settings = %s", util.json_dump({k: v for k, v in settings.items() if k != PROXY_PASSWORD}))
    return settings


def parse_settings_args(settings_args: Optional[list[list[str]]]) -> dict[str, str]:
    """Converts -D<key>=<value> command line settings into a dict"""
    settings = {}
    for arg_list in settings_args or []:
        for arg in arg_list:
            key, _, value = arg.partition("=")
            settings[key.strip()] = value.strip()
    return settings


def configure(config_name: str = CONFIG_NAME) -> None:
    """Creates the default ~/.<config_name>.properties, or prints it to stdout if already present"""
    template_file = Path(__file__).parent / f"{config_name}.properties"
    with open(template_file, "r", encoding="utf-8") as fh:
        text = fh.read()

    config_file = f"{os.path.expanduser('~')}{os.sep}.{config_name}.properties"
    if os.path.isfile(config_file):
        log.info("Config file '%s' already exists, sending configuration to stdout", config_file)
        print(text)
    else:
        log.info("Creating file '%s'", config_file)
        with open(config_file, "w", encoding="utf-8") as fh:
            print(text, file=fh)
