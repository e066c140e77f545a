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

    TICS Viewer URL resolution and checks

"""

import re
from typing import Optional
from urllib.parse import urlparse

from requests import RequestException

import tics.logging as log
import tics.utilities as util
from tics import exceptions
from tics.api_call import ApiCall, DEFAULT_HTTP_TIMEOUT
from tics.auth import Credentials
from tics.measures import MeasureApiCall, to_float
from tics.proxy import ProxyConfig

MEASURE_API = "api/public/v1/Measure"
QUALITY_GATE_API = "api/public/v1/QualityGateStatus"
VERSION_API = "api/v1/version"
MINIMUM_VERSION = "2021.4"

VIEWER_URL_PATTERN = re.compile(r"^https?://[^/]+/[^/]+/[^/]+/?$")
VIEWER_URL_EXAMPLE = "http(s)://www.example.com:42506/tiobeweb/TICS"

_LOGGING_PREFIX = "[TICS Version]"


def resolve_base_url(raw_url: str) -> str:
    """Returns the tiobeweb base URL, up to and including the section, of any TICS Viewer URL

    e.g. http://host:42506/TIOBEPortal/TICS/Dashboard -> http://host:42506/tiobeweb/TICS

    :raises InvalidViewerUrl: if the URL has no host or no section
    """
    url = (raw_url or "").rstrip("/")
    parts = url.split("/")
    if len(parts) < 3:
        raise exceptions.InvalidViewerUrl("Missing host name in TICS Viewer URL")
    if len(parts) < 5:
        raise exceptions.InvalidViewerUrl("Missing section name in TICS Viewer URL")
    # Legacy portal name, TIOBEPortal -> tiobeweb
    parts[3] = "tiobeweb"
    return "/".join(parts[0:5])


def measure_api_url(base_url: str) -> str:
    return f"{base_url}/{MEASURE_API}"


def quality_gate_api_url(base_url: str) -> str:
    return f"{base_url}/{QUALITY_GATE_API}"


def version_api_url(base_url: str) -> str:
    return f"{base_url}/{VERSION_API}"


def dashboard_url(base_url: str, tics_path: str) -> str:
    """Returns the viewer dashboard URL of a TICS path"""
    return f"{base_url}/TqiDashboard.html#axes=ClientData({tics_path})"


def check_viewer_url_is_empty(url: Optional[str]) -> Optional[str]:
    return "Field is required" if not url else None


def check_viewer_url_pattern(url: str, pattern: re.Pattern = VIEWER_URL_PATTERN, example: str = VIEWER_URL_EXAMPLE) -> Optional[str]:
    """Returns an error message if the URL does not fully match the pattern, None otherwise"""
    if not pattern.match(url):
        return f"URL should be of the form {example}"
    return None


def check_viewer_url_warnings(url: str) -> Optional[str]:
    """Returns a warning if the viewer host is not publicly accessible"""
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if host in ("localhost", "127.0.0.1"):
        return f"Please provide a publicly accessible host, instead of {host}"
    return None


def check_viewer_accessibility(url: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None) -> Optional[str]:
    """Returns the error message if the viewer Measure API can't be reached, None if it answers"""
    try:
        MeasureApiCall(measure_api_url(resolve_base_url(url)), credentials, proxy).execute(to_float, "HIE://", "none")
    except exceptions.TicsException as e:
        return e.message
    return None


def retrieve_version(base_url: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None, http_timeout: int = DEFAULT_HTTP_TIMEOUT) -> Optional[str]:
    """Returns the TICS Viewer version string, e.g. 2022.1.3"""
    data = ApiCall(_LOGGING_PREFIX, credentials, proxy, http_timeout).get_json(version_api_url(base_url))
    return data.get("version") if isinstance(data, dict) else None


def parse_version(version: str) -> tuple[int, int]:
    """Returns (year, release) of a viewer version

    :raises ValueError: if the version has less than 2 numeric parts
    """
    vers = util.string_to_version(version, digits=2)
    if vers is None:
        raise ValueError(f"Cannot parse: {version}")
    return vers


def is_version_compatible(actual: Optional[str], minimum: str = MINIMUM_VERSION) -> bool:
    """Returns whether a viewer version is at least the minimum, an unknown version is considered compatible"""
    if not actual:
        return True
    return parse_version(actual) >= parse_version(str(minimum))


def check_version_compatibility(
    url: str, minimum: str = MINIMUM_VERSION, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None
) -> Optional[str]:
    """Returns an error message if the viewer is older than the minimum version, None otherwise"""
    try:
        actual = retrieve_version(resolve_base_url(url), credentials, proxy)
        log.info("%s TICS Viewer version is %s", _LOGGING_PREFIX, actual)
        compatible = is_version_compatible(actual, minimum)
    except (exceptions.TicsException, RequestException, ValueError) as e:
        log.warning("%s Can't check TICS Viewer version: %s", _LOGGING_PREFIX, str(e))
        return None
    if not compatible:
        return f"The feature is not supported for version {actual}. It is only available from version {minimum}.x and above."
    return None
