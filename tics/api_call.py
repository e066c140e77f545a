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

    Base of all TICS Viewer REST API calls

"""

from http import HTTPStatus
from typing import Optional, Any
import json
import re
import time

import requests
from requests import RequestException

import tics.logging as log
from tics import errcodes, exceptions, version
from tics.auth import Credentials
from tics.proxy import ProxyConfig

DEFAULT_HTTP_TIMEOUT = 300

_TICS_TOOLS_AGENT = f"tics-tools {version.PACKAGE_VERSION}"
_HTML_EXCEPTION_RE = re.compile("Exception: ([^\n]+)")


def try_extract_message(body: Optional[str]) -> Optional[str]:
    """Tries to find a human readable error message in the body of a failed TICS Viewer call

    :param body: The HTTP response body
    :return: The first alert message of a JSON error body, or the message of the first
             "Exception: ..." line of an HTML error page, or None if nothing found
    """
    if not body:
        return None
    if body.startswith("{"):
        try:
            alerts = json.loads(body).get("alertMessages") or []
        except (ValueError, AttributeError):
            return None
        if not isinstance(alerts, list) or len(alerts) == 0 or not isinstance(alerts[0], dict):
            return None
        log.error("%s", alerts[0].get("stackTrace"))
        return alerts[0].get("message")

    # HTML body, e.g. when the section does not exist
    m = _HTML_EXCEPTION_RE.search(body)
    return m.group(1) if m else None


class ApiCall(object):
    """Issues authenticated GET requests to a TICS Viewer and classifies the answers"""

    def __init__(self, name: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None, http_timeout: int = DEFAULT_HTTP_TIMEOUT) -> None:
        """
        :param name: Name of the call, used as prefix of error messages
        :param credentials: (username, password) for HTTP basic auth, None for anonymous requests
        :param proxy: Proxy to use, None for direct connections
        :param http_timeout: Connect and read timeout in seconds
        """
        self.name = name
        self.credentials = credentials
        self.proxy = proxy
        self.http_timeout = int(http_timeout)
        self._user_agent = _TICS_TOOLS_AGENT

    def __str__(self) -> str:
        return self.name

    def get(self, url: str, params: Optional[dict[str, str]] = None) -> requests.Response:
        """Makes an HTTP GET request to the TICS Viewer, without checking the status

        :raises ApiCallError: on network failure
        """
        proxies = self.proxy.proxies_for(url) if self.proxy else None
        log.info("%s GET %s %s", self.name, url, str(params or ""))
        start = time.perf_counter_ns()
        try:
            r = requests.get(
                url=url,
                params=params,
                auth=self.credentials,
                proxies=proxies,
                headers={"user-agent": self._user_agent},
                timeout=self.http_timeout,
            )
        except requests.ConnectionError as e:
            log.error("%s connection to %s failed: %s", self.name, url, str(e))
            raise exceptions.ApiCallError(f"{self.name} {e}", errcodes.CONNECTION_ERROR) from e
        except RequestException as e:
            log.error("%s request to %s failed: %s", self.name, url, str(e))
            raise exceptions.ApiCallError(f"{self.name} {type(e).__name__}: {e}", errcodes.CONNECTION_ERROR) from e
        log.debug("GET %s took %d ms", url, (time.perf_counter_ns() - start) // 1000000)
        return r

    def check_status(self, response: requests.Response) -> None:
        """Raises ApiCallError with a human readable message if the response is not 200 OK"""
        code = response.status_code
        if code == HTTPStatus.OK:
            return
        if code == HTTPStatus.UNAUTHORIZED:
            if self.credentials:
                msg = f"{self.name} 401 Unauthorized - Invalid username/password combination"
            else:
                msg = f"{self.name} 401 Unauthorized - Project requires authentication, but no credentials provided"
            raise exceptions.ApiCallError(msg, errcodes.TICS_API_AUTHENTICATION, code)
        if code == HTTPStatus.PROXY_AUTHENTICATION_REQUIRED:
            raise exceptions.ApiCallError(f"{self.name} 407 Proxy Authentication Required", errcodes.PROXY_AUTHENTICATION, code)

        body = response.text
        reason = response.reason or ""
        err = try_extract_message(body)
        if err is not None:
            raise exceptions.ApiCallError(f"{self.name} {code} {reason} - {err}", errcodes.TICS_API, code)
        # The body may be HTML, it must not end up in the report
        log.error("%s %s", self.name, body)
        raise exceptions.ApiCallError(f"{self.name} {code} {reason} - See the build log for a detailed error report.", errcodes.TICS_API, code)

    def get_json(self, url: str, params: Optional[dict[str, str]] = None) -> Any:
        """GETs a TICS Viewer API and returns its decoded JSON body

        :raises ApiCallError: on any non 200 answer or network failure
        :raises json.JSONDecodeError: if a 200 answer is not valid JSON
        """
        r = self.get(url, params)
        self.check_status(r)
        return json.loads(r.text)
