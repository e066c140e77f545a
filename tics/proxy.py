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

    Proxy selection for TICS Viewer requests

"""

from __future__ import annotations

import os
import re
from typing import Optional, Any, Union
from collections.abc import Iterable
from urllib.parse import urlparse, quote

import tics.logging as log
import tics.utilities as util
from tics import config

# Internal hosts never go through the proxy
IMPLICIT_NO_PROXY_PATTERNS = (re.compile("localhost"), re.compile(r"127\..*"))

PatternList = Iterable[Union[str, re.Pattern]]


def is_proxy_exempted(url: str, no_proxy_patterns: Optional[PatternList] = None) -> bool:
    """Returns whether a URL must bypass the proxy

    :param url: The target URL
    :param no_proxy_patterns: regexps of hosts that bypass the proxy, searched in the host name of the URL only
    :return: True if any pattern, or the implicit localhost and 127.* patterns, matches the host
    """
    host = urlparse(url).hostname or ""
    patterns = [re.compile(p) if isinstance(p, str) else p for p in no_proxy_patterns or ()]
    return any(p.search(host) for p in [*patterns, *IMPLICIT_NO_PROXY_PATTERNS])


def parse_no_proxy_hosts(no_proxy: Optional[str]) -> list[re.Pattern]:
    """Converts a comma or newline separated list of host regexps into compiled patterns"""
    if not no_proxy:
        return []
    return [re.compile(p) for p in util.csv_to_list(str(no_proxy).replace("\n", ",")) if p != ""]


class ProxyConfig(object):
    """Host proxy settings, applied per request"""

    def __init__(
        self, host: str, port: int, user: Optional[str] = None, password: Optional[str] = None, no_proxy_patterns: Optional[PatternList] = None
    ) -> None:
        self.host = host
        self.port = int(port)
        self.user = user
        self.password = password
        self.no_proxy_patterns = [re.compile(p) if isinstance(p, str) else p for p in no_proxy_patterns or ()]

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"

    def is_exempted(self, url: str) -> bool:
        return is_proxy_exempted(url, self.no_proxy_patterns)

    def proxy_url(self) -> str:
        """Returns the proxy URL, with credentials only if both user and password are set"""
        creds = ""
        if self.user and self.password:
            creds = f"{quote(self.user, safe='')}:{quote(self.password, safe='')}@"
        return f"http://{creds}{self.host}:{self.port}"

    def proxies_for(self, url: str) -> Optional[dict[str, str]]:
        """Returns the requests proxies dict to use for a URL, None if the URL is exempted"""
        if self.is_exempted(url):
            log.debug("No proxy used for %s", url)
            return None
        msg = f"Using proxy: {self}"
        if self.user and self.password:
            msg += f" with credentials for {self.user}"
        log.info(msg)
        proxy = self.proxy_url()
        return {"http": proxy, "https": proxy}

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> Optional[ProxyConfig]:
        """Builds the proxy config from tics-tools settings, None if no proxy host is configured"""
        host = settings.get(config.PROXY_HOST)
        if not host:
            return None
        o = cls(
            host=host,
            port=settings.get(config.PROXY_PORT, 8080),
            user=settings.get(config.PROXY_USER),
            password=settings.get(config.PROXY_PASSWORD),
            no_proxy_patterns=parse_no_proxy_hosts(settings.get(config.NO_PROXY_HOSTS)),
        )
        log.info("Found http(s) proxy setting: %s", str(o))
        return o

    @classmethod
    def from_environment(cls, env: Optional[dict[str, str]] = None) -> Optional[ProxyConfig]:
        """Builds the proxy config from HTTPS_PROXY / HTTP_PROXY / NO_PROXY, None if not set"""
        env = os.environ if env is None else env
        proxy = next((env[k] for k in ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy") if env.get(k)), None)
        if not proxy:
            return None
        parsed = urlparse(proxy if "://" in proxy else f"http://{proxy}")
        no_proxy = env.get("NO_PROXY", env.get("no_proxy", ""))
        # NO_PROXY holds host suffixes, not regexps
        patterns = [re.escape(h) for h in util.csv_to_list(no_proxy) if h not in ("", "*")]
        if no_proxy.strip() == "*":
            patterns = [".*"]
        o = cls(host=parsed.hostname, port=parsed.port or 8080, user=parsed.username, password=parsed.password, no_proxy_patterns=patterns)
        log.info("Found http(s) proxy setting in environment: %s", str(o))
        return o
