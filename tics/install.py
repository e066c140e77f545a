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
"""Retrieval of the Install TICS script URL"""

from typing import Optional

import tics.logging as log
from tics.api_call import ApiCall, DEFAULT_HTTP_TIMEOUT
from tics.auth import Credentials
from tics.proxy import ProxyConfig

_LOGGING_PREFIX = "[TICS Install]"


class InstallTicsApiCall(ApiCall):
    """Calls the viewer configuration API that links to the Install TICS script"""

    def __init__(self, install_tics_url: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None, http_timeout: int = DEFAULT_HTTP_TIMEOUT) -> None:
        super().__init__(_LOGGING_PREFIX, credentials=credentials, proxy=proxy, http_timeout=http_timeout)
        self.url = install_tics_url

    def retrieve(self) -> str:
        """Returns the URL of the Install TICS script

        :raises ApiCallError: if the API does not answer 200
        :raises ValueError: if the answer has no links.installTics
        """
        data = self.get_json(self.url)
        links = data.get("links") if isinstance(data, dict) else None
        install_url = (links or {}).get("installTics")
        if not install_url:
            raise ValueError(f"{_LOGGING_PREFIX} Cannot determine Install TICS API url.")
        log.info("%s Install TICS URL is %s", _LOGGING_PREFIX, install_url)
        return install_url
