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

Exceptions raised by the tics python APIs

"""
from typing import Optional

from tics import errcodes


class TicsException(Exception):
    """
    tics-tools exceptions
    """

    def __init__(self, message: str, errcode: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errcode = errcode

    def __str__(self) -> str:
        return f"ERROR {self.errcode}: {self.message}"


class ApiCallError(TicsException):
    """
    Non 200 answer of the TICS Viewer, or network failure while calling it
    """

    def __init__(self, message: str, errcode: int = errcodes.TICS_API, status_code: Optional[int] = None) -> None:
        super().__init__(message, errcode)
        self.status_code = status_code


class InvalidViewerUrl(TicsException):
    """
    TICS Viewer URL that can't be turned into an API base URL
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.INVALID_VIEWER_URL)


class MalformedToken(TicsException):
    """Authentication token that does not decode into username:password"""

    def __init__(self, message: str) -> None:
        super().__init__(message, errcodes.MALFORMED_TOKEN)


class UnsupportedMetric(TicsException):
    """Metric name unknown to TICSQServer"""

    def __init__(self, metric: str) -> None:
        super().__init__(f"Metric '{metric}' is not a valid TICS metric", errcodes.UNSUPPORTED_METRIC)
        self.metric = metric
