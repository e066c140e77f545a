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

    Abstraction of the TICS Viewer quality gate status (api/public/v1/QualityGateStatus)

"""

from __future__ import annotations

import json
from typing import Optional, Any

from requests import RequestException

import tics.logging as log
import tics.utilities as util
from tics import exceptions
from tics.api_call import ApiCall, DEFAULT_HTTP_TIMEOUT
from tics.auth import Credentials
from tics.proxy import ProxyConfig

_LOGGING_PREFIX = "[TICS Quality Gating]"


class Condition(object):
    """One condition of a quality gate"""

    def __init__(self, data: dict[str, Any]) -> None:
        self.passed = bool(data.get("passed", False))
        self.error = bool(data.get("error", False))
        self.message = data.get("message") or ""


class QualityGate(object):
    """One gate of a quality gate status, with its conditions"""

    def __init__(self, data: dict[str, Any]) -> None:
        self.name = data.get("name") or ""
        self.passed = bool(data.get("passed", False))
        self.conditions = [Condition(c) for c in data.get("conditions") or [] if isinstance(c, dict)]

    def nbr_passed(self) -> int:
        return sum(1 for c in self.conditions if c.passed)

    def nbr_failed(self) -> int:
        return len(self.conditions) - self.nbr_passed()


class QualityGateApiResponse(object):
    """Decoded answer of the QualityGateStatus API"""

    def __init__(self, data: dict[str, Any]) -> None:
        self.passed = bool(data.get("passed", False))
        self.message = data.get("message") or ""
        self.url = data.get("url") or ""
        self.gates = [QualityGate(g) for g in data.get("gates") or [] if isinstance(g, dict)]

    @classmethod
    def load(cls, json_data: Any) -> Optional[QualityGateApiResponse]:
        """Returns the response, or None if the JSON is not an object"""
        if not isinstance(json_data, dict):
            log.warning("%s unexpected answer %s", _LOGGING_PREFIX, str(json_data))
            return None
        return cls(json_data)


class QualityGateData(object):
    """Result of a quality gate check"""

    def __init__(
        self, project: Optional[str], branch: Optional[str], api_response: Optional[QualityGateApiResponse], error_message: Optional[str] = None
    ) -> None:
        self.project = project
        self.branch = branch
        self.api_response = api_response
        self.error_message = error_message
        self.measurement_date = util.now_iso()
        #: True only when the API call succeeded and the project passed the quality gate
        self.passed = error_message is None and api_response is not None and api_response.passed

    def __str__(self) -> str:
        return f"quality gate of '{self.project}/{self.branch}'"

    @classmethod
    def error(cls, message: str) -> QualityGateData:
        return cls(None, None, None, message)

    @classmethod
    def success(cls, project: str, branch: str, api_response: Optional[QualityGateApiResponse]) -> QualityGateData:
        return cls(project, branch, api_response, None)

    def gates(self) -> list[QualityGate]:
        return self.api_response.gates if self.api_response else []

    def message(self) -> str:
        return self.api_response.message if self.api_response else ""

    def url(self) -> str:
        return self.api_response.url if self.api_response else ""

    def to_json(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "branch": self.branch,
            "passed": self.passed,
            "message": self.message(),
            "url": self.url(),
            "measurementDate": self.measurement_date,
            "errorMessage": self.error_message,
            "gates": [
                {
                    "name": g.name,
                    "passed": g.passed,
                    "conditions": [{"passed": c.passed, "error": c.error, "message": c.message} for c in g.conditions],
                }
                for g in self.gates()
            ],
        }


def split_tics_path(tics_path: str) -> tuple[str, str]:
    """Splits a TICS path of the form hierarchy://project/branch into (project, branch)

    :raises ValueError: if the path has no :// or no / after the project
    """
    if "://" not in tics_path:
        raise ValueError(f"TICS path '{tics_path}' should be of the form HIE://project/branch")
    project_and_branch = tics_path.split("://", 1)[1]
    if "/" not in project_and_branch:
        raise ValueError(f"TICS path '{tics_path}' has no branch, it should be of the form HIE://project/branch")
    project, branch = project_and_branch.split("/", 1)
    return project, branch


class QualityGateApiCall(ApiCall):
    """Calls to api/public/v1/QualityGateStatus for one project branch"""

    def __init__(
        self,
        quality_gate_url: str,
        tics_path: str,
        credentials: Credentials = None,
        proxy: Optional[ProxyConfig] = None,
        http_timeout: int = DEFAULT_HTTP_TIMEOUT,
    ) -> None:
        super().__init__(_LOGGING_PREFIX, credentials=credentials, proxy=proxy, http_timeout=http_timeout)
        self.project, self.branch = split_tics_path(tics_path)
        self.url = quality_gate_url

    def retrieve(self) -> QualityGateData:
        """Retrieves the quality gate status

        :raises ApiCallError: if the API does not answer 200
        :raises json.JSONDecodeError: if the answer is not JSON
        """
        json_data = self.get_json(self.url, params={"project": self.project, "branch": self.branch})
        return QualityGateData.success(self.project, self.branch, QualityGateApiResponse.load(json_data))


def check_quality_gate(
    quality_gate_url: str, tics_path: str, credentials: Credentials = None, proxy: Optional[ProxyConfig] = None, http_timeout: int = DEFAULT_HTTP_TIMEOUT
) -> QualityGateData:
    """Checks the quality gate of a TICS path, errors are downgraded to a QualityGateData with an error message"""
    try:
        data = QualityGateApiCall(quality_gate_url, tics_path, credentials, proxy, http_timeout).retrieve()
    except (exceptions.TicsException, RequestException, ValueError) as e:
        log.error("%s Error while checking quality gate of %s", _LOGGING_PREFIX, tics_path, exc_info=True)
        msg = e.message if isinstance(e, exceptions.TicsException) else str(e)
        if isinstance(e, json.JSONDecodeError):
            msg = f"Error parsing quality gate answer: {e}"
        return QualityGateData.error(f"An error occurred while retrieving quality gate status: {msg}")
    log.info("%s Quality gate %s", _LOGGING_PREFIX, "passed" if data.passed else "failed")
    return data


def gate_failed(data: QualityGateData) -> bool:
    """Returns True when the gate was evaluated and did not pass, False if it passed or could not be evaluated"""
    return data.error_message is None and not data.passed


def viewer_gate_url(tiobeweb_base_url: str, data: QualityGateData) -> Optional[str]:
    """Returns the absolute viewer URL of the quality gate details, None if unknown"""
    if not data.url():
        return None
    return f"{tiobeweb_base_url}/{data.url()}".replace("(", "%28").replace(")", "%29")
