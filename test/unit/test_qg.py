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

""" Quality gate tests """

from unittest.mock import patch

import pytest

import utilities as util
from tics import qualitygates
from tics.qualitygates import QualityGateApiCall, QualityGateData, QualityGateApiResponse

QG_URL = f"{util.VIEWER_URL}/api/public/v1/QualityGateStatus"


def test_split_tics_path() -> None:
    """test_split_tics_path"""
    assert qualitygates.split_tics_path("HIE://PROJECT/BRANCH") == ("PROJECT", "BRANCH")
    assert qualitygates.split_tics_path("HIE://PROJECT/feature/login") == ("PROJECT", "feature/login")
    for path in ("PROJECT/BRANCH", "HIE://PROJECT"):
        with pytest.raises(ValueError):
            qualitygates.split_tics_path(path)


def test_retrieve(fake_viewer: util.FakeViewer) -> None:
    """test_retrieve"""
    data = QualityGateApiCall(QG_URL, "HIE://PROJECT/feature/login").retrieve()
    assert fake_viewer.calls[-1][1] == {"project": "PROJECT", "branch": "feature/login"}
    assert data.passed
    assert data.error_message is None
    assert data.gates()[0].nbr_passed() == 2
    assert not qualitygates.gate_failed(data)


def test_failed_gate(fake_viewer: util.FakeViewer) -> None:
    """test_failed_gate"""
    fake_viewer.quality_gate = util.QG_FAILED
    data = qualitygates.check_quality_gate(QG_URL, util.TICS_PATH)
    assert not data.passed
    assert qualitygates.gate_failed(data)
    assert [(g.nbr_failed(), g.nbr_passed()) for g in data.gates()] == [(0, 1), (1, 1)]
    assert data.to_json()["gates"][1]["name"] == "Security"


def test_lenient_parsing() -> None:
    """test_lenient_parsing"""
    resp = QualityGateApiResponse.load({"gates": [{"conditions": [{}]}]})
    assert not resp.passed
    assert resp.gates[0].nbr_failed() == 1
    assert QualityGateApiResponse.load([]) is None
    data = QualityGateData.success("P", "B", None)
    assert not data.passed
    assert data.gates() == []


def test_errors() -> None:
    """test_errors"""
    data = qualitygates.check_quality_gate(QG_URL, "PROJECT/BRANCH")
    assert data.error_message.startswith("An error occurred while retrieving quality gate status: ")
    assert not data.passed
    assert not qualitygates.gate_failed(data)

    with patch("tics.api_call.requests.get", return_value=util.make_response(503, "<html></html>", "Service Unavailable")):
        data = qualitygates.check_quality_gate(QG_URL, util.TICS_PATH)
    assert "503 Service Unavailable" in data.error_message
    assert not qualitygates.gate_failed(data)

    with patch("tics.api_call.requests.get", return_value=util.make_response(200, "not json")):
        data = qualitygates.check_quality_gate(QG_URL, util.TICS_PATH)
    assert data.error_message is not None
    assert not qualitygates.gate_failed(data)


def test_viewer_gate_url() -> None:
    """test_viewer_gate_url"""
    data = QualityGateData.success("PROJECT", "BRANCH", QualityGateApiResponse.load(util.QG_PASSED))
    url = qualitygates.viewer_gate_url(util.VIEWER_URL, data)
    assert url == f"{util.VIEWER_URL}/QualityGateDetails.html#id=%28project:PROJECT,branch:BRANCH%29"
    assert qualitygates.viewer_gate_url(util.VIEWER_URL, QualityGateData.error("boom")) is None
