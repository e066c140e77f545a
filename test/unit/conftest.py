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

""" Test fixtures """

import os
from collections.abc import Generator
import pytest

import utilities as util

TEMP_FILE_ROOT = f"temp.{os.getpid()}"

ENV_VARS = ("TICSAUTHTOKEN", "TICS_VIEWER_URL", "HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy", "NO_PROXY", "no_proxy")


@pytest.fixture(autouse=True)
def run_around_tests(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    util.start_logging()
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def json_file() -> Generator[str]:
    """setup of tests"""
    file = f"{TEMP_FILE_ROOT}.json"
    util.clean(file)
    yield file
    # Teardown: Clean up resources (if any) after the test
    util.clean(file)


@pytest.fixture
def html_file() -> Generator[str]:
    """setup of tests"""
    file = f"{TEMP_FILE_ROOT}.html"
    util.clean(file)
    yield file
    # Teardown: Clean up resources (if any) after the test
    util.clean(file)


@pytest.fixture
def fake_viewer() -> Generator[util.FakeViewer]:
    """A fake TICS Viewer replacing requests.get"""
    fake = util.FakeViewer()
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("tics.api_call.requests.get", fake)
        yield fake
