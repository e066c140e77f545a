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
"""Credentials and build environment helpers"""

import base64
import binascii
import os
import re
from typing import Optional

import tics.logging as log
from tics import exceptions

TICSAUTHTOKEN = "TICSAUTHTOKEN"

Credentials = Optional[tuple[str, str]]

_MALFORMED_TOKEN = "Malformed authentication token. Please make sure you are using a valid token from the TICS Viewer."
_MACRO_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")


def decode_token(token: str) -> tuple[str, str]:
    """Decodes a TICS Viewer auth token into (username, password)

    :raises MalformedToken: if the token is not base64 of exactly <username>:<password>
    """
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise exceptions.MalformedToken(_MALFORMED_TOKEN) from e
    parts = decoded.rstrip(":").split(":")
    if len(parts) != 2:
        raise exceptions.MalformedToken(_MALFORMED_TOKEN)
    return parts[0], parts[1]


def lookup_credentials(username: Optional[str] = None, password: Optional[str] = None, token: Optional[str] = None, env: Optional[dict[str, str]] = None) -> Credentials:
    """Returns the credentials to use, or None for anonymous requests

    Explicit username/password win, then the token, then TICSAUTHTOKEN from the environment
    """
    if username:
        return username, password or ""
    env = os.environ if env is None else env
    token = token or env.get(TICSAUTHTOKEN)
    if not token:
        log.debug("No credentials provided, using anonymous requests")
        return None
    return decode_token(token)


def replace_macro(text: Optional[str], env: dict[str, str]) -> Optional[str]:
    """Replaces $VAR and ${VAR} by their value in env, unknown variables are left untouched"""
    if text is None:
        return None

    def _sub(m: re.Match) -> str:
        name = m.group(1) or m.group(2)
        return env.get(name, m.group(0))

    return _MACRO_RE.sub(_sub, text)


def get_env_map(build_env: dict[str, str], environment_variables: Optional[str]) -> dict[str, str]:
    """Parses KEY=VALUE lines into a dict, values get macros of build_env substituted"""
    out = {}
    for line in re.split(r"\r?\n", environment_variables or ""):
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        out[key.strip()] = replace_macro(value.strip(), build_env)
    return out
