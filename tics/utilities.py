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

"""Utilities for tics-tools"""

from typing import Any, Union, Optional, TextIO
from collections.abc import Generator
import contextlib
import datetime
import json
import re
import sys

from dateutil import parser as date_parser

import tics.logging as log
from tics import errcodes


def convert_string(value: str) -> Union[str, int, float, bool]:
    """Converts strings to corresponding types"""
    new_val: Any = value
    if not isinstance(value, str):
        return value
    if value.lower() in ("yes", "true", "on"):
        new_val = True
    elif value.lower() in ("no", "false", "off"):
        new_val = False
    else:
        try:
            new_val = int(value)
        except ValueError:
            try:
                new_val = float(value)
            except ValueError:
                pass
    return new_val


def csv_to_list(string: Optional[str], separator: str = ",") -> list[str]:
    """Converts a csv string to a list"""
    if isinstance(string, (list, tuple, set)):
        return list(string)
    if not string or re.match(r"^\s*$", string):
        return []
    return [s.strip() for s in string.split(separator)]


def json_dump(jsondata: Union[list[Any], dict[str, Any]], indent: int = 3, sort_keys: bool = False) -> str:
    """JSON dump helper"""
    return json.dumps(jsondata, indent=indent, sort_keys=sort_keys, separators=(",", ": "), ensure_ascii=False)


def string_to_date(string: Optional[str]) -> Optional[datetime.datetime]:
    """Converts an ISO 8601 string, as returned by the TICS Viewer, to a datetime"""
    if not string:
        return None
    try:
        return date_parser.isoparse(string)
    except (ValueError, TypeError):
        log.warning("Can't parse date '%s'", string)
        return None


def to_unix_seconds(date: datetime.datetime) -> int:
    """Converts a datetime to seconds since epoch, naive datetimes are considered UTC"""
    if date.tzinfo is None:
        date = date.replace(tzinfo=datetime.timezone.utc)
    return int(date.timestamp())


def now_iso() -> str:
    """Returns the current UTC time as an ISO 8601 string"""
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def string_to_version(version: Optional[str], digits: int = 2) -> Optional[tuple[int, ...]]:
    """Returns the leading numeric parts of a version string as tuple, e.g. '2021.4.1' -> (2021, 4)"""
    if not version:
        return None
    parts = []
    for p in version.split("."):
        try:
            parts.append(int(p))
        except ValueError:
            continue
    if len(parts) < digits:
        return None
    return tuple(parts[0:digits])


def redacted_password(password: Optional[str]) -> str:
    """Redacts a password or token for security (before printing)"""
    if password is None:
        return "-"
    return re.sub(r"(..).*(..)", r"\1***\2", password) if len(password) > 6 else "***"


def deduct_format(fmt: Optional[str], filename: Optional[str], allowed_formats: tuple[str, ...] = ("json", "html")) -> str:
    """Deducts output format from CLI format and filename"""
    if fmt is None and filename is not None:
        fmt = filename.split(".").pop(-1).lower()
        if fmt == "htm":
            fmt = "html"
    if fmt not in allowed_formats:
        fmt = allowed_formats[0]
    return fmt


@contextlib.contextmanager
def open_file(file: Optional[str] = None, mode: str = "w") -> Generator[TextIO, None, None]:
    """Opens a file if not None or -, otherwise stdout"""
    if file and file != "-":
        fd = open(file=file, mode=mode, encoding="utf-8", newline="")
    else:
        fd = sys.stdout
    try:
        yield fd
    finally:
        if fd is not sys.stdout:
            fd.close()


def start_clock() -> datetime.datetime:
    """Returns the now timestamp"""
    return datetime.datetime.now()


def final_exit(exit_code: int, err_msg: Optional[str] = None, start_time: Optional[datetime.datetime] = None) -> None:
    """Fatal exit with error msg"""
    if exit_code != errcodes.OK:
        log.critical(err_msg)
        print(f"FATAL: {err_msg}", file=sys.stderr)
    if start_time:
        log.info("Total execution time: %s", str(datetime.datetime.now() - start_time))
    sys.exit(exit_code)
