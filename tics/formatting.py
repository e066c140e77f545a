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
"""Number formatting of TICS metric values and deltas"""

from decimal import Decimal, ROUND_FLOOR, ROUND_UP
from typing import Optional, Union

GREEN = "green"
RED = "red"
GRAY = "#BBB"

ZERO_DELTA = "0.00"
NO_VALUE = "-"

Number = Union[int, float, Decimal]


def is_percentage(expression: Optional[str]) -> bool:
    """TQI metrics (expression starting with tqi) are percentages, all others are counts"""
    return (expression or "").startswith("tqi")


def format_value(expression: Optional[str], value: Optional[Number]) -> str:
    """Formats a metric value: TQI percentages floored to 2 decimals, other metrics as integers

    >>> format_value("tqiComplexity", 1234.5678)
    '1,234.56%'
    >>> format_value("loc", 1234567)
    '1,234,567'
    """
    if value is None:
        return NO_VALUE
    if is_percentage(expression):
        d = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_FLOOR)
        return f"{d:,.2f}%"
    return f"{value:,.0f}"


def compute_delta(expression: Optional[str], now: Optional[Number], prev: Optional[Number]) -> Optional[Decimal]:
    """Returns now - prev, rounded away from zero to 2 decimals for TQI metrics, truncated to integers otherwise"""
    if now is None or prev is None:
        return None
    if is_percentage(expression):
        return Decimal(float(now) - float(prev)).quantize(Decimal("0.01"), rounding=ROUND_UP)
    return Decimal(int(now) - int(prev))


def format_delta_value(expression: Optional[str], delta: Optional[Number]) -> tuple[str, Optional[str]]:
    """Formats an already computed delta and returns it with its text color

    :return: (text, color), color is None when the text has no specific color
    """
    if delta is None:
        return NO_VALUE, None
    if not isinstance(delta, Decimal):
        delta = Decimal(str(delta))
    if delta == 0:
        return ZERO_DELTA, GRAY
    sign = "+" if delta > 0 else ""
    if is_percentage(expression):
        text = f"{sign}{delta.quantize(Decimal('0.01'), rounding=ROUND_UP)}"
        return text, GREEN if delta > 0 else RED
    return f"{sign}{int(delta):,}", None


def format_delta(expression: Optional[str], now: Optional[Number], prev: Optional[Number]) -> tuple[str, Optional[str]]:
    """Formats the delta between 2 values of a metric

    >>> format_delta("tqi", 10.0, 10.0)
    ('0.00', '#BBB')
    >>> format_delta("tqi", 80.004, 80.0)
    ('+0.01', 'green')
    """
    return format_delta_value(expression, compute_delta(expression, now, prev))


# Letter: (background, foreground)
LETTER_COLORS = {
    "A": ("#006400", "white"),
    "B": ("#64AE00", "white"),
    "C": ("#FFFF00", "black"),
    "D": ("#FF950E", "black"),
    "E": ("#FF420E", "white"),
    "F": ("#BE0000", "white"),
}


def letter_badge(letter: Optional[str]) -> Optional[tuple[str, str]]:
    """Returns the (background, foreground) colors of a TQI letter, None for unknown letters"""
    return LETTER_COLORS.get((letter or "").upper())
