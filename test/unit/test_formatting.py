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

""" Value formatting tests """

from decimal import Decimal

from tics import formatting


def test_format_value() -> None:
    """test_format_value"""
    assert formatting.format_value("tqi", None) == "-"
    assert formatting.format_value("tqi", 75.129) == "75.12%"
    assert formatting.format_value("tqiTestCoverage", 100.0) == "100.00%"
    assert formatting.format_value("tqi", 1234.5) == "1,234.50%"
    assert formatting.format_value("loc", 1234567.0) == "1,234,567"
    assert formatting.format_value("loc", 0) == "0"


def test_format_delta() -> None:
    """test_format_delta"""
    assert formatting.format_delta("tqi", 10.0, 10.0) == ("0.00", formatting.GRAY)
    assert formatting.format_delta("loc", 100.0, 100.0) == ("0.00", formatting.GRAY)
    assert formatting.format_delta("tqi", 80.5, 80.0) == ("+0.50", formatting.GREEN)
    assert formatting.format_delta("tqi", 80.0, 80.5) == ("-0.50", formatting.RED)
    assert formatting.format_delta("tqi", 80.001, 80.0) == ("+0.01", formatting.GREEN)
    assert formatting.format_delta("loc", 12000.0, 10000.0) == ("+2,000", None)
    assert formatting.format_delta("loc", 900.9, 1000.2) == ("-100", None)
    assert formatting.format_delta("tqi", None, 10.0) == ("-", None)
    assert formatting.format_delta("tqi", 10.0, None) == ("-", None)


def test_compute_delta() -> None:
    """test_compute_delta"""
    assert formatting.compute_delta("tqi", 80.004, 80.0) == Decimal("0.01")
    assert formatting.compute_delta("tqi", 80.0, 80.004) == Decimal("-0.01")
    assert formatting.compute_delta("loc", 10.9, 5.1) == Decimal(5)


def test_letter_badge() -> None:
    """test_letter_badge"""
    assert formatting.letter_badge("A") == ("#006400", "white")
    assert formatting.letter_badge("c") == ("#FFFF00", "black")
    assert formatting.letter_badge("F") == ("#BE0000", "white")
    assert formatting.letter_badge("Z") is None
    assert formatting.letter_badge(None) is None
