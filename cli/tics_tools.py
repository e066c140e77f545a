#!/usr/bin/env python3
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

"""Main entry point for tics-tools"""

from tics import version, errcodes
import tics.utilities as util


def main() -> None:
    """Main entry point for tics-tools"""
    print(
        f"""
tics-tools version {version.PACKAGE_VERSION}
Utilities for the TICS Viewer:
- tics-publish: Publishes the TQI metrics (current values, deltas with the previous run and the latest baseline)
  and the quality gate status of TICS project branches, in JSON or HTML
- tics-analyze: Builds the TICSQServer command line of a TICS analysis
See tools built-in -h help for more documentation
"""
    )
    util.final_exit(errcodes.OK)


if __name__ == "__main__":
    main()
