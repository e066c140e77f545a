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

"""tics-tools error codes"""

OK = 0

# HTTP 401
TICS_API_AUTHENTICATION = 1

# HTTP 407
PROXY_AUTHENTICATION = 2

# General TICS Viewer API error
TICS_API = 3

# Viewer URL missing host or section
INVALID_VIEWER_URL = 4

# Incorrect tics-tools CLI argument
ARGS_ERROR = 10

# Quality gate evaluated and did not pass
QUALITY_GATE_FAILED = 11

# Network level failure (connection refused, timeout, DNS)
CONNECTION_ERROR = 14

# Miscellaneous OS errors
OS_ERROR = 15

# TICSAUTHTOKEN does not decode to username:password
MALFORMED_TOKEN = 16

# Metric name passed to the analyzer is unknown
UNSUPPORTED_METRIC = 17
