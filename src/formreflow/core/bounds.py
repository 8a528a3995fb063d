#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

MAX_TEMPLATE_PAGES = 1_000

MAX_FIELDS_PER_PAGE = 2_048

MAX_TABLE_ROWS = 10_000

MAX_TABLE_COLUMNS = 256

MAX_BOUND_CONTENT_CHARS = 4_194_304

MAX_DOCUMENT_BYTES = 33_554_432


__all__ = [
    "MAX_BOUND_CONTENT_CHARS",
    "MAX_DOCUMENT_BYTES",
    "MAX_FIELDS_PER_PAGE",
    "MAX_TABLE_COLUMNS",
    "MAX_TABLE_ROWS",
    "MAX_TEMPLATE_PAGES",
]
