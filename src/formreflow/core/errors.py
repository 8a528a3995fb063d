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

"""Error kinds raised by a reflow call.

All of them derive from ``ValueError`` so the CLI boundary reports them
like any other invalid template/data pair.
"""

from __future__ import annotations


class ReflowError(ValueError):
    """Base class for template/data errors that abort a reflow."""


class ContentParseError(ReflowError):
    def __init__(self, key: str, detail: str) -> None:
        super().__init__(f"field {key!r}: cannot parse bound content: {detail}")
        self.key = key
        self.detail = detail


class MeasurementError(ReflowError):
    def __init__(self, key: str | None, detail: str) -> None:
        prefix = f"field {key!r}: " if key else ""
        super().__init__(f"{prefix}measurement failed: {detail}")
        self.key = key
        self.detail = detail


class ConfigurationError(ReflowError):
    """Inconsistent page geometry or template structure."""


class TemplateFormatError(ConfigurationError):
    """The template document does not have the expected shape."""


class UnknownSchemaTypeError(ConfigurationError):
    def __init__(self, schema_type: str) -> None:
        super().__init__(f"no plugin registered for schema type {schema_type!r}")
        self.schema_type = schema_type


__all__ = [
    "ConfigurationError",
    "ContentParseError",
    "MeasurementError",
    "ReflowError",
    "TemplateFormatError",
    "UnknownSchemaTypeError",
]
