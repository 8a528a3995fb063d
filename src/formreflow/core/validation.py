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

import math
from typing import Any

from .errors import ConfigurationError, TemplateFormatError
from .models import PageGeometry


def require_dict(value: object, *, label: str) -> dict[str, Any]:
    """Validate that value is a JSON object."""
    if not isinstance(value, dict):
        raise TemplateFormatError(f"{label} must be an object")
    return value


def require_list(value: object, *, label: str) -> list[Any]:
    """Validate that value is a JSON array."""
    if not isinstance(value, list):
        raise TemplateFormatError(f"{label} must be a list")
    return value


def require_keys(mapping: dict[str, Any], keys: tuple[str, ...], *, label: str) -> None:
    for key in keys:
        if key not in mapping:
            raise TemplateFormatError(f"{label}.{key} is required")


def require_number(value: object, *, label: str) -> float:
    """Validate that value is a finite number (bools are rejected)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TemplateFormatError(f"{label} must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise TemplateFormatError(f"{label} must be finite")
    return number


def optional_number(value: object, *, label: str, default: float) -> float:
    if value is None:
        return default
    return require_number(value, label=label)


def require_str(value: object, *, label: str) -> str:
    if not isinstance(value, str):
        raise TemplateFormatError(f"{label} must be a string")
    return value


def validate_geometry(geometry: PageGeometry) -> PageGeometry:
    """Reject page geometry that leaves no printable area."""
    if geometry.width <= 0 or geometry.height <= 0:
        raise ConfigurationError(
            f"page size must be positive (got {geometry.width} x {geometry.height})"
        )
    padding = geometry.padding
    if min(padding.top, padding.right, padding.bottom, padding.left) < 0:
        raise ConfigurationError("page padding must not be negative")
    if padding.vertical >= geometry.height:
        raise ConfigurationError(
            f"vertical padding ({padding.vertical}) must be less than page height "
            f"({geometry.height})"
        )
    if padding.horizontal >= geometry.width:
        raise ConfigurationError(
            f"horizontal padding ({padding.horizontal}) must be less than page width "
            f"({geometry.width})"
        )
    return geometry
