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

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from ..core.bounds import (
    MAX_BOUND_CONTENT_CHARS,
    MAX_DOCUMENT_BYTES,
    MAX_TABLE_COLUMNS,
    MAX_TABLE_ROWS,
)
from ..core.errors import ContentParseError, TemplateFormatError

MalformedContentPolicy = Literal["error", "empty"]
MALFORMED_CONTENT_POLICIES: tuple[MalformedContentPolicy, ...] = ("error", "empty")

BoundInput = Mapping[str, str]


def load_bound_input(path: str | Path) -> dict[str, str]:
    source = Path(path)
    size = source.stat().st_size
    if size > MAX_DOCUMENT_BYTES:
        raise TemplateFormatError(
            f"input file exceeds MAX_DOCUMENT_BYTES ({MAX_DOCUMENT_BYTES}): {size} bytes"
        )
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TemplateFormatError(f"input file {source} is not valid JSON: {exc}") from exc
    return bound_input_from_dict(data)


def bound_input_from_dict(data: object) -> dict[str, str]:
    """Normalize a decoded input document to key -> serialized content.

    Table values may be given either as the JSON string the template format
    uses or as a nested array; arrays are re-encoded so both spellings bind
    the same way. A null value binds as blank content.
    """
    if not isinstance(data, dict):
        raise TemplateFormatError("input must be an object of field key -> value")
    bound: dict[str, str] = {}
    for key, value in data.items():
        if value is None:
            bound[str(key)] = ""
        elif isinstance(value, str):
            bound[str(key)] = value
        else:
            bound[str(key)] = json.dumps(value, ensure_ascii=False)
    return bound


def parse_table_content(
    key: str,
    value: str | None,
    *,
    malformed: MalformedContentPolicy = "error",
) -> list[list[str]]:
    """Parse a bound table value into a row matrix.

    An absent or blank value is an empty table. A value that is not a JSON
    array of arrays raises ``ContentParseError`` unless ``malformed`` is
    ``"empty"``.
    """
    if value is None or not value.strip():
        return []
    try:
        return _parse_rows(key, value)
    except ContentParseError:
        if malformed == "empty":
            return []
        raise


def _parse_rows(key: str, value: str) -> list[list[str]]:
    if len(value) > MAX_BOUND_CONTENT_CHARS:
        raise ContentParseError(
            key, f"content exceeds MAX_BOUND_CONTENT_CHARS ({MAX_BOUND_CONTENT_CHARS})"
        )
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ContentParseError(key, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(decoded, list):
        raise ContentParseError(key, "expected an array of rows")
    if len(decoded) > MAX_TABLE_ROWS:
        raise ContentParseError(key, f"table exceeds MAX_TABLE_ROWS ({MAX_TABLE_ROWS})")
    rows: list[list[str]] = []
    for index, row in enumerate(decoded):
        if not isinstance(row, list):
            raise ContentParseError(key, f"row {index} is not an array")
        if len(row) > MAX_TABLE_COLUMNS:
            raise ContentParseError(
                key, f"row {index} exceeds MAX_TABLE_COLUMNS ({MAX_TABLE_COLUMNS})"
            )
        rows.append([_cell_text(cell) for cell in row])
    return rows


def _cell_text(cell: object) -> str:
    if cell is None:
        return ""
    if isinstance(cell, str):
        return cell
    return json.dumps(cell, ensure_ascii=False)


def encode_table_content(rows: list[list[str]]) -> str:
    return json.dumps(rows, ensure_ascii=False)


__all__ = [
    "BoundInput",
    "MALFORMED_CONTENT_POLICIES",
    "MalformedContentPolicy",
    "bound_input_from_dict",
    "encode_table_content",
    "load_bound_input",
    "parse_table_content",
]
