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

"""Row and column edits on table content.

These are the content changes an editor applies before a reflow pass.
Each function returns new values and leaves its arguments untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..core.models import TableSchema

DEFAULT_NEW_COLUMN_PERCENTAGE = 25.0

Rows = list[list[str]]


def add_row(rows: Sequence[Sequence[str]], column_count: int) -> Rows:
    if column_count < 0:
        raise ValueError("column count must not be negative")
    return [list(row) for row in rows] + [[""] * column_count]


def remove_row(rows: Sequence[Sequence[str]], index: int) -> Rows:
    _check_index(index, len(rows), label="row")
    return [list(row) for position, row in enumerate(rows) if position != index]


def add_column(
    schema: TableSchema,
    rows: Sequence[Sequence[str]],
    *,
    width_percentage: float = DEFAULT_NEW_COLUMN_PERCENTAGE,
) -> tuple[TableSchema, Rows]:
    if not 0 < width_percentage < 100:
        raise ValueError("new column width must be between 0 and 100 percent")
    total = sum(schema.head_width_percentages)
    if total > 0:
        ratio = (100.0 - width_percentage) / total
        scaled = tuple(width * ratio for width in schema.head_width_percentages)
    else:
        scaled = ()
    updated = replace(
        schema,
        head=schema.head + ("",),
        head_width_percentages=scaled + (width_percentage,),
    )
    return updated, [list(row) + [""] for row in rows]


def remove_column(
    schema: TableSchema,
    rows: Sequence[Sequence[str]],
    index: int,
) -> tuple[TableSchema, Rows]:
    _check_index(index, len(schema.head), label="column")
    remaining = [
        width
        for position, width in enumerate(schema.head_width_percentages)
        if position != index
    ]
    total = sum(remaining)
    percentages = tuple((width / total) * 100.0 for width in remaining) if total > 0 else ()
    updated = replace(
        schema,
        head=tuple(label for position, label in enumerate(schema.head) if position != index),
        head_width_percentages=percentages,
    )
    trimmed = [[cell for position, cell in enumerate(row) if position != index] for row in rows]
    return updated, trimmed


def set_cell(rows: Sequence[Sequence[str]], row_index: int, column_index: int, value: str) -> Rows:
    _check_index(row_index, len(rows), label="row")
    _check_index(column_index, len(rows[row_index]), label="column")
    updated = [list(row) for row in rows]
    updated[row_index][column_index] = value
    return updated


def _check_index(index: int, length: int, *, label: str) -> None:
    if not 0 <= index < length:
        raise IndexError(f"{label} index {index} out of range (0..{length - 1})")


__all__ = [
    "DEFAULT_NEW_COLUMN_PERCENTAGE",
    "Rows",
    "add_column",
    "add_row",
    "remove_column",
    "remove_row",
    "set_cell",
]
