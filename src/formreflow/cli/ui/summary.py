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

from collections.abc import Mapping

from rich import box
from rich.console import Console
from rich.table import Table

from ...core.models import Template
from ...measure.table import TableMeasurement
from . import build_kv_table, console, panel


def _mm(value: float) -> str:
    return f"{value:.2f}"


def build_diff_table(diff_map: Mapping[float, float]) -> Table:
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("Threshold y (mm)", justify="right")
    table.add_column("Delta (mm)", justify="right")
    for threshold, delta in sorted(diff_map.items()):
        style = "warning" if delta > 0 else "success" if delta < 0 else "muted"
        table.add_row(_mm(threshold), f"[{style}]{delta:+.2f}[/{style}]")
    return table


def build_layout_table(original: Template, adjusted: Template) -> Table:
    before: dict[str, tuple[int, float]] = {
        key: (index, schema.position.y) for index, key, schema in original.iter_fields()
    }
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("Page", justify="right")
    table.add_column("Field")
    table.add_column("Type")
    table.add_column("y (mm)", justify="right")
    table.add_column("Change")
    for index, key, schema in adjusted.iter_fields():
        old_index, old_y = before.get(key, (index, schema.position.y))
        if old_index != index:
            change = f"[moved]page {old_index + 1} -> {index + 1}[/moved]"
        elif old_y != schema.position.y:
            change = f"{schema.position.y - old_y:+.2f}"
        else:
            change = ""
        table.add_row(str(index + 1), key, schema.type, _mm(schema.position.y), change)
    return table


def print_diff_map(diff_map: Mapping[float, float]) -> None:
    if not diff_map:
        console.print("[muted]No content-dependent fields.[/muted]")
        return
    console.print(build_diff_table(diff_map))


def print_reflow_summary(
    original: Template,
    adjusted: Template,
    output: str | None,
    *,
    target: Console | None = None,
) -> None:
    target = target or console
    rows = [
        ("Pages", f"{len(original.pages)} -> {len(adjusted.pages)}"),
        ("Fields", str(adjusted.field_count())),
        ("Output", output or "stdout"),
    ]
    target.print(panel("Reflow summary", build_kv_table(rows)))
    target.print(build_layout_table(original, adjusted))


def print_measurement(key: str, measurement: TableMeasurement, declared_height: float) -> None:
    rows = [
        ("Field", key),
        ("Head height", _mm(measurement.head_height)),
        ("Body height", _mm(measurement.body_height)),
        ("Measured height", _mm(measurement.height)),
        ("Declared height", _mm(declared_height)),
        ("Delta", f"{measurement.height - declared_height:+.2f}"),
        ("Column widths", ", ".join(_mm(width) for width in measurement.column_widths)),
    ]
    console.print(build_kv_table(rows, title="Table measurement"))
    if measurement.row_heights:
        table = Table(box=box.SIMPLE_HEAD)
        table.add_column("Row", justify="right")
        table.add_column("Height (mm)", justify="right")
        for index, height in enumerate(measurement.row_heights):
            table.add_row(str(index + 1), _mm(height))
        console.print(table)


__all__ = [
    "build_diff_table",
    "build_layout_table",
    "print_diff_map",
    "print_measurement",
    "print_reflow_summary",
]
