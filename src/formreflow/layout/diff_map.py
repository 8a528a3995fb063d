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

"""Diff map construction.

Every content-dependent field is measured against its bound rows. The
difference between the measured and the declared height is recorded
under the field's original bottom edge; fields further down the page are
shifted by that amount when the template is normalized.
"""

from __future__ import annotations

import concurrent.futures
import math
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from ..core.errors import ConfigurationError, MeasurementError
from ..core.models import SCHEMA_TYPE_TABLE, Schema, TableSchema, Template
from ..core.validation import validate_geometry
from ..formats.bound_input import MalformedContentPolicy, parse_table_content
from ..measure.table import TableMeasurement, TableMeasurer
from .plugins import PluginRegistry

DiffMap = dict[float, float]
MeasureJobs = int | Literal["auto"]

_DEFAULT_WORKERS_CAP = 8


@dataclass(frozen=True)
class _MeasureTask:
    key: str
    schema: TableSchema
    rows: list[list[str]]
    measure: TableMeasurer


def build_diff_map(
    template: Template,
    bound_input: Mapping[str, str],
    measurer: TableMeasurer,
    *,
    registry: PluginRegistry | None = None,
    malformed_content: MalformedContentPolicy = "error",
    jobs: MeasureJobs = 1,
) -> DiffMap:
    """Map each content-dependent field's original bottom edge to its height delta.

    Thresholds that collide keep the delta of the field visited last in
    page order. Every bound value is parsed before anything is measured, and
    any failure aborts the whole call.
    """
    validate_geometry(template.geometry)
    tasks = _collect_tasks(template, bound_input, measurer, registry, malformed_content)
    available_width = template.geometry.usable_width
    measurements = _measure_all(tasks, available_width, jobs)

    diff_map: DiffMap = {}
    for task, measurement in zip(tasks, measurements):
        diff_map[task.schema.bottom] = measurement.height - task.schema.height
    return diff_map


def content_dependent_keys(
    template: Template, *, registry: PluginRegistry | None = None
) -> list[str]:
    return [
        key
        for _index, key, schema in template.iter_fields()
        if _is_content_dependent(schema, registry)
    ]


def _collect_tasks(
    template: Template,
    bound_input: Mapping[str, str],
    measurer: TableMeasurer,
    registry: PluginRegistry | None,
    malformed_content: MalformedContentPolicy,
) -> list[_MeasureTask]:
    tasks: list[_MeasureTask] = []
    for page_index, key, schema in template.iter_fields():
        if not _is_content_dependent(schema, registry):
            continue
        if not isinstance(schema, TableSchema):
            raise ConfigurationError(
                f"field {key!r} on page {page_index + 1} is content dependent "
                f"but has no table attributes"
            )
        plugin_measure = registry.get(schema.type).measure if registry is not None else None
        rows = parse_table_content(key, bound_input.get(key), malformed=malformed_content)
        tasks.append(
            _MeasureTask(key=key, schema=schema, rows=rows, measure=plugin_measure or measurer)
        )
    return tasks


def _is_content_dependent(schema: Schema, registry: PluginRegistry | None) -> bool:
    if registry is None:
        return schema.type == SCHEMA_TYPE_TABLE
    return registry.get(schema.type).content_dependent


def _measure_all(
    tasks: Sequence[_MeasureTask],
    available_width: float,
    jobs: MeasureJobs,
) -> list[TableMeasurement]:
    if not tasks:
        return []

    def run(task: _MeasureTask) -> TableMeasurement:
        return _measure_one(task, available_width)

    workers = resolve_workers(jobs, len(tasks))
    if workers <= 1:
        return [run(task) for task in tasks]
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(run, tasks))


def _measure_one(task: _MeasureTask, available_width: float) -> TableMeasurement:
    try:
        measurement = task.measure(task.schema, task.rows, available_width)
    except MeasurementError as exc:
        if exc.key is None:
            raise MeasurementError(task.key, exc.detail) from exc
        raise
    except (ArithmeticError, LookupError, TypeError, ValueError) as exc:
        raise MeasurementError(task.key, str(exc)) from exc
    for label, value in (
        ("head height", measurement.head_height),
        ("body height", measurement.body_height),
    ):
        if not math.isfinite(value) or value < 0:
            raise MeasurementError(task.key, f"measurer returned invalid {label}: {value}")
    return measurement


def resolve_workers(jobs: MeasureJobs, task_count: int) -> int:
    if task_count <= 1:
        return 1
    cpu = os.cpu_count() or 1
    if jobs == "auto":
        return max(1, min(cpu, _DEFAULT_WORKERS_CAP, task_count))
    if jobs <= 0:
        raise ValueError("measure jobs must be 'auto' or a positive integer")
    return max(1, min(jobs, task_count))


__all__ = [
    "DiffMap",
    "MeasureJobs",
    "build_diff_map",
    "content_dependent_keys",
    "resolve_workers",
]
