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
from dataclasses import dataclass

from ..core.models import Template
from ..formats.bound_input import MalformedContentPolicy
from ..measure.table import TableMeasurer
from .diff_map import DiffMap, MeasureJobs, build_diff_map
from .normalize import normalize
from .plugins import PluginRegistry


@dataclass(frozen=True)
class ReflowResult:
    template: Template
    diff_map: DiffMap


def reflow(
    template: Template,
    bound_input: Mapping[str, str],
    measurer: TableMeasurer,
    *,
    registry: PluginRegistry | None = None,
    malformed_content: MalformedContentPolicy = "error",
    jobs: MeasureJobs = 1,
) -> Template:
    """Return a copy of template laid out for the bound data."""
    return reflow_with_diff(
        template,
        bound_input,
        measurer,
        registry=registry,
        malformed_content=malformed_content,
        jobs=jobs,
    ).template


def reflow_with_diff(
    template: Template,
    bound_input: Mapping[str, str],
    measurer: TableMeasurer,
    *,
    registry: PluginRegistry | None = None,
    malformed_content: MalformedContentPolicy = "error",
    jobs: MeasureJobs = 1,
) -> ReflowResult:
    diff_map = build_diff_map(
        template,
        bound_input,
        measurer,
        registry=registry,
        malformed_content=malformed_content,
        jobs=jobs,
    )
    return ReflowResult(template=normalize(template, diff_map), diff_map=diff_map)


__all__ = ["ReflowResult", "reflow", "reflow_with_diff"]
