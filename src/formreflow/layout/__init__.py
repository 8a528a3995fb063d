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

"""Dynamic layout reflow: diff map construction, normalization and pagination."""

from .diff_map import DiffMap, MeasureJobs, build_diff_map, content_dependent_keys
from .normalize import adjacent_duplicate_keys, normalize
from .plugins import PluginRegistry, SchemaPlugin, default_registry
from .reflow import ReflowResult, reflow, reflow_with_diff

__all__ = [
    "DiffMap",
    "adjacent_duplicate_keys",
    "MeasureJobs",
    "PluginRegistry",
    "ReflowResult",
    "SchemaPlugin",
    "build_diff_map",
    "content_dependent_keys",
    "default_registry",
    "normalize",
    "reflow",
    "reflow_with_diff",
]
