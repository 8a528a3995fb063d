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

"""Dynamic reflow of form templates whose table fields grow with bound data."""

from __future__ import annotations

from .core.errors import (
    ConfigurationError,
    ContentParseError,
    MeasurementError,
    ReflowError,
    TemplateFormatError,
    UnknownSchemaTypeError,
)
from .core.models import (
    BoxSides,
    CellStyle,
    PageGeometry,
    Position,
    Schema,
    TableSchema,
    Template,
)
from .formats import dump_template, load_bound_input, load_template
from .layout import (
    PluginRegistry,
    ReflowResult,
    SchemaPlugin,
    build_diff_map,
    default_registry,
    normalize,
    reflow,
    reflow_with_diff,
)
from .measure import FpdfTableMeasurer, TableMeasurement

__all__ = [
    "BoxSides",
    "CellStyle",
    "ConfigurationError",
    "ContentParseError",
    "FpdfTableMeasurer",
    "MeasurementError",
    "PageGeometry",
    "PluginRegistry",
    "Position",
    "ReflowError",
    "ReflowResult",
    "Schema",
    "SchemaPlugin",
    "TableMeasurement",
    "TableSchema",
    "Template",
    "TemplateFormatError",
    "UnknownSchemaTypeError",
    "build_diff_map",
    "default_registry",
    "dump_template",
    "load_bound_input",
    "load_template",
    "normalize",
    "reflow",
    "reflow_with_diff",
]
