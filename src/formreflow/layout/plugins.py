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

"""Registry of schema types keyed by their ``type`` tag."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..core.errors import UnknownSchemaTypeError
from ..core.models import SCHEMA_TYPE_TABLE, Template
from ..measure.table import TableMeasurer

STATIC_SCHEMA_TYPES = (
    "text",
    "multiVariableText",
    "image",
    "svg",
    "qrcode",
    "japanpost",
    "ean13",
    "ean8",
    "code39",
    "code128",
    "nw7",
    "itf14",
    "upca",
    "upce",
    "gs1datamatrix",
    "pdf417",
    "line",
    "rectangle",
    "ellipse",
    "date",
    "time",
    "dateTime",
    "select",
    "checkbox",
    "radioGroup",
    "signature",
)


@dataclass(frozen=True)
class SchemaPlugin:
    type: str
    content_dependent: bool = False
    # Overrides the measurer passed to a reflow call for this type.
    measure: TableMeasurer | None = None


class PluginRegistry:
    def __init__(self, plugins: Iterable[SchemaPlugin] = ()) -> None:
        self._plugins: dict[str, SchemaPlugin] = {}
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: SchemaPlugin, *, replace: bool = False) -> None:
        if plugin.type in self._plugins and not replace:
            raise ValueError(f"schema type {plugin.type!r} is already registered")
        self._plugins[plugin.type] = plugin

    def get(self, schema_type: str) -> SchemaPlugin:
        try:
            return self._plugins[schema_type]
        except KeyError:
            raise UnknownSchemaTypeError(schema_type) from None

    def __contains__(self, schema_type: object) -> bool:
        return schema_type in self._plugins

    def types(self) -> tuple[str, ...]:
        return tuple(self._plugins)

    def validate(self, template: Template) -> None:
        """Resolve every schema type once; raise for the first unknown tag."""
        for _index, _key, schema in template.iter_fields():
            self.get(schema.type)


def default_registry(measurer: TableMeasurer | None = None) -> PluginRegistry:
    plugins = [SchemaPlugin(type=SCHEMA_TYPE_TABLE, content_dependent=True, measure=measurer)]
    plugins.extend(SchemaPlugin(type=schema_type) for schema_type in STATIC_SCHEMA_TYPES)
    return PluginRegistry(plugins)


__all__ = [
    "PluginRegistry",
    "STATIC_SCHEMA_TYPES",
    "SchemaPlugin",
    "default_registry",
]
