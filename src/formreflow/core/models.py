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

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace

# All lengths are millimetres unless a name says otherwise (font sizes are pt).

SCHEMA_TYPE_TABLE = "table"

DEFAULT_TABLE_HEAD = ("Name", "City", "Description")
DEFAULT_TABLE_HEAD_WIDTH_PERCENTAGES = (30.0, 30.0, 40.0)


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class BoxSides:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def uniform(cls, value: float) -> "BoxSides":
        return cls(top=value, right=value, bottom=value, left=value)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


Padding = BoxSides


@dataclass(frozen=True)
class PageGeometry:
    width: float
    height: float
    padding: Padding = field(default_factory=Padding)

    @property
    def usable_width(self) -> float:
        return self.width - self.padding.horizontal

    @property
    def printable_bottom(self) -> float:
        return self.height - self.padding.bottom


@dataclass(frozen=True)
class CellStyle:
    font_name: str | None = None
    alignment: str = "left"
    vertical_alignment: str = "middle"
    font_size: float = 13.0
    line_height: float = 1.0
    character_spacing: float = 0.0
    font_color: str = "#000000"
    background_color: str = ""
    border_color: str = "#888888"
    border_width: BoxSides = field(default_factory=lambda: BoxSides.uniform(0.1))
    padding: BoxSides = field(default_factory=lambda: BoxSides.uniform(5.0))
    alternate_background_color: str | None = None


def default_head_style() -> CellStyle:
    return CellStyle(
        font_color="#ffffff",
        background_color="#2980ba",
        border_color="",
        border_width=BoxSides(),
    )


def default_body_style() -> CellStyle:
    return CellStyle(alternate_background_color="#f5f5f5")


@dataclass(frozen=True)
class Schema:
    type: str
    position: Position
    width: float
    height: float
    content: str | None = None
    # Type-specific attributes this package does not interpret, kept for round trips.
    extra: Mapping[str, object] = field(default_factory=dict)

    @property
    def bottom(self) -> float:
        return self.position.y + self.height

    def moved_to(self, y: float) -> "Schema":
        return replace(self, position=replace(self.position, y=y), extra=dict(self.extra))


@dataclass(frozen=True)
class TableSchema(Schema):
    head: tuple[str, ...] = DEFAULT_TABLE_HEAD
    head_width_percentages: tuple[float, ...] = DEFAULT_TABLE_HEAD_WIDTH_PERCENTAGES
    table_border_width: float = 0.3
    table_border_color: str = "#000000"
    head_styles: CellStyle = field(default_factory=default_head_style)
    body_styles: CellStyle = field(default_factory=default_body_style)


def default_table_schema(*, x: float = 0.0, y: float = 0.0) -> TableSchema:
    return TableSchema(
        type=SCHEMA_TYPE_TABLE,
        position=Position(x=x, y=y),
        width=150.0,
        height=20.0,
        content='[["Alice","New York","Alice is a freelance web designer and developer"],'
        '["Bob","Paris","Bob is a freelance illustrator and graphic designer"]]',
    )


Page = dict[str, Schema]


@dataclass(frozen=True)
class Template:
    """Ordered pages of keyed schemas sharing one page geometry.

    Page dicts keep insertion order, which is the display order of the fields.
    Operations in this package never mutate a template; they build new ones.
    """

    pages: tuple[Page, ...]
    geometry: PageGeometry

    def iter_fields(self) -> Iterator[tuple[int, str, Schema]]:
        for index, page in enumerate(self.pages):
            for key, schema in page.items():
                yield index, key, schema

    def field_keys(self) -> list[str]:
        return [key for _index, key, _schema in self.iter_fields()]

    def field_count(self) -> int:
        return sum(len(page) for page in self.pages)


__all__ = [
    "BoxSides",
    "CellStyle",
    "DEFAULT_TABLE_HEAD",
    "DEFAULT_TABLE_HEAD_WIDTH_PERCENTAGES",
    "Page",
    "PageGeometry",
    "Padding",
    "Position",
    "SCHEMA_TYPE_TABLE",
    "Schema",
    "TableSchema",
    "Template",
    "default_body_style",
    "default_head_style",
    "default_table_schema",
]
