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

from collections.abc import Mapping, Sequence

from ..core.errors import ConfigurationError
from ..core.models import Page, PageGeometry, Schema, Template
from ..core.validation import validate_geometry


def normalize(template: Template, diff_map: Mapping[float, float]) -> Template:
    """Shift fields below each threshold and move overflowing fields to the next page.

    Thresholds are applied in ascending order and the last one a field sits
    strictly below decides its placement; deltas are not summed. Shifted
    fields are never re-measured. Pages past the input's page count are only
    created when a field overflows onto them.
    """
    geometry = validate_geometry(template.geometry)
    thresholds = sorted(diff_map.items())
    pages: list[Page] = [{} for _ in template.pages]
    for page_index, page in enumerate(template.pages):
        for key, schema in page.items():
            target_index, placed = place_field(schema, page_index, thresholds, geometry)
            _insert(pages, target_index, key, placed)
    return Template(pages=tuple(pages), geometry=geometry)


def place_field(
    schema: Schema,
    page_index: int,
    thresholds: Sequence[tuple[float, float]],
    geometry: PageGeometry,
) -> tuple[int, Schema]:
    placement = (page_index, schema)
    bottom_limit = geometry.printable_bottom
    padding_top = geometry.padding.top
    for threshold, delta in thresholds:
        if schema.position.y <= threshold:
            continue
        shifted_y = schema.position.y + delta
        if shifted_y + schema.height <= bottom_limit:
            placement = (page_index, schema.moved_to(shifted_y))
        else:
            relocated_y = max(padding_top + shifted_y - bottom_limit, padding_top)
            placement = (page_index + 1, schema.moved_to(relocated_y))
    return placement


def adjacent_duplicate_keys(template: Template) -> list[str]:
    """Keys present on both a page and the page after it.

    A reflow that moves one of these fields onto the next page fails, since
    the target page already holds that key.
    """
    repeated: list[str] = []
    for page, next_page in zip(template.pages, template.pages[1:]):
        repeated.extend(key for key in page if key in next_page and key not in repeated)
    return repeated


def _insert(pages: list[Page], page_index: int, key: str, schema: Schema) -> None:
    if page_index == len(pages):
        pages.append({})
    page = pages[page_index]
    if key in page:
        raise ConfigurationError(
            f"field {key!r} would appear twice on page {page_index + 1}; "
            "keys of fields moved by a reflow must be unique across adjacent pages"
        )
    page[key] = schema


__all__ = ["adjacent_duplicate_keys", "normalize", "place_field"]
