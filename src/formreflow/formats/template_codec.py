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

"""JSON codec for templates.

The wire shape is ``{"basePdf": {...}, "schemas": [{key: schema}, ...]}``.
Attributes the model does not interpret are kept in ``Schema.extra`` and
written back unchanged, so decode/encode preserves unknown field types.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..core.bounds import MAX_DOCUMENT_BYTES, MAX_FIELDS_PER_PAGE, MAX_TEMPLATE_PAGES
from ..core.errors import ConfigurationError, TemplateFormatError
from ..core.models import (
    SCHEMA_TYPE_TABLE,
    BoxSides,
    CellStyle,
    PageGeometry,
    Position,
    Schema,
    TableSchema,
    Template,
    default_body_style,
    default_head_style,
)
from ..core.validation import (
    optional_number,
    require_dict,
    require_keys,
    require_list,
    require_number,
    require_str,
    validate_geometry,
)

_BASE_KEYS = ("type", "position", "width", "height", "content")
_TABLE_KEYS = (
    "head",
    "headWidthPercentages",
    "tableBorderWidth",
    "tableBorderColor",
    "headStyles",
    "bodyStyles",
)


def load_template(path: str | Path) -> Template:
    return template_from_dict(_load_json(Path(path), label="template"))


def dump_template(template: Template, path: str | Path) -> None:
    Path(path).write_text(template_to_json(template) + "\n", encoding="utf-8")


def template_to_json(template: Template) -> str:
    return json.dumps(template_to_dict(template), indent=2, ensure_ascii=False)


def template_from_dict(data: object) -> Template:
    root = require_dict(data, label="template")
    require_keys(root, ("basePdf", "schemas"), label="template")
    geometry = _geometry_from_dict(root["basePdf"])
    pages_raw = require_list(root["schemas"], label="template.schemas")
    if len(pages_raw) > MAX_TEMPLATE_PAGES:
        raise TemplateFormatError(
            f"template exceeds MAX_TEMPLATE_PAGES ({MAX_TEMPLATE_PAGES}): {len(pages_raw)} pages"
        )
    pages = []
    for page_index, page_raw in enumerate(pages_raw):
        label = f"template.schemas[{page_index}]"
        page_map = require_dict(page_raw, label=label)
        if len(page_map) > MAX_FIELDS_PER_PAGE:
            raise TemplateFormatError(
                f"{label} exceeds MAX_FIELDS_PER_PAGE ({MAX_FIELDS_PER_PAGE})"
            )
        pages.append(
            {
                str(key): schema_from_dict(value, label=f"{label}.{key}")
                for key, value in page_map.items()
            }
        )
    return Template(pages=tuple(pages), geometry=geometry)


def template_to_dict(template: Template) -> dict[str, object]:
    return {
        "basePdf": _geometry_to_dict(template.geometry),
        "schemas": [
            {key: schema_to_dict(schema) for key, schema in page.items()}
            for page in template.pages
        ],
    }


def schema_from_dict(data: object, *, label: str = "schema") -> Schema:
    raw = require_dict(data, label=label)
    require_keys(raw, ("type", "position", "width", "height"), label=label)
    schema_type = require_str(raw["type"], label=f"{label}.type")
    position_raw = require_dict(raw["position"], label=f"{label}.position")
    require_keys(position_raw, ("x", "y"), label=f"{label}.position")
    position = Position(
        x=require_number(position_raw["x"], label=f"{label}.position.x"),
        y=require_number(position_raw["y"], label=f"{label}.position.y"),
    )
    width = require_number(raw["width"], label=f"{label}.width")
    height = require_number(raw["height"], label=f"{label}.height")
    content = raw.get("content")
    if content is not None:
        content = require_str(content, label=f"{label}.content")

    if schema_type != SCHEMA_TYPE_TABLE:
        extra = {key: value for key, value in raw.items() if key not in _BASE_KEYS}
        return Schema(
            type=schema_type,
            position=position,
            width=width,
            height=height,
            content=content,
            extra=extra,
        )

    extra = {
        key: value
        for key, value in raw.items()
        if key not in _BASE_KEYS and key not in _TABLE_KEYS
    }
    head = tuple(
        str(item) for item in require_list(raw.get("head", []), label=f"{label}.head")
    )
    percentages = tuple(
        require_number(item, label=f"{label}.headWidthPercentages[{index}]")
        for index, item in enumerate(
            require_list(
                raw.get("headWidthPercentages", []), label=f"{label}.headWidthPercentages"
            )
        )
    )
    return TableSchema(
        type=schema_type,
        position=position,
        width=width,
        height=height,
        content=content,
        extra=extra,
        head=head,
        head_width_percentages=percentages,
        table_border_width=optional_number(
            raw.get("tableBorderWidth"), label=f"{label}.tableBorderWidth", default=0.3
        ),
        table_border_color=str(raw.get("tableBorderColor", "#000000")),
        head_styles=_cell_style_from_dict(
            raw.get("headStyles"), label=f"{label}.headStyles", base=default_head_style()
        ),
        body_styles=_cell_style_from_dict(
            raw.get("bodyStyles"), label=f"{label}.bodyStyles", base=default_body_style()
        ),
    )


def schema_to_dict(schema: Schema) -> dict[str, object]:
    payload: dict[str, object] = {
        "type": schema.type,
        "position": {"x": schema.position.x, "y": schema.position.y},
        "width": schema.width,
        "height": schema.height,
    }
    if schema.content is not None:
        payload["content"] = schema.content
    if isinstance(schema, TableSchema):
        payload.update(
            {
                "head": list(schema.head),
                "headWidthPercentages": list(schema.head_width_percentages),
                "tableBorderWidth": schema.table_border_width,
                "tableBorderColor": schema.table_border_color,
                "headStyles": _cell_style_to_dict(schema.head_styles),
                "bodyStyles": _cell_style_to_dict(schema.body_styles),
            }
        )
    payload.update(schema.extra)
    return payload


def _geometry_from_dict(data: object) -> PageGeometry:
    if isinstance(data, str):
        raise ConfigurationError(
            "basePdf must be blank page geometry {width, height, padding}; "
            "embedded base PDFs cannot be reflowed"
        )
    raw = require_dict(data, label="basePdf")
    require_keys(raw, ("width", "height"), label="basePdf")
    padding_raw = require_list(raw.get("padding", [0, 0, 0, 0]), label="basePdf.padding")
    if len(padding_raw) != 4:
        raise TemplateFormatError("basePdf.padding must be [top, right, bottom, left]")
    top, right, bottom, left = (
        require_number(value, label=f"basePdf.padding[{index}]")
        for index, value in enumerate(padding_raw)
    )
    geometry = PageGeometry(
        width=require_number(raw["width"], label="basePdf.width"),
        height=require_number(raw["height"], label="basePdf.height"),
        padding=BoxSides(top=top, right=right, bottom=bottom, left=left),
    )
    return validate_geometry(geometry)


def _geometry_to_dict(geometry: PageGeometry) -> dict[str, object]:
    padding = geometry.padding
    return {
        "width": geometry.width,
        "height": geometry.height,
        "padding": [padding.top, padding.right, padding.bottom, padding.left],
    }


def _sides_from_dict(data: object, *, label: str, default: BoxSides) -> BoxSides:
    if data is None:
        return default
    if isinstance(data, (int, float)) and not isinstance(data, bool):
        return BoxSides.uniform(float(data))
    raw = require_dict(data, label=label)
    return BoxSides(
        top=optional_number(raw.get("top"), label=f"{label}.top", default=0.0),
        right=optional_number(raw.get("right"), label=f"{label}.right", default=0.0),
        bottom=optional_number(raw.get("bottom"), label=f"{label}.bottom", default=0.0),
        left=optional_number(raw.get("left"), label=f"{label}.left", default=0.0),
    )


def _sides_to_dict(sides: BoxSides) -> dict[str, float]:
    return {"top": sides.top, "right": sides.right, "bottom": sides.bottom, "left": sides.left}


def _cell_style_from_dict(data: object, *, label: str, base: CellStyle) -> CellStyle:
    if data is None:
        return base
    raw = require_dict(data, label=label)
    font_name = raw.get("fontName", base.font_name)
    alternate = raw.get("alternateBackgroundColor", base.alternate_background_color)
    return CellStyle(
        font_name=None if font_name is None else str(font_name),
        alignment=str(raw.get("alignment", base.alignment)),
        vertical_alignment=str(raw.get("verticalAlignment", base.vertical_alignment)),
        font_size=optional_number(
            raw.get("fontSize"), label=f"{label}.fontSize", default=base.font_size
        ),
        line_height=optional_number(
            raw.get("lineHeight"), label=f"{label}.lineHeight", default=base.line_height
        ),
        character_spacing=optional_number(
            raw.get("characterSpacing"),
            label=f"{label}.characterSpacing",
            default=base.character_spacing,
        ),
        font_color=str(raw.get("fontColor", base.font_color)),
        background_color=str(raw.get("backgroundColor", base.background_color)),
        border_color=str(raw.get("borderColor", base.border_color)),
        border_width=_sides_from_dict(
            raw.get("borderWidth"), label=f"{label}.borderWidth", default=base.border_width
        ),
        padding=_sides_from_dict(
            raw.get("padding"), label=f"{label}.padding", default=base.padding
        ),
        alternate_background_color=None if alternate is None else str(alternate),
    )


def _cell_style_to_dict(style: CellStyle) -> dict[str, object]:
    payload: dict[str, Any] = {
        "alignment": style.alignment,
        "verticalAlignment": style.vertical_alignment,
        "fontSize": style.font_size,
        "lineHeight": style.line_height,
        "characterSpacing": style.character_spacing,
        "fontColor": style.font_color,
        "backgroundColor": style.background_color,
        "borderColor": style.border_color,
        "borderWidth": _sides_to_dict(style.border_width),
        "padding": _sides_to_dict(style.padding),
    }
    if style.font_name is not None:
        payload["fontName"] = style.font_name
    if style.alternate_background_color is not None:
        payload["alternateBackgroundColor"] = style.alternate_background_color
    return payload


def _load_json(path: Path, *, label: str) -> object:
    size = path.stat().st_size
    if size > MAX_DOCUMENT_BYTES:
        raise TemplateFormatError(
            f"{label} file exceeds MAX_DOCUMENT_BYTES ({MAX_DOCUMENT_BYTES}): {size} bytes"
        )
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TemplateFormatError(f"{label} file {path} is not valid JSON: {exc}") from exc


__all__ = [
    "dump_template",
    "load_template",
    "schema_from_dict",
    "schema_to_dict",
    "template_from_dict",
    "template_to_dict",
    "template_to_json",
]
