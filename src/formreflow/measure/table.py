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

"""Table height measurement.

A table's declared height in a template is only a placeholder: the real
height depends on the rows bound at render time. The measurer lays the
rows out with fpdf2 text metrics and reports head and body heights in
millimetres.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.errors import MeasurementError
from ..core.models import CellStyle, TableSchema
from .text import PT_TO_MM, font_line_height, split_cell_lines, wrap_lines_to_width

CORE_FONTS = frozenset({"courier", "helvetica", "times", "symbol", "zapfdingbats"})
DEFAULT_FONT = "helvetica"
_CUSTOM_FONT_FAMILY = "formreflow-custom"
_CORE_FONT_ALIASES = {"arial": "helvetica", "timesnewroman": "times"}


@dataclass(frozen=True)
class TableMeasurement:
    head_height: float
    body_height: float
    row_heights: tuple[float, ...] = ()
    column_widths: tuple[float, ...] = ()

    @property
    def height(self) -> float:
        return self.head_height + self.body_height


class TableMeasurer(Protocol):
    def __call__(
        self,
        schema: TableSchema,
        rows: Sequence[Sequence[str]],
        available_width: float,
    ) -> TableMeasurement: ...


def column_widths(schema: TableSchema, table_width: float, column_count: int) -> list[float]:
    if column_count <= 0:
        return []
    percentages = schema.head_width_percentages
    if len(percentages) == column_count and all(value > 0 for value in percentages):
        return [table_width * (value / 100.0) for value in percentages]
    return [table_width / column_count] * column_count


class FpdfTableMeasurer:
    """Measure tables with fpdf2 font metrics.

    Each call builds its own ``FPDF`` instance, so one measurer may be shared
    by concurrent measurements.
    """

    def __init__(self, *, default_font: str = DEFAULT_FONT, font_path: str | Path | None = None):
        normalized = _core_font_name(default_font)
        if normalized is None:
            raise ValueError(f"default font must be a core PDF font, got {default_font!r}")
        self.default_font = normalized
        self.font_path = Path(font_path).expanduser() if font_path else None

    def __call__(
        self,
        schema: TableSchema,
        rows: Sequence[Sequence[str]],
        available_width: float,
    ) -> TableMeasurement:
        table_width = min(float(schema.width), float(available_width))
        if table_width <= 0:
            raise MeasurementError(None, f"table width must be positive, got {table_width}")
        column_count = len(schema.head) or max((len(row) for row in rows), default=0)
        widths = column_widths(schema, table_width, column_count)

        pdf = self._new_pdf()
        try:
            head_height = 0.0
            if schema.head:
                head_height = self._row_height(pdf, schema.head_styles, schema.head, widths)
            row_heights = tuple(
                self._row_height(pdf, schema.body_styles, _fit_row(row, column_count), widths)
                for row in rows
            )
        except FPDFException as exc:
            raise MeasurementError(None, str(exc)) from exc
        return TableMeasurement(
            head_height=head_height,
            body_height=sum(row_heights),
            row_heights=row_heights,
            column_widths=tuple(widths),
        )

    def _new_pdf(self) -> FPDF:
        pdf = FPDF(unit="mm")
        if self.font_path is not None:
            try:
                pdf.add_font(_CUSTOM_FONT_FAMILY, fname=str(self.font_path))
            except (OSError, RuntimeError, FPDFException) as exc:
                raise MeasurementError(None, f"cannot load font {self.font_path}: {exc}") from exc
        return pdf

    def _row_height(
        self,
        pdf: FPDF,
        style: CellStyle,
        cells: Sequence[str],
        widths: Sequence[float],
    ) -> float:
        _check_style(style)
        family = self._font_family(style)
        pdf.set_font(family, size=float(style.font_size))
        spacing_mm = float(style.character_spacing) * PT_TO_MM
        encode = self.font_path is None

        def width_of(text: str) -> float:
            if encode:
                text = text.encode("latin-1", "replace").decode("latin-1")
            return pdf.get_string_width(text) + spacing_mm * len(text)

        line_h = font_line_height(style.font_size, style.line_height)
        height = 0.0
        for text, width in zip(cells, widths):
            text_width = width - style.padding.horizontal
            if text_width <= 0:
                raise MeasurementError(
                    None,
                    f"column width {width:.2f}mm leaves no room for text after padding",
                )
            lines = wrap_lines_to_width(split_cell_lines(text), text_width, width_of)
            height = max(height, len(lines) * line_h + style.padding.vertical)
        return height

    def _font_family(self, style: CellStyle) -> str:
        if self.font_path is not None:
            return _CUSTOM_FONT_FAMILY
        return _core_font_name(style.font_name or "") or self.default_font


def _core_font_name(name: str) -> str | None:
    normalized = name.strip().lower().replace(" ", "").replace("-", "")
    normalized = _CORE_FONT_ALIASES.get(normalized, normalized)
    if normalized in CORE_FONTS:
        return normalized
    return None


def _check_style(style: CellStyle) -> None:
    if style.font_size <= 0:
        raise MeasurementError(None, f"font size must be positive, got {style.font_size}")
    if style.line_height <= 0:
        raise MeasurementError(None, f"line height must be positive, got {style.line_height}")
    padding = style.padding
    if min(padding.top, padding.right, padding.bottom, padding.left) < 0:
        raise MeasurementError(None, "cell padding must not be negative")


def _fit_row(row: Sequence[str], column_count: int) -> list[str]:
    cells = [str(cell) for cell in row[:column_count]]
    if len(cells) < column_count:
        cells.extend([""] * (column_count - len(cells)))
    return cells


__all__ = [
    "CORE_FONTS",
    "DEFAULT_FONT",
    "FpdfTableMeasurer",
    "TableMeasurement",
    "TableMeasurer",
    "column_widths",
]
