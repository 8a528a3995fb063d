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

from dataclasses import dataclass
from typing import Literal

Section = Literal["head", "body"]


@dataclass(frozen=True)
class CellPosition:
    row_index: int
    column_index: int


@dataclass
class EditingSession:
    """Which table cell an editor currently has open.

    One session per editor; it is passed to whatever renders the editor
    instead of living in module state. Only one section holds a selection
    at a time.
    """

    head: CellPosition | None = None
    body: CellPosition | None = None

    def select_head(self, column_index: int) -> None:
        self._select("head", CellPosition(row_index=0, column_index=column_index))

    def select_body(self, row_index: int, column_index: int) -> None:
        self._select("body", CellPosition(row_index=row_index, column_index=column_index))

    def clear(self) -> None:
        self.head = None
        self.body = None

    def is_editing(self, section: Section, row_index: int, column_index: int) -> bool:
        current = self.head if section == "head" else self.body
        return current == CellPosition(row_index=row_index, column_index=column_index)

    @property
    def active(self) -> tuple[Section, CellPosition] | None:
        if self.head is not None:
            return "head", self.head
        if self.body is not None:
            return "body", self.body
        return None

    def _select(self, section: Section, position: CellPosition) -> None:
        if position.row_index < 0 or position.column_index < 0:
            raise IndexError("cell indexes must not be negative")
        if section == "head":
            self.head, self.body = position, None
        else:
            self.head, self.body = None, position


__all__ = ["CellPosition", "EditingSession", "Section"]
