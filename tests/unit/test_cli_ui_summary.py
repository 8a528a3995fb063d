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

import io
import unittest

from rich.console import Console

from formreflow.cli.ui.state import THEME
from formreflow.cli.ui.summary import build_diff_table, build_layout_table
from formreflow.layout import normalize
from tests.test_support import make_schema, make_table, make_template


def _render(renderable) -> str:
    buffer = io.StringIO()
    Console(file=buffer, width=120, no_color=True, theme=THEME).print(renderable)
    return buffer.getvalue()


class TestCliUiSummary(unittest.TestCase):
    def test_diff_table_lists_sorted_thresholds(self) -> None:
        text = _render(build_diff_table({90.0: -5.0, 30.0: 12.5}))
        self.assertLess(text.index("30.00"), text.index("90.00"))
        self.assertIn("+12.50", text)
        self.assertIn("-5.00", text)

    def test_layout_table_marks_moved_fields(self) -> None:
        original = make_template({"t": make_table(10.0, 40.0), "note": make_schema(100.0, 50.0)})
        adjusted = normalize(original, {50.0: 40.0})
        text = _render(build_layout_table(original, adjusted))
        self.assertIn("page 1 -> 2", text)
        self.assertIn("note", text)


if __name__ == "__main__":
    unittest.main()
