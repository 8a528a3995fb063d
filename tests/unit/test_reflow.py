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

import unittest

from formreflow import reflow, reflow_with_diff
from formreflow.core.errors import ContentParseError
from formreflow.layout import default_registry
from tests.test_support import (
    FixedHeightMeasurer,
    RowHeightMeasurer,
    make_schema,
    make_table,
    make_template,
    positions,
    table_content,
)


class TestReflow(unittest.TestCase):
    def setUp(self) -> None:
        self.template = make_template(
            {
                "header": make_schema(10.0),
                "items": make_table(30.0, 25.0),
                "total": make_schema(60.0),
                "notes": make_schema(120.0, 40.0),
            },
            {"terms": make_schema(10.0, 20.0)},
        )

    def test_growing_table_pushes_fields_down_and_over(self) -> None:
        bound = {"items": table_content([["a", "b"]] * 8)}
        result = reflow_with_diff(
            self.template, bound, RowHeightMeasurer(head=5.0, row=10.0), registry=default_registry()
        )
        # 5 + 80 = 85mm measured against 25mm declared.
        self.assertEqual(result.diff_map, {55.0: 60.0})
        self.assertEqual(
            positions(result.template),
            [
                (0, "header", 10.0),
                (0, "items", 30.0),
                (0, "total", 120.0),
                (1, "notes", 10.0),
                (1, "terms", 10.0),
            ],
        )

    def test_matching_heights_leave_template_unchanged(self) -> None:
        measurer = FixedHeightMeasurer({30.0: 25.0})
        self.assertEqual(reflow(self.template, {}, measurer), self.template)

    def test_reflow_matches_reflow_with_diff(self) -> None:
        bound = {"items": table_content([["a", "b"]] * 2)}
        measurer = RowHeightMeasurer()
        self.assertEqual(
            reflow(self.template, bound, measurer),
            reflow_with_diff(self.template, bound, measurer).template,
        )

    def test_errors_abort_without_partial_result(self) -> None:
        with self.assertRaises(ContentParseError):
            reflow(self.template, {"items": "{"}, RowHeightMeasurer())
        self.assertEqual(self.template.pages[0]["total"].position.y, 60.0)


if __name__ == "__main__":
    unittest.main()
