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

import json
import unittest

from formreflow import FpdfTableMeasurer, dump_template, load_bound_input, load_template, reflow
from formreflow.layout import build_diff_map, default_registry
from tests.test_support import temp_dir, template_document, write_json


def _table(y: float, *, head: list[str], height: float = 20.0) -> dict[str, object]:
    return {
        "type": "table",
        "position": {"x": 10, "y": y},
        "width": 190,
        "height": height,
        "head": head,
        "headWidthPercentages": [100 / len(head)] * len(head),
        "bodyStyles": {"fontSize": 10, "padding": 2},
        "headStyles": {"fontSize": 10, "padding": 2},
    }


def _text(y: float, height: float = 10.0) -> dict[str, object]:
    return {"type": "text", "position": {"x": 10, "y": y}, "width": 100, "height": height}


class TestIntegrationReflow(unittest.TestCase):
    def test_invoice_template_round_trip(self) -> None:
        document = template_document(
            [
                {
                    "title": _text(10.0),
                    "lines": _table(30.0, head=["Item", "Description", "Amount"]),
                    "subtotal": _text(60.0),
                    "signature": _text(250.0, 20.0),
                },
                {"terms": _text(20.0, 100.0)},
            ]
        )
        rows = [
            [f"SKU-{index}", "Hand-finished oak shelf with brass brackets", f"{index}.00"]
            for index in range(40)
        ]
        with temp_dir() as tmpdir:
            template_path = write_json(tmpdir / "invoice.json", document)
            input_path = write_json(tmpdir / "data.json", {"lines": rows, "unused": "x"})
            output_path = tmpdir / "reflowed.json"

            template = load_template(template_path)
            bound = load_bound_input(input_path)
            measurer = FpdfTableMeasurer()
            registry = default_registry()
            diff_map = build_diff_map(template, bound, measurer, registry=registry)
            adjusted = reflow(template, bound, measurer, registry=registry, jobs=2)
            dump_template(adjusted, output_path)
            written = json.loads(output_path.read_text(encoding="utf-8"))

        self.assertEqual(list(diff_map), [50.0])
        self.assertGreater(diff_map[50.0], 200.0)
        self.assertEqual(adjusted.field_count(), template.field_count())
        self.assertEqual(list(adjusted.pages[0]), ["title", "lines"])
        self.assertEqual(list(adjusted.pages[1]), ["subtotal", "signature", "terms"])
        self.assertEqual(adjusted.pages[1]["terms"].position.y, 20.0)
        for key in ("subtotal", "signature"):
            self.assertGreaterEqual(adjusted.pages[1][key].position.y, 10.0)
        self.assertEqual(len(written["schemas"]), 2)
        self.assertEqual(written["schemas"][0]["lines"]["bodyStyles"]["fontSize"], 10.0)

    def test_small_table_shrinks_layout(self) -> None:
        document = template_document(
            [{"lines": _table(30.0, head=["Item"], height=60.0), "after": _text(100.0)}]
        )
        with temp_dir() as tmpdir:
            template = load_template(write_json(tmpdir / "t.json", document))
        adjusted = reflow(template, {"lines": '[["one"]]'}, FpdfTableMeasurer())
        self.assertLess(adjusted.pages[0]["after"].position.y, 100.0)
        self.assertEqual(adjusted.pages[0]["lines"].position.y, 30.0)


if __name__ == "__main__":
    unittest.main()
