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
from unittest import mock

from formreflow.core.errors import (
    ConfigurationError,
    ContentParseError,
    MeasurementError,
    UnknownSchemaTypeError,
)
from formreflow.core.models import PageGeometry, Position, Schema
from formreflow.formats import bound_input_from_dict
from formreflow.layout import diff_map as diff_map_module
from formreflow.layout.diff_map import build_diff_map, content_dependent_keys, resolve_workers
from formreflow.layout.plugins import SchemaPlugin, default_registry
from formreflow.measure.table import TableMeasurement
from tests.test_support import (
    FixedHeightMeasurer,
    RowHeightMeasurer,
    make_schema,
    make_table,
    make_template,
    table_content,
)


class TestBuildDiffMap(unittest.TestCase):
    def test_records_delta_at_original_bottom(self) -> None:
        template = make_template({"t": make_table(10.0, 40.0), "a": make_schema(100.0)})
        diff = build_diff_map(template, {}, FixedHeightMeasurer({10.0: 80.0}))
        self.assertEqual(diff, {50.0: 40.0})

    def test_template_without_tables_gives_empty_map(self) -> None:
        measurer = FixedHeightMeasurer({})
        template = make_template({"a": make_schema(10.0)}, {"b": make_schema(20.0)})
        self.assertEqual(build_diff_map(template, {}, measurer), {})
        self.assertEqual(measurer.calls, [])

    def test_bound_rows_and_usable_width_reach_measurer(self) -> None:
        measurer = FixedHeightMeasurer({})
        template = make_template({"t": make_table(10.0)})
        rows = [["a", "b"], ["c", "d"], ["e", "f"]]
        build_diff_map(template, {"t": table_content(rows)}, measurer)
        self.assertEqual(measurer.calls, [(10.0, 3, 100.0)])

    def test_missing_or_blank_content_measures_empty_table(self) -> None:
        template = make_template({"t": make_table(10.0, 20.0)})
        for bound in ({}, {"t": ""}, {"t": "   "}):
            with self.subTest(bound=bound):
                diff = build_diff_map(template, bound, RowHeightMeasurer(head=5.0))
                self.assertEqual(diff, {30.0: -15.0})

    def test_null_input_measures_head_only(self) -> None:
        template = make_template({"t": make_table(10.0, 20.0)})
        bound = bound_input_from_dict({"t": None})
        diff = build_diff_map(template, bound, RowHeightMeasurer(head=5.0))
        self.assertEqual(diff, {30.0: -15.0})

    def test_delta_follows_row_count(self) -> None:
        template = make_template({"t": make_table(10.0, 20.0)})
        bound = {"t": table_content([["1", "2"]] * 4)}
        diff = build_diff_map(template, bound, RowHeightMeasurer(head=5.0, row=10.0))
        self.assertEqual(diff, {30.0: 25.0})

    def test_malformed_content_raises_by_default(self) -> None:
        template = make_template({"t": make_table(10.0)})
        with self.assertRaises(ContentParseError) as ctx:
            build_diff_map(template, {"t": "not json"}, RowHeightMeasurer())
        self.assertEqual(ctx.exception.key, "t")

    def test_malformed_content_can_be_treated_as_empty(self) -> None:
        template = make_template({"t": make_table(10.0, 20.0)})
        diff = build_diff_map(
            template,
            {"t": '{"rows": 1}'},
            RowHeightMeasurer(head=5.0),
            malformed_content="empty",
        )
        self.assertEqual(diff, {30.0: -15.0})

    def test_parse_failure_prevents_any_measurement(self) -> None:
        measurer = FixedHeightMeasurer({})
        template = make_template({"ok": make_table(10.0), "bad": make_table(60.0)})
        with self.assertRaises(ContentParseError):
            build_diff_map(template, {"bad": "[1, 2]"}, measurer)
        self.assertEqual(measurer.calls, [])

    def test_colliding_thresholds_keep_last_field_in_page_order(self) -> None:
        template = make_template(
            {
                "first": make_table(10.0, 40.0),
                "second": make_table(20.0, 30.0, x=90.0),
            }
        )
        diff = build_diff_map(template, {}, FixedHeightMeasurer({10.0: 60.0, 20.0: 35.0}))
        self.assertEqual(diff, {50.0: 5.0})

    def test_measurer_errors_carry_field_key(self) -> None:
        template = make_template({"t": make_table(10.0)})
        failures = (
            MeasurementError(None, "font missing"),
            ValueError("bad width"),
        )
        for failure in failures:
            with self.subTest(failure=failure):
                measurer = mock.Mock(side_effect=failure)
                with self.assertRaises(MeasurementError) as ctx:
                    build_diff_map(template, {}, measurer)
                self.assertEqual(ctx.exception.key, "t")

    def test_invalid_measured_height_is_rejected(self) -> None:
        template = make_template({"t": make_table(10.0)})
        for measurement in (
            TableMeasurement(head_height=-1.0, body_height=0.0),
            TableMeasurement(head_height=0.0, body_height=float("nan")),
        ):
            with self.subTest(measurement=measurement):
                measurer = mock.Mock(return_value=measurement)
                with self.assertRaises(MeasurementError):
                    build_diff_map(template, {}, measurer)

    def test_parallel_measurement_matches_serial(self) -> None:
        template = make_template(
            {
                "a": make_table(10.0, 20.0),
                "b": make_table(40.0, 20.0),
                "c": make_table(70.0, 20.0),
            }
        )
        bound = {
            "a": table_content([["x", "y"]]),
            "b": table_content([["x", "y"]] * 3),
            "c": table_content([]),
        }
        serial = build_diff_map(template, bound, RowHeightMeasurer(), jobs=1)
        parallel = build_diff_map(template, bound, RowHeightMeasurer(), jobs=3)
        self.assertEqual(serial, parallel)
        self.assertEqual(serial, {30.0: -5.0, 60.0: 15.0, 90.0: -15.0})

    def test_invalid_geometry_is_rejected(self) -> None:
        template = make_template(
            {"t": make_table(10.0)}, geometry=PageGeometry(width=0.0, height=100.0)
        )
        with self.assertRaises(ConfigurationError):
            build_diff_map(template, {}, RowHeightMeasurer())


class TestDiffMapWithRegistry(unittest.TestCase):
    def test_unknown_schema_type_is_rejected(self) -> None:
        odd = Schema(type="hologram", position=Position(0.0, 10.0), width=10.0, height=10.0)
        template = make_template({"odd": odd})
        with self.assertRaises(UnknownSchemaTypeError):
            build_diff_map(template, {}, RowHeightMeasurer(), registry=default_registry())

    def test_plugin_measurer_overrides_call_measurer(self) -> None:
        registry = default_registry(measurer=FixedHeightMeasurer({10.0: 50.0}))
        template = make_template({"t": make_table(10.0, 20.0)})
        diff = build_diff_map(template, {}, RowHeightMeasurer(), registry=registry)
        self.assertEqual(diff, {30.0: 30.0})

    def test_content_dependent_type_without_table_attributes_is_rejected(self) -> None:
        registry = default_registry()
        registry.register(SchemaPlugin(type="growing", content_dependent=True))
        plain = Schema(type="growing", position=Position(0.0, 10.0), width=10.0, height=10.0)
        with self.assertRaises(ConfigurationError):
            build_diff_map(make_template({"g": plain}), {}, RowHeightMeasurer(), registry=registry)

    def test_content_dependent_keys(self) -> None:
        template = make_template(
            {"t1": make_table(10.0), "a": make_schema(50.0)},
            {"t2": make_table(10.0)},
        )
        self.assertEqual(content_dependent_keys(template), ["t1", "t2"])
        self.assertEqual(
            content_dependent_keys(template, registry=default_registry()), ["t1", "t2"]
        )


class TestResolveWorkers(unittest.TestCase):
    def test_resolve_workers(self) -> None:
        with mock.patch.object(diff_map_module.os, "cpu_count", return_value=16):
            self.assertEqual(resolve_workers("auto", 20), 8)
            self.assertEqual(resolve_workers("auto", 3), 3)
            self.assertEqual(resolve_workers(4, 2), 2)
            self.assertEqual(resolve_workers(4, 1), 1)
            self.assertEqual(resolve_workers(2, 10), 2)

    def test_rejects_non_positive_jobs(self) -> None:
        with self.assertRaises(ValueError):
            resolve_workers(0, 3)


if __name__ == "__main__":
    unittest.main()
