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

import os
import unittest
from pathlib import Path
from unittest import mock

from formreflow.config import (
    DEFAULT_CONFIG_PATH,
    MEASURE_JOBS_ENV,
    app_config_from_dict,
    load_app_config,
    parse_measure_jobs,
)
from formreflow.measure.table import FpdfTableMeasurer
from tests.test_support import temp_dir


class TestConfigLoader(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(MEASURE_JOBS_ENV, None)

    def test_packaged_defaults(self) -> None:
        config = load_app_config(DEFAULT_CONFIG_PATH)
        self.assertEqual(config.source, DEFAULT_CONFIG_PATH)
        self.assertEqual(config.measure.default_font, "helvetica")
        self.assertIsNone(config.measure.font_path)
        self.assertEqual(config.reflow.malformed_content, "error")
        self.assertEqual(config.runtime.measure_jobs, 1)
        self.assertFalse(config.ui.quiet)
        self.assertFalse(config.ui.no_color)

    def test_missing_sections_use_defaults(self) -> None:
        config = app_config_from_dict({})
        self.assertEqual(config.runtime.measure_jobs, 1)
        self.assertEqual(config.reflow.malformed_content, "error")

    def test_parses_all_sections(self) -> None:
        config = app_config_from_dict(
            {
                "measure": {"default_font": "Times"},
                "reflow": {"malformed_content": "EMPTY"},
                "runtime": {"measure_jobs": "auto"},
                "ui": {"quiet": "yes", "no_color": 1},
            }
        )
        self.assertEqual(config.measure.default_font, "Times")
        self.assertEqual(config.reflow.malformed_content, "empty")
        self.assertEqual(config.runtime.measure_jobs, "auto")
        self.assertTrue(config.ui.quiet)
        self.assertTrue(config.ui.no_color)
        measurer = config.build_measurer()
        self.assertIsInstance(measurer, FpdfTableMeasurer)
        self.assertEqual(measurer.default_font, "times")

    def test_relative_font_path_resolves_against_config_file(self) -> None:
        source = Path("/etc/formreflow/config.toml")
        config = app_config_from_dict({"measure": {"font_path": "fonts/Noto.ttf"}}, source=source)
        self.assertEqual(config.measure.font_path, Path("/etc/formreflow/fonts/Noto.ttf"))

    def test_invalid_values(self) -> None:
        cases = (
            {"reflow": {"malformed_content": "skip"}},
            {"runtime": {"measure_jobs": 0}},
            {"runtime": {"measure_jobs": 1.5}},
            {"runtime": {"measure_jobs": True}},
            {"ui": {"quiet": "maybe"}},
            {"measure": {"default_font": 12}},
        )
        for data in cases:
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    app_config_from_dict(data)

    def test_measure_jobs_env_overrides_file(self) -> None:
        with mock.patch.dict(os.environ, {MEASURE_JOBS_ENV: "3"}):
            config = app_config_from_dict({"runtime": {"measure_jobs": 1}})
        self.assertEqual(config.runtime.measure_jobs, 3)

    def test_parse_measure_jobs(self) -> None:
        self.assertEqual(parse_measure_jobs("Auto", field="--jobs"), "auto")
        self.assertEqual(parse_measure_jobs(" 4 ", field="--jobs"), 4)
        with self.assertRaises(ValueError) as ctx:
            parse_measure_jobs("-2", field="--jobs")
        self.assertIn("--jobs", str(ctx.exception))

    def test_load_user_file(self) -> None:
        with temp_dir() as tmpdir:
            path = tmpdir / "config.toml"
            path.write_text('[runtime]\nmeasure_jobs = 2\n[ui]\nquiet = true\n', encoding="utf-8")
            config = load_app_config(path)
        self.assertEqual(config.runtime.measure_jobs, 2)
        self.assertTrue(config.ui.quiet)


if __name__ == "__main__":
    unittest.main()
