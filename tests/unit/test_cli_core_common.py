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

import importlib.metadata
import unittest
from types import SimpleNamespace
from unittest import mock

import typer

from formreflow.cli.core import common as common_module
from formreflow.cli.core import log as log_module
from formreflow.config import AppConfig, UiDefaults
from formreflow.core.errors import MeasurementError


class TestCliCoreCommon(unittest.TestCase):
    def test_run_cli_success_path(self) -> None:
        called: list[str] = []

        def _fn() -> None:
            called.append("ok")

        common_module._run_cli(_fn, debug=False)
        self.assertEqual(called, ["ok"])

    def test_run_cli_nonzero_int_raises_typer_exit(self) -> None:
        with self.assertRaises(typer.Exit) as exc_info:
            common_module._run_cli(lambda: 3, debug=False)
        self.assertEqual(exc_info.exception.exit_code, 3)

    @mock.patch("formreflow.cli.core.common.console_err.print")
    def test_run_cli_reports_reflow_errors(self, print_mock: mock.MagicMock) -> None:
        def _fail() -> None:
            raise MeasurementError("orders", "font missing")

        with self.assertRaises(typer.Exit) as exc_info:
            common_module._run_cli(_fail, debug=False)
        self.assertEqual(exc_info.exception.exit_code, 2)
        print_mock.assert_called_once()
        self.assertIn("font missing", str(print_mock.call_args.args[0]))

    def test_run_cli_debug_reraises(self) -> None:
        with mock.patch("formreflow.cli.core.common.install_rich_traceback") as install:
            with self.assertRaises(LookupError):
                common_module._run_cli(
                    lambda: (_ for _ in ()).throw(LookupError("debug-error")),
                    debug=True,
                )
        install.assert_called_once_with(show_locals=True)

    def test_ctx_value(self) -> None:
        self.assertTrue(common_module._ctx_value(SimpleNamespace(obj={"quiet": True}), "quiet"))
        self.assertIsNone(common_module._ctx_value(SimpleNamespace(obj=None), "quiet"))

    def test_quiet_sources(self) -> None:
        loud = AppConfig()
        quiet_config = AppConfig(ui=UiDefaults(quiet=True))
        ctx = SimpleNamespace(obj={"quiet": False})
        self.assertFalse(common_module._quiet(ctx, False, loud))
        self.assertTrue(common_module._quiet(ctx, True, loud))
        self.assertTrue(common_module._quiet(SimpleNamespace(obj={"quiet": True}), False, loud))
        self.assertTrue(common_module._quiet(ctx, False, quiet_config))

    @mock.patch("formreflow.cli.core.common.importlib.metadata.version", return_value="1.2.3")
    def test_get_version_success(self, _version: mock.MagicMock) -> None:
        self.assertEqual(common_module._get_version(), "1.2.3")

    @mock.patch(
        "formreflow.cli.core.common.importlib.metadata.version",
        side_effect=importlib.metadata.PackageNotFoundError,
    )
    def test_get_version_fallback(self, _version: mock.MagicMock) -> None:
        self.assertEqual(common_module._get_version(), "0.0.0")


class TestCliLog(unittest.TestCase):
    @mock.patch("formreflow.cli.core.log.console_err.print")
    def test_warn_respects_quiet(self, print_mock: mock.MagicMock) -> None:
        log_module._warn("heads up", quiet=True)
        print_mock.assert_not_called()
        log_module._warn("heads up", quiet=False)
        print_mock.assert_called_once_with("[yellow]Warning:[/yellow] heads up")


if __name__ == "__main__":
    unittest.main()
