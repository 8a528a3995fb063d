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

from pathlib import Path

import typer

from ...layout import build_diff_map, default_registry
from ..core.common import _ctx_value, _load_config, _quiet, _run_cli
from ..core.inputs import load_inputs
from ..ui.summary import print_diff_map

_DIFF_HELP = "Print the height delta recorded at each table's original bottom edge."


def register(app: typer.Typer) -> None:
    app.command(help=_DIFF_HELP)(diff)


def diff(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="Template JSON to measure."),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON object of field key -> bound content.",
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config.",
        rich_help_panel="Config",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide warnings.",
        rich_help_panel="Behavior",
    ),
) -> None:
    def _run() -> None:
        app_config = _load_config(ctx, config)
        registry = default_registry()
        loaded = load_inputs(
            template, input_path, registry=registry, quiet=_quiet(ctx, quiet, app_config)
        )
        diff_map = build_diff_map(
            loaded.template,
            loaded.bound_input,
            app_config.build_measurer(),
            registry=registry,
            malformed_content=app_config.reflow.malformed_content,
            jobs=app_config.runtime.measure_jobs,
        )
        print_diff_map(diff_map)

    _run_cli(_run, debug=bool(_ctx_value(ctx, "debug")))
