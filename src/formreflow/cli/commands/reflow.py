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

from ...config import AppConfig, parse_measure_jobs
from ...formats import dump_template, template_to_json
from ...layout import default_registry, reflow_with_diff
from ..core.common import _ctx_value, _load_config, _quiet, _run_cli
from ..core.inputs import load_inputs
from ..ui import console_err
from ..ui.summary import print_reflow_summary

_REFLOW_HELP = (
    "Measure table fields against bound input, shift the fields below them and "
    "move overflowing fields to the next page."
)


def register(app: typer.Typer) -> None:
    app.command(help=_REFLOW_HELP)(reflow)


def _run_reflow(
    *,
    template_path: Path,
    input_path: Path | None,
    output: Path | None,
    jobs: str | None,
    app_config: AppConfig,
    quiet_value: bool,
) -> None:
    measurer = app_config.build_measurer()
    registry = default_registry()
    loaded = load_inputs(template_path, input_path, registry=registry, quiet=quiet_value)
    measure_jobs = app_config.runtime.measure_jobs
    if jobs is not None:
        measure_jobs = parse_measure_jobs(jobs, field="--jobs")
    result = reflow_with_diff(
        loaded.template,
        loaded.bound_input,
        measurer,
        registry=registry,
        malformed_content=app_config.reflow.malformed_content,
        jobs=measure_jobs,
    )
    if output is None:
        # stdout carries the document alone
        typer.echo(template_to_json(result.template))
        if not quiet_value:
            print_reflow_summary(loaded.template, result.template, None, target=console_err)
        return
    dump_template(result.template, output)
    if not quiet_value:
        print_reflow_summary(loaded.template, result.template, str(output))


def reflow(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="Template JSON to reflow."),
    input_path: Path | None = typer.Option(
        None,
        "--input",
        "-i",
        help="JSON object of field key -> bound content.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the adjusted template here (default: stdout).",
    ),
    jobs: str | None = typer.Option(
        None,
        "--jobs",
        "-j",
        help="Measurement workers: a positive integer or 'auto'.",
        rich_help_panel="Behavior",
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
        help="Hide non-error output.",
        rich_help_panel="Behavior",
    ),
) -> None:
    debug = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        app_config = _load_config(ctx, config)
        _run_reflow(
            template_path=template,
            input_path=input_path,
            output=output,
            jobs=jobs,
            app_config=app_config,
            quiet_value=_quiet(ctx, quiet, app_config),
        )

    _run_cli(_run, debug=debug)
