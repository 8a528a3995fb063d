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

from ...config import AppConfig
from ...core.models import TableSchema
from ...core.validation import validate_geometry
from ...formats import parse_table_content
from ...layout import default_registry
from ..core.common import _ctx_value, _load_config, _quiet, _run_cli
from ..core.inputs import load_inputs
from ..ui.summary import print_measurement

_MEASURE_HELP = "Measure one table field and print its head, body and row heights."


def register(app: typer.Typer) -> None:
    app.command(help=_MEASURE_HELP)(measure)


def _run_measure(
    *,
    template_path: Path,
    field_key: str,
    input_path: Path | None,
    app_config: AppConfig,
    quiet_value: bool,
) -> None:
    loaded = load_inputs(
        template_path, input_path, registry=default_registry(), quiet=quiet_value
    )
    geometry = loaded.template.geometry
    validate_geometry(geometry)
    schema = None
    for _index, key, candidate in loaded.template.iter_fields():
        if key == field_key:
            schema = candidate
            break
    if schema is None:
        raise ValueError(f"template has no field {field_key!r}")
    if not isinstance(schema, TableSchema):
        raise ValueError(f"field {field_key!r} is a {schema.type!r} field, not a table")
    rows = parse_table_content(
        field_key,
        loaded.bound_input.get(field_key),
        malformed=app_config.reflow.malformed_content,
    )
    measurement = app_config.build_measurer()(schema, rows, geometry.usable_width)
    print_measurement(field_key, measurement, schema.height)


def measure(
    ctx: typer.Context,
    template: Path = typer.Argument(..., help="Template JSON containing the field."),
    field: str = typer.Argument(..., help="Key of the table field to measure."),
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
        _run_measure(
            template_path=template,
            field_key=field,
            input_path=input_path,
            app_config=app_config,
            quiet_value=_quiet(ctx, quiet, app_config),
        )

    _run_cli(_run, debug=bool(_ctx_value(ctx, "debug")))
