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

import typer
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config, user_config_needs_init
from . import command_registry
from .core.common import _get_version
from .ui import configure_ui, console, console_err

app = typer.Typer(add_completion=True, no_args_is_help=True, help="Form template reflow CLI.")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"formreflow {_get_version()}")
        raise typer.Exit()


def _init_config_callback(value: bool) -> None:
    if not value:
        return
    existed = not user_config_needs_init()
    try:
        config_path = init_user_config()
    except OSError as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if existed:
        console.print(f"User config already present at {config_path}")
    else:
        console.print(f"User config ready at {config_path}")
    raise typer.Exit()


@app.callback()
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config.",
        rich_help_panel="Global",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output.",
        rich_help_panel="Global",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output.",
        rich_help_panel="Accessibility",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show tracebacks instead of one-line errors.",
        rich_help_panel="Debug",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Copy defaults to the user config directory and exit.",
        callback=_init_config_callback,
        is_eager=True,
        rich_help_panel="Config",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = version, init_config
    configure_ui(no_color=no_color)
    if debug:
        install_rich_traceback(show_locals=True)
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "debug": debug,
            "quiet": quiet,
            "no_color": no_color,
        }
    )


command_registry.register(app)


def main() -> None:
    app()
