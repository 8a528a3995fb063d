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

"""Template and bound-input loading shared by the commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ...core.models import Template
from ...formats import load_bound_input, load_template
from ...layout import PluginRegistry, adjacent_duplicate_keys, content_dependent_keys
from .log import _warn


@dataclass(frozen=True)
class LoadedInputs:
    template: Template
    bound_input: dict[str, str] = field(default_factory=dict)


def load_inputs(
    template_path: Path,
    input_path: Path | None,
    *,
    registry: PluginRegistry,
    quiet: bool,
) -> LoadedInputs:
    template = load_template(template_path)
    registry.validate(template)
    bound_input = load_bound_input(input_path) if input_path is not None else {}
    _warn_binding_gaps(template, bound_input, registry=registry, quiet=quiet)
    return LoadedInputs(template=template, bound_input=bound_input)


def _warn_binding_gaps(
    template: Template,
    bound_input: dict[str, str],
    *,
    registry: PluginRegistry,
    quiet: bool,
) -> None:
    keys = set(template.field_keys())
    unknown = sorted(key for key in bound_input if key not in keys)
    if unknown:
        _warn(f"input keys match no field: {', '.join(unknown)}", quiet=quiet)
    unbound = [
        key
        for key in content_dependent_keys(template, registry=registry)
        if key not in bound_input
    ]
    if unbound:
        _warn(
            f"no input for content-dependent fields (measured as empty): {', '.join(unbound)}",
            quiet=quiet,
        )
    repeated = adjacent_duplicate_keys(template)
    if repeated and content_dependent_keys(template, registry=registry):
        _warn(
            "keys repeat on adjacent pages and cannot be moved across them: "
            f"{', '.join(repeated)}",
            quiet=quiet,
        )
