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

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from ..formats.bound_input import MALFORMED_CONTENT_POLICIES, MalformedContentPolicy
from ..layout.diff_map import MeasureJobs
from ..measure.table import DEFAULT_FONT, FpdfTableMeasurer
from .installer import resolve_config_path

MEASURE_JOBS_ENV = "FORMREFLOW_MEASURE_JOBS"


@dataclass(frozen=True)
class MeasureDefaults:
    default_font: str = DEFAULT_FONT
    font_path: Path | None = None


@dataclass(frozen=True)
class ReflowDefaults:
    malformed_content: MalformedContentPolicy = "error"


@dataclass(frozen=True)
class RuntimeDefaults:
    measure_jobs: MeasureJobs = 1


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class AppConfig:
    source: Path | None = None
    measure: MeasureDefaults = field(default_factory=MeasureDefaults)
    reflow: ReflowDefaults = field(default_factory=ReflowDefaults)
    runtime: RuntimeDefaults = field(default_factory=RuntimeDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)

    def build_measurer(self) -> FpdfTableMeasurer:
        return FpdfTableMeasurer(
            default_font=self.measure.default_font,
            font_path=self.measure.font_path,
        )


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return app_config_from_dict(data, source=config_path)


def app_config_from_dict(data: dict[str, object], *, source: Path | None = None) -> AppConfig:
    runtime = _parse_runtime_defaults(_get_dict(data, "runtime"))
    env_jobs = os.environ.get(MEASURE_JOBS_ENV)
    if env_jobs:
        runtime = RuntimeDefaults(
            measure_jobs=_parse_measure_jobs(env_jobs, field=MEASURE_JOBS_ENV, default=1)
        )
    return AppConfig(
        source=source,
        measure=_parse_measure_defaults(_get_dict(data, "measure"), source=source),
        reflow=_parse_reflow_defaults(_get_dict(data, "reflow")),
        runtime=runtime,
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_measure_defaults(cfg: dict[str, object], *, source: Path | None) -> MeasureDefaults:
    default_font = _parse_optional_str(cfg.get("default_font"), field="measure.default_font")
    font_path_value = _parse_optional_str(cfg.get("font_path"), field="measure.font_path")
    font_path = None
    if font_path_value:
        font_path = Path(font_path_value).expanduser()
        if not font_path.is_absolute() and source is not None:
            font_path = source.parent / font_path
    return MeasureDefaults(default_font=default_font or DEFAULT_FONT, font_path=font_path)


def _parse_reflow_defaults(cfg: dict[str, object]) -> ReflowDefaults:
    value = _parse_optional_str(cfg.get("malformed_content"), field="reflow.malformed_content")
    if not value:
        return ReflowDefaults()
    normalized = value.lower()
    if normalized not in MALFORMED_CONTENT_POLICIES:
        raise ValueError("reflow.malformed_content must be 'error' or 'empty'")
    return ReflowDefaults(malformed_content=cast(MalformedContentPolicy, normalized))


def _parse_runtime_defaults(cfg: dict[str, object]) -> RuntimeDefaults:
    return RuntimeDefaults(
        measure_jobs=_parse_measure_jobs(
            cfg.get("measure_jobs"), field="runtime.measure_jobs", default=1
        )
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
    )


def parse_measure_jobs(value: object, *, field: str) -> MeasureJobs:
    return _parse_measure_jobs(value, field=field, default=1)


def _parse_measure_jobs(value: object, *, field: str, default: MeasureJobs) -> MeasureJobs:
    if value is None:
        return default
    if isinstance(value, str):
        normalized = value.strip().lower()
        if not normalized:
            return default
        if normalized == "auto":
            return cast(Literal["auto"], "auto")
        parsed = _parse_int_strict(normalized, field=field)
    else:
        parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be 'auto' or a positive integer")
    return parsed


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
