"""YAML configuration loader for ref-renumber."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from ref_renumber.renumber import DEFAULT_SECTION_START, LabelStyle

DEFAULT_INPUT = Path("README.md")


class ConfigError(ValueError):
    """Raised when a config file holds an unusable value."""


@dataclass(frozen=True)
class RenumberConfig:
    """Runtime settings; every field has the parameterless default."""

    input_path: Path = DEFAULT_INPUT
    style: LabelStyle = LabelStyle.SINGLE
    section_start: int = DEFAULT_SECTION_START

    def merge(
        self,
        input_path: str | Path | None = None,
        style: LabelStyle | str | None = None,
        section_start: int | None = None,
    ) -> RenumberConfig:
        """Return a copy with the given non-None overrides applied."""
        cfg = self
        if input_path is not None:
            cfg = replace(cfg, input_path=Path(input_path))
        if style is not None:
            cfg = replace(cfg, style=_parse_style(style))
        if section_start is not None:
            cfg = replace(cfg, section_start=section_start)
        return cfg


def _parse_style(value: Any) -> LabelStyle:
    try:
        return LabelStyle(value)
    except ValueError:
        choices = ", ".join(s.value for s in LabelStyle)
        msg = f"Unknown style {value!r} (expected one of: {choices})"
        raise ConfigError(msg) from None


def load_config(path: str | Path | None) -> RenumberConfig:
    """Load a YAML config file. Returns default config when path is None."""
    if path is None:
        return RenumberConfig()

    config_path = Path(path)
    if not config_path.is_file():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        msg = f"Config file must contain a mapping: {config_path}"
        raise ConfigError(msg)

    section_start = raw.get("section_start", DEFAULT_SECTION_START)
    if isinstance(section_start, bool) or not isinstance(section_start, int):
        msg = f"section_start must be an integer, got {section_start!r}"
        raise ConfigError(msg)

    input_path = raw.get("input", str(DEFAULT_INPUT))
    if not isinstance(input_path, str):
        msg = f"input must be a path string, got {input_path!r}"
        raise ConfigError(msg)

    return RenumberConfig(
        input_path=Path(input_path),
        style=_parse_style(raw.get("style", LabelStyle.SINGLE.value)),
        section_start=section_start,
    )
