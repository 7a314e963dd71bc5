"""Engine configuration: assumption sets and per-check policies."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any


class ConfigError(ValueError):
    """Raised when a configuration is inconsistent or cannot be loaded."""


class Action(Enum):
    """What to do with a finding of one check."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"
    REMOVE = "remove"

    @classmethod
    def parse(cls, value: str | Action) -> Action:
        if isinstance(value, Action):
            return value
        if not isinstance(value, str):
            raise ConfigError(f"Action must be a string, got {value!r}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ConfigError(f"Unknown action {value!r} (expected one of: {choices})") from None


@dataclass(frozen=True)
class Config:
    never_matches: frozenset[str] = frozenset()
    always_matches: frozenset[str] = frozenset()
    on_dead_selector: Action = Action.IGNORE
    on_override: Action = Action.IGNORE
    on_invalid_body_position: Action = Action.IGNORE
    max_reported: int = 20

    def __post_init__(self) -> None:
        # Accept any iterable of strings and plain policy names.
        object.__setattr__(self, "never_matches", frozenset(self.never_matches))
        object.__setattr__(self, "always_matches", frozenset(self.always_matches))
        for name in ("on_dead_selector", "on_override", "on_invalid_body_position"):
            object.__setattr__(self, name, Action.parse(getattr(self, name)))

        if isinstance(self.max_reported, bool) or not isinstance(self.max_reported, int):
            raise ConfigError(f"max_reported must be an integer, got {self.max_reported!r}")
        if self.max_reported < 0:
            raise ConfigError(f"max_reported must be >= 0, got {self.max_reported}")

        overlap = self.never_matches & self.always_matches
        if overlap:
            raise ConfigError(
                "Selectors cannot be assumed both never and always matching: "
                + ", ".join(sorted(overlap))
            )


_FIELD_NAMES = {f.name for f in fields(Config)}


def config_from_mapping(data: dict[str, Any], base: Config | None = None) -> Config:
    """Build a Config from a plain mapping, e.g. a parsed TOML table.

    Keys may be written with dashes (``never-matches``) or underscores.
    """
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        if name not in _FIELD_NAMES:
            raise ConfigError(f"Unknown configuration key {key!r}")
        if name in ("never_matches", "always_matches"):
            if not isinstance(value, (list, tuple, set, frozenset)) or not all(
                isinstance(v, str) for v in value
            ):
                raise ConfigError(f"{key} must be a list of selectors")
            value = frozenset(value)
        values[name] = value
    return replace(base or Config(), **values)


def load_config(path: str | Path, base: Config | None = None) -> Config:
    """Load a Config from a TOML file.

    Reads the ``[tool.csstrim]`` table when present (so the settings can live
    in ``pyproject.toml``), otherwise the top-level keys. Settings missing
    from the file keep their value from *base*.
    """
    path = Path(path)
    try:
        with path.open("rb") as fh:
            document = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read configuration {path}: {exc}") from exc

    table = document.get("tool", {}).get("csstrim")
    if table is None:
        table = {k: v for k, v in document.items() if k != "tool"}
    return config_from_mapping(table, base=base)
