"""Parse options and JSON config file loading."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from bank_import.errors import ConfigError

SUPPORTED_CONFIG_SUFFIXES = {".json", ".yml", ".yaml"}


@dataclass(frozen=True)
class ParseOptions:
    header_keyword_matching: bool = True
    strict: bool = False
    separators: tuple[str, ...] = (",", ";", "\t")
    sample_lines: int = 20
    amount_keywords: tuple[str, ...] = ("amount", "value")
    balance_keywords: tuple[str, ...] = ("balance", "balancing")

    def __post_init__(self) -> None:
        if not self.separators:
            raise ConfigError("separators must contain at least one character")
        for sep in self.separators:
            if not isinstance(sep, str) or len(sep) != 1:
                raise ConfigError(f"separator must be a single character, got {sep!r}")
        if self.sample_lines < 1:
            raise ConfigError(f"sample_lines must be at least 1, got {self.sample_lines}")

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ParseOptions":
        known = {item.name: item for item in fields(cls)}
        unknown = sorted(set(payload) - set(known))
        if unknown:
            raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in payload.items():
            if key in {"header_keyword_matching", "strict"}:
                if not isinstance(value, bool):
                    raise ConfigError(f"{key} must be true or false")
                values[key] = value
            elif key == "sample_lines":
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ConfigError("sample_lines must be an integer")
                values[key] = value
            else:
                if isinstance(value, str) or not isinstance(value, (list, tuple)):
                    raise ConfigError(f"{key} must be a list of strings")
                if not all(isinstance(item, str) for item in value):
                    raise ConfigError(f"{key} must be a list of strings")
                if key.endswith("_keywords"):
                    value = [item.lower() for item in value]
                values[key] = tuple(value)
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        for key, value in payload.items():
            if isinstance(value, tuple):
                payload[key] = list(value)
        return payload


DEFAULT_OPTIONS = ParseOptions()


def load_options(path: "str | Path") -> ParseOptions:
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config not found: {config_path}")
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        raise ConfigError("Config must be .json, .yml, or .yaml")
    if suffix in {".yml", ".yaml"}:
        raise ConfigError("YAML configs are not supported yet. Use JSON for now.")
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError("Config root must be a JSON object.")
    return ParseOptions.from_dict(payload)


def starter_config() -> str:
    return json.dumps(DEFAULT_OPTIONS.to_dict(), indent=2) + "\n"
