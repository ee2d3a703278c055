"""
cheevo-lint - runtime config loader.

File: src/cheevo_lint/config/loader.py
Last updated: 2026-10-19

Purpose
- Resolve the effective lint config from four layers.

What should be included in this file
- Layering: built-in defaults, then the TOML file, then CHEEVO_LINT_* variables,
  then CLI flags.
- One environment variable per config key, derived from the schema's section
  types so new keys are picked up without a second table.

Functional requirements
- ``cheevo_lint.toml`` in the working directory is optional. A file passed
  explicitly must exist.
- Environment lists are comma separated; booleans accept the usual yes/no
  spellings.
- The file layer is validated on its own first, so a bad file is reported
  with its own paths instead of after env values were mixed in.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final, get_origin, get_type_hints

from cheevo_lint.config.schema import (
    CheevoLintConfig,
    assert_valid_config,
    default_config,
    merge_config,
)

DEFAULT_CONFIG_FILE: Final[str] = "cheevo_lint.toml"
ENV_PREFIX: Final[str] = "CHEEVO_LINT_"

_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSY: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})

Coercer = Callable[[str], object]


class ConfigLoadError(ValueError):
    """Raised when a config layer cannot be read or an env value cannot be coerced."""


def _as_flag(raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUTHY:
        return True
    if word in _FALSY:
        return False
    raise ValueError("must be a boolean (true/false/1/0/yes/no/on/off)")


def _as_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _as_text(raw: str) -> str:
    return raw.strip()


def _coercer_for(annotation: object) -> Coercer:
    if annotation is bool:
        return _as_flag
    if get_origin(annotation) is list:
        return _as_list
    return _as_text


def _env_bindings() -> Mapping[str, tuple[tuple[str, str], Coercer]]:
    bindings: dict[str, tuple[tuple[str, str], Coercer]] = {}
    for section, section_type in get_type_hints(CheevoLintConfig).items():
        for key, annotation in get_type_hints(section_type).items():
            env_name = f"{ENV_PREFIX}{section.upper()}_{key.upper()}"
            bindings[env_name] = ((section, key), _coercer_for(annotation))
    return MappingProxyType(dict(sorted(bindings.items())))


ENV_BINDINGS: Final[Mapping[str, tuple[tuple[str, str], Coercer]]] = _env_bindings()


def load_config(
    config_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the validated config for this run.

    ``cli_overrides`` uses dotted keys (``"lint.severity"``); ``None`` values
    mean the flag was not given and are skipped.
    """

    file_layer = _read_file_layer(config_path)
    config = assert_valid_config(merge_config(default_config(), file_layer))

    env_layer = _read_env_layer(os.environ if environ is None else environ)
    cli_layer = _nest_dotted(cli_overrides or {})
    return assert_valid_config(merge_config(merge_config(config, env_layer), cli_layer))


def _read_file_layer(config_path: str | Path | None) -> dict[str, Any]:
    explicit = config_path is not None
    path = Path(config_path).expanduser() if explicit else Path.cwd() / DEFAULT_CONFIG_FILE
    path = path.resolve()

    if not path.is_file():
        if explicit:
            raise ConfigLoadError(f"config file not found: {path}")
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigLoadError(f"unable to read config file {path}: {exc}") from exc


def _read_env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    layer: dict[str, Any] = {}
    for env_name, ((section, key), coerce) in ENV_BINDINGS.items():
        if env_name not in environ:
            continue
        try:
            value = coerce(environ[env_name])
        except ValueError as exc:
            raise ConfigLoadError(f"{env_name} -> {section}.{key} {exc}") from exc
        layer.setdefault(section, {})[key] = value
    return layer


def _nest_dotted(flat: Mapping[str, object]) -> dict[str, Any]:
    nested: dict[str, Any] = {}
    for dotted, value in sorted(flat.items()):
        if value is None:
            continue
        *parents, leaf = dotted.split(".")
        if not leaf or not all(parents):
            raise ConfigLoadError(f"invalid CLI override key {dotted!r}")
        node = nested
        for part in parents:
            node = node.setdefault(part, {})
        node[leaf] = value
    return nested


__all__ = [
    "ConfigLoadError",
    "DEFAULT_CONFIG_FILE",
    "ENV_BINDINGS",
    "ENV_PREFIX",
    "load_config",
]
