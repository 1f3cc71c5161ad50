"""Logic for loading and merging loader configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from classloader.deep_merge import deep_merge
from classloader.exceptions import ConfigurationError
from classloader.root_path import DEFAULT_ROOT_ENV_VAR

STRATEGIES = ("namespace", "convention", "filesystem")
NAMESPACE_MATCH_MODES = ("prefix", "nested")

DEFAULT_CONFIG: dict[str, Any] = {
    "caching": {
        "enabled": False,
        "cache_file": None,
    },
    "accepted_extensions": [".php", ".inc"],
    "root_path": None,
    "root_env_var": DEFAULT_ROOT_ENV_VAR,
    "namespace_delimiter": ".",
    "namespace_match": "prefix",
    # Registered namespaces are tried before the convention path.
    "strategy_order": list(STRATEGIES),
    "convention_root": None,
    "namespaces": {},
    "classes": {},
}


def build_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge ``overrides`` over the defaults and validate the result."""
    config = deep_merge(copy.deepcopy(DEFAULT_CONFIG), overrides or {})
    validate_config(config)
    return config


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    user_config: dict[str, Any] = {}
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as exc:
                msg = f"Invalid YAML in {p}: {exc}"
                raise ConfigurationError(msg) from exc
            if not isinstance(user_config, dict):
                msg = f"Configuration in {p} must be a mapping"
                raise ConfigurationError(msg)
    return build_config(user_config)


def normalize_extension(extension: str) -> str:
    """Return ``extension`` with exactly one leading dot.

    Raises ConfigurationError for an empty extension such as ``""`` or ``"."``.
    """
    stem = extension.lstrip(".") if isinstance(extension, str) else ""
    if not stem:
        msg = f"Invalid file extension: {extension!r}"
        raise ConfigurationError(msg)
    return "." + stem


def _require_string_list(config: dict[str, Any], key: str) -> list[str]:
    value = config[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"{key} must be a list of strings, got {value!r}"
        raise ConfigurationError(msg)
    return value


def validate_config(config: dict[str, Any]) -> None:
    """Raise ConfigurationError for settings the loader cannot honour."""
    order = _require_string_list(config, "strategy_order")
    unknown = [s for s in order if s not in STRATEGIES]
    if unknown:
        msg = f"Unknown strategies in strategy_order: {', '.join(unknown)}"
        raise ConfigurationError(msg)
    if len(set(order)) != len(order):
        msg = "strategy_order must not repeat a strategy"
        raise ConfigurationError(msg)

    if config["namespace_match"] not in NAMESPACE_MATCH_MODES:
        msg = f"namespace_match must be one of {', '.join(NAMESPACE_MATCH_MODES)}"
        raise ConfigurationError(msg)

    if not config["namespace_delimiter"]:
        msg = "namespace_delimiter must not be empty"
        raise ConfigurationError(msg)

    extensions = _require_string_list(config, "accepted_extensions")
    if not extensions:
        msg = "accepted_extensions must list at least one extension"
        raise ConfigurationError(msg)
    for extension in extensions:
        normalize_extension(extension)

    for key in ("namespaces", "classes"):
        if not isinstance(config[key], dict):
            msg = f"{key} must be a mapping, got {config[key]!r}"
            raise ConfigurationError(msg)
