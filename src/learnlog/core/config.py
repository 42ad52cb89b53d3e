"""
Layered settings for learnlog.

Sources, lowest to highest precedence:
    1. Built-in defaults (``DEFAULTS``)
    2. A YAML or JSON config file
    3. Environment variables, ``LEARNLOG_SECTION__KEY=value``

Directories under ``paths`` that no source sets are derived from
``paths.data_dir`` once everything is merged, so moving ``data_dir`` in a
config file moves storage and logs along with it.

Usage:
    config = Config(config_file="~/.learnlog/config.yaml")
    config.get("diary.undo_timeout")        # raw merged value
    config.validated().search.max_cache_size  # typed, checked value

    # tests and embedding hosts
    config = Config(data_dir=tmp_dir, env_prefix="MYDIARY_")
"""

from __future__ import annotations

import copy
import json
import os
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

import yaml

from learnlog.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from learnlog.core.config_schema import LearnlogConfig

_DEFAULT_ENV_PREFIX = "LEARNLOG_"
_DEFAULT_DATA_DIR_NAME = ".learnlog-data"

DEFAULTS: dict[str, Any] = {
    "diary": {
        "storage_key": "learningEntries",
        "undo_timeout": 5.0,
        "quota_bytes": 5 * 1024 * 1024,
    },
    "search": {
        "max_cache_size": 50,
    },
    "validation": {
        "topic_min_length": 3,
        "topic_max_length": 200,
        "content_min_length": 10,
        "content_max_length": 10000,
    },
    "logging": {
        "level": "WARNING",
        "file": None,
    },
}

# paths.<key> defaults to <data_dir>/<subdirectory>
_DERIVED_DIRS = {"storage_dir": "storage", "log_dir": "logs"}


def merge_into(target: dict[str, Any], source: Mapping[str, Any]) -> None:
    """Recursively merge *source* into *target*; non-dict values replace."""
    for key, value in source.items():
        if isinstance(target.get(key), dict) and isinstance(value, Mapping):
            merge_into(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


def read_config_file(path: str) -> dict[str, Any]:
    """Parse a ``.yaml``/``.yml`` or ``.json`` file; other extensions yield ``{}``.

    Raises:
        ConfigurationError: If the file cannot be parsed or is not a mapping.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext not in (".yaml", ".yml", ".json"):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f) if ext == ".json" else yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot parse config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")
    return data


def env_overrides(prefix: str, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Collect ``<prefix>A__B=value`` variables into ``{"a": {"b": "value"}}``.

    Values stay strings; the pydantic schema coerces them.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for name, value in environ.items():
        if not name.startswith(prefix) or name == prefix:
            continue
        *parents, leaf = name[len(prefix) :].lower().split("__")
        node = overrides
        for part in parents:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = value
    return overrides


class Config:
    """
    Merged view of defaults, config file and environment.

    Args:
        config_file: YAML or JSON file; a missing file is skipped.
        env_prefix: Prefix of override variables. Empty disables env overrides.
        data_dir: Base data directory. Defaults to ~/.learnlog-data.
        defaults: Extra defaults merged over ``DEFAULTS`` (consumer sections).
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = _DEFAULT_ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = data_dir or os.path.join("~", _DEFAULT_DATA_DIR_NAME)
        self._extra_defaults = defaults or {}
        self.config_data: dict[str, Any] = {}

        self.reload()

    def reload(self) -> None:
        """Re-read every source. Values changed with :meth:`set` are lost."""
        data = copy.deepcopy(DEFAULTS)
        data["paths"] = {"data_dir": self._data_dir}
        for layer in self._layers():
            merge_into(data, layer)
        self.config_data = data
        self._resolve_paths()

    def _layers(self) -> Iterator[Mapping[str, Any]]:
        yield self._extra_defaults
        if self.config_file and os.path.exists(self.config_file):
            yield read_config_file(self.config_file)
        if self.env_prefix:
            yield env_overrides(self.env_prefix)

    def _resolve_paths(self) -> None:
        paths = self.config_data.get("paths")
        if not isinstance(paths, dict):
            paths = self.config_data["paths"] = {}
        data_dir = os.path.expanduser(str(paths.get("data_dir") or self._data_dir))
        paths["data_dir"] = data_dir
        for key, subdir in _DERIVED_DIRS.items():
            value = paths.get(key)
            paths[key] = os.path.expanduser(str(value)) if value else os.path.join(data_dir, subdir)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a value by dot-notation path, e.g. ``"diary.undo_timeout"``.

        Returns *default* when any segment is missing.
        """
        current: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def set(self, key_path: str, value: Any) -> None:
        """Set a value by dot-notation path, creating intermediate sections."""
        *parents, leaf = key_path.split(".")
        node = self.config_data
        for part in parents:
            if not isinstance(node.get(part), dict):
                node[part] = {}
            node = node[part]
        node[leaf] = value

    def get_data_dir(self) -> str:
        return self.get("paths.data_dir")

    def ensure_directories(self) -> None:
        """Create every configured directory that doesn't exist yet."""
        for path_value in self.get("paths", {}).values():
            if isinstance(path_value, str):
                os.makedirs(os.path.expanduser(path_value), exist_ok=True)

    def validated(self) -> LearnlogConfig:
        """Check the merged values against the pydantic schema.

        Raises:
            ConfigurationError: If any section fails validation.
        """
        from pydantic import ValidationError

        from learnlog.core.config_schema import LearnlogConfig

        try:
            return LearnlogConfig.model_validate(self.config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
