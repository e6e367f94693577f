"""
Configuration loader for vc_changelog.

Settings are read from a JSON file, ``changelog.json`` in the current
directory by default. Every key is optional; a missing key keeps the
built-in default. The loader validates the structure of the file and
returns a :class:`ChangelogConfig`.

If the file is missing, malformed, or holds a key of the wrong type, a
:class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from vc_changelog.grouping.classifier import DEFAULT_KINDS, CategoryTable


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

DEFAULT_CONFIG_NAME = "changelog.json"
UNKNOWN_TYPE_POLICIES = ("uncategorized", "skip")


class ConfigError(Exception):
    """Raised when the changelog configuration file is missing or invalid."""

    pass


@dataclass
class ChangelogConfig:
    """Settings for one changelog generation run.

    Attributes
    ----------
    kinds : List[Tuple[str, str]]
        ``(type, category)`` pairs in render order.
    scope_overrides : Dict[str, str]
        ``"type(scope)"`` to category overrides. Empty by default, so scope
        does not influence classification unless configured.
    link : Optional[str]
        Commit link template with a ``{hash}`` placeholder.
    scopes : Optional[List[str]]
        Known scopes. Commits using other scopes are reported, not dropped.
    skip_merge_commits : bool
        Drop ``Merge branch``/``Merge pull request`` commits before grouping.
    unknown_types : str
        ``"uncategorized"`` to keep commits of unknown type under
        ``Uncategorized``, ``"skip"`` to drop them.
    strict_boundaries : bool
        Fail on a release boundary that references an unknown commit.
    """

    kinds: List[Tuple[str, str]] = field(default_factory=lambda: list(DEFAULT_KINDS))
    scope_overrides: Dict[str, str] = field(default_factory=dict)
    link: Optional[str] = None
    scopes: Optional[List[str]] = None
    skip_merge_commits: bool = False
    unknown_types: str = "uncategorized"
    strict_boundaries: bool = False

    @property
    def table(self) -> CategoryTable:
        return CategoryTable(self.kinds, self.scope_overrides)


def _get_default_config_path() -> Path:
    return Path.cwd() / DEFAULT_CONFIG_NAME


def _require_string_map(data: Dict[str, Any], key: str) -> Dict[str, str]:
    value = data[key]
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise ConfigError(f"'{key}' must be an object mapping strings to strings")
    return value


def config_from_dict(data: Dict[str, Any]) -> ChangelogConfig:
    """Validate an already-decoded configuration mapping.

    Raises:
        ConfigError: If a key holds a value of the wrong type.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    config = ChangelogConfig()
    if "kinds" in data:
        kinds = _require_string_map(data, "kinds")
        if not kinds:
            raise ConfigError("'kinds' must declare at least one commit type")
        config.kinds = list(kinds.items())
    if "scope_overrides" in data:
        config.scope_overrides = dict(_require_string_map(data, "scope_overrides"))
    if "link" in data:
        if data["link"] is not None and not isinstance(data["link"], str):
            raise ConfigError("'link' must be a string")
        config.link = data["link"]
    if "scopes" in data:
        scopes = data["scopes"]
        if scopes is not None and (
            not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes)
        ):
            raise ConfigError("'scopes' must be a list of strings")
        config.scopes = scopes
    for key in ("skip_merge_commits", "strict_boundaries"):
        if key in data:
            if not isinstance(data[key], bool):
                raise ConfigError(f"'{key}' must be a boolean")
            setattr(config, key, data[key])
    if "unknown_types" in data:
        if data["unknown_types"] not in UNKNOWN_TYPE_POLICIES:
            raise ConfigError(
                f"'unknown_types' must be one of: {', '.join(UNKNOWN_TYPE_POLICIES)}"
            )
        config.unknown_types = data["unknown_types"]
    return config


def load_config(path: Optional[Union[str, Path]] = None) -> ChangelogConfig:
    """Load the changelog configuration from ``path``.

    Args:
        path: Location of the JSON file. Defaults to ``changelog.json`` in
              the current working directory.

    Returns:
        The validated :class:`ChangelogConfig`.

    Raises:
        ConfigError: If the configuration file is missing, malformed, or invalid.
    """
    config_path = Path(path) if path is not None else _get_default_config_path()

    if not config_path.exists():
        logger.error("Configuration file '%s' does not exist", config_path)
        raise ConfigError(f"Missing changelog configuration file: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path.name}: {exc}") from exc

    try:
        config = config_from_dict(data)
    except ConfigError as exc:
        logger.error("Invalid configuration in %s: %s", config_path, exc)
        raise

    logger.debug("Loaded changelog configuration from: %s", config_path)
    logger.debug("Configuration data: %s", config)
    return config
