"""Project-scoped skin settings in ``.skinner/config.yaml``.

Example::

    skin:
      merge_body: false
      released_version: "[1.4]"
      remote_repositories:
        - https://repo.example.org/maven2

Command-line options win over the file, the file wins over the defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from site_skinner.core.constants import (
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_INPUT_ENCODING,
    DEFAULT_OUTPUT_ENCODING,
)
from site_skinner.errors import SkinnerError

__all__ = [
    "SkinnerConfigError",
    "SkinProjectConfig",
    "SkinOptions",
    "config_path",
    "load_skin_config",
    "resolve_options",
]

_BOOL_KEYS = ("force_checkout", "merge_body", "site_deploy")
_STR_KEYS = (
    "released_version",
    "working_directory",
    "input_encoding",
    "output_encoding",
    "maven_executable",
    "local_repository",
)
_PATTERN_KEYS = ("includes", "excludes")


class SkinnerConfigError(SkinnerError):
    """Raised when ``.skinner/config.yaml`` is unreadable or invalid."""

    code = "CONFIG_INVALID"


@dataclass(slots=True)
class SkinProjectConfig:
    """The ``skin:`` section; ``None`` means not set in the file."""

    force_checkout: bool | None = None
    merge_body: bool | None = None
    site_deploy: bool | None = None
    released_version: str | None = None
    working_directory: str | None = None
    input_encoding: str | None = None
    output_encoding: str | None = None
    includes: str | None = None
    excludes: str | None = None
    maven_executable: str | None = None
    local_repository: str | None = None
    remote_repositories: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None, source: Path | None = None) -> "SkinProjectConfig":
        if data is None:
            return cls()
        where = f" in {source}" if source is not None else ""
        if not isinstance(data, dict):
            raise SkinnerConfigError(f"'skin' must be a mapping{where}")

        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise SkinnerConfigError(f"Unknown skin setting(s){where}: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key in _BOOL_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, bool):
                raise SkinnerConfigError(f"'{key}' must be true or false{where}")
            values[key] = value
        for key in _STR_KEYS:
            value = data.get(key)
            if value is not None and not isinstance(value, (str, int, float)):
                raise SkinnerConfigError(f"'{key}' must be a string{where}")
            values[key] = str(value).strip() if value is not None and str(value).strip() else None
        for key in _PATTERN_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                value = ",".join(str(item).strip() for item in value if str(item).strip())
            elif value is not None and not isinstance(value, str):
                raise SkinnerConfigError(f"'{key}' must be a string or a list{where}")
            values[key] = value or None

        remotes = data.get("remote_repositories") or []
        if isinstance(remotes, str):
            remotes = [remotes]
        if not isinstance(remotes, list):
            raise SkinnerConfigError(f"'remote_repositories' must be a list{where}")
        values["remote_repositories"] = [str(url).strip() for url in remotes if str(url).strip()]
        return cls(**values)


@dataclass
class SkinOptions:
    """Effective options of one skin run."""

    force_checkout: bool = False
    merge_body: bool = True
    site_deploy: bool = False
    released_version: str | None = None
    working_directory: Path | None = None
    input_encoding: str = DEFAULT_INPUT_ENCODING
    output_encoding: str = DEFAULT_OUTPUT_ENCODING
    includes: str | None = None
    excludes: str | None = None


def config_path(project_dir: Path) -> Path:
    return Path(project_dir) / CONFIG_DIR / CONFIG_FILE


def load_skin_config(project_dir: Path) -> SkinProjectConfig:
    """Load the ``skin:`` section; a missing file yields empty settings."""
    path = config_path(project_dir)
    if not path.exists():
        return SkinProjectConfig()

    yaml = YAML(typ="safe")
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.load(handle) or {}
    except (OSError, YAMLError) as exc:
        raise SkinnerConfigError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise SkinnerConfigError(f"{path} must contain a mapping")
    return SkinProjectConfig.from_dict(payload.get("skin"), path)


def resolve_options(config: SkinProjectConfig, **overrides: Any) -> SkinOptions:
    """Combine command-line ``overrides`` (``None`` = not given) with ``config``."""
    defaults = SkinOptions()
    values: dict[str, Any] = {}
    for item in fields(SkinOptions):
        value = overrides.get(item.name)
        if value is None:
            value = getattr(config, item.name)
        if value is None:
            value = getattr(defaults, item.name)
        values[item.name] = value
    if values["working_directory"] is not None:
        values["working_directory"] = Path(values["working_directory"])
    return SkinOptions(**values)
