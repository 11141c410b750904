"""
Configuration for the package provider.

Provides a small configuration model that can be loaded from YAML
files or constructed programmatically.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_PKG_CONF = "/etc/pkg.conf"


def get_pkg_conf_path(default: str = DEFAULT_PKG_CONF) -> str:
    """Get the pkg.conf location, overridable with PKGPROV_PKG_CONF."""
    return os.environ.get("PKGPROV_PKG_CONF") or default


def _flags(value: Any) -> list[str]:
    """Accept a list of flags, a single flag, or nothing."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ValueError(f"pkg_add_flags must be a string or a list of strings, got {value!r}")


def _timeout(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"command_timeout_seconds must be a number, got {value!r}")
    return value


@dataclass
class ProviderConfig:
    """
    Main configuration for the package provider.

    Example YAML:
        pkg_conf_path: /etc/pkg.conf
        pkg_info: /usr/sbin/pkg_info
        pkg_add: /usr/sbin/pkg_add
        pkg_delete: /usr/sbin/pkg_delete
        repository_env_var: PKG_PATH
        command_timeout_seconds: 600
        pkg_add_flags:
          - -I
    """

    # Where installpath is read from when no source is given
    pkg_conf_path: str = field(default_factory=get_pkg_conf_path)

    # Tools, as names looked up in PATH or absolute paths
    pkg_info: str = "pkg_info"
    pkg_add: str = "pkg_add"
    pkg_delete: str = "pkg_delete"

    # Variable pkg_add reads to find a package directory
    repository_env_var: str = "PKG_PATH"

    # Runtime
    command_timeout_seconds: float | None = None  # None waits forever
    pkg_add_flags: list[str] = field(default_factory=list)  # Passed before the package argument

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProviderConfig:
        """Create config from a dictionary.

        Null values fall back to defaults.

        Raises:
            ValueError: *data* is not a mapping, or a value has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")

        return cls(
            pkg_conf_path=data.get("pkg_conf_path") or get_pkg_conf_path(),
            pkg_info=data.get("pkg_info") or "pkg_info",
            pkg_add=data.get("pkg_add") or "pkg_add",
            pkg_delete=data.get("pkg_delete") or "pkg_delete",
            repository_env_var=data.get("repository_env_var") or "PKG_PATH",
            command_timeout_seconds=_timeout(data.get("command_timeout_seconds")),
            pkg_add_flags=_flags(data.get("pkg_add_flags")),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> ProviderConfig:
        """Load config from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> ProviderConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "pkg_conf_path": self.pkg_conf_path,
            "pkg_info": self.pkg_info,
            "pkg_add": self.pkg_add,
            "pkg_delete": self.pkg_delete,
            "repository_env_var": self.repository_env_var,
            "command_timeout_seconds": self.command_timeout_seconds,
            "pkg_add_flags": list(self.pkg_add_flags),
        }
