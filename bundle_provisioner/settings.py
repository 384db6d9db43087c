"""Settings management for bundle-provisioner.

Scope-aware YAML settings holding scanner defaults, keyed by scanner PID:

    bundle_provisioner:
      scanner:
        obr:
          startLevel: 5
          start: false

Scope priority (most specific wins):
1. local (.provision/settings.local.yaml) - gitignored, machine-specific
2. project (.provision/settings.yaml) - committed, team-shared
3. global (~/.provision/settings.yaml) - user defaults
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .errors import ConfigurationError
from .properties import SettingsPropertyResolver

Scope = Literal["local", "project", "global"]

SETTINGS_DIR = ".provision"


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        return cls(
            global_settings=Path.home() / SETTINGS_DIR / "settings.yaml",
            project_settings=Path.cwd() / SETTINGS_DIR / "settings.yaml",
            local_settings=Path.cwd() / SETTINGS_DIR / "settings.local.yaml",
        )


class ProvisionSettings:
    """Settings manager with scope-aware merging.

    Usage:
        settings = ProvisionSettings()
        settings.set_value("bundle_provisioner.scanner.obr.startLevel", 5, scope="project")
        resolver = settings.as_property_resolver()
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for path in [self.paths.global_settings, self.paths.project_settings, self.paths.local_settings]:
            result = self._deep_merge(result, self._load(path))
        return result

    def as_property_resolver(self) -> SettingsPropertyResolver:
        """Expose the merged settings as dotted property keys."""
        return SettingsPropertyResolver(self.get_merged_settings())

    def get_value(self, key: str) -> Any:
        """Get a dotted key from the merged settings."""
        node: Any = self.get_merged_settings()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def set_value(self, key: str, value: Any, scope: Scope = "global") -> None:
        """Set a dotted key at the given scope."""
        settings = self._read_scope(scope)
        node = settings
        *parents, leaf = key.split(".")
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[leaf] = value
        self._write_scope(scope, settings)

    def remove_value(self, key: str, scope: Scope = "global") -> bool:
        """Remove a dotted key from the given scope.

        Returns:
            True if the key existed at that scope
        """
        settings = self._read_scope(scope)
        node = settings
        *parents, leaf = key.split(".")
        for part in parents:
            node = node.get(part)
            if not isinstance(node, dict):
                return False
        if leaf not in node:
            return False
        del node[leaf]
        self._write_scope(scope, settings)
        return True

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        return self._load(self._get_scope_path(scope))

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _load(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Malformed settings file {path}: {e}") from e
        if not isinstance(content, dict):
            raise ConfigurationError(f"Settings file {path} must contain a mapping")
        return content

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def get_settings() -> ProvisionSettings:
    """Get a settings instance with default paths."""
    return ProvisionSettings()
