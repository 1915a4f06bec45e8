"""Theme definitions for Cadence.

Themes are looked up by name in a ThemeRegistry, or loaded from a YAML file
on disk. New themes can be added by registering a factory without touching
existing code.

Key components:
- ThemeRegistry: Maps theme names to ThemeConfig factories.
- create_default_registry: Registry with the bundled themes.
- theme_provider: Pick the ThemeProvider for a theme name or YAML path.
- load_theme: Resolve a theme name or YAML path to a ThemeConfig.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import yaml

from ..config import ConfigurationError, ThemeConfig
from ..protocols import ThemeProvider
from . import de_young, default

ThemeFactory = Callable[[], ThemeConfig]


class ThemeRegistry:
    """Registry of named themes."""

    def __init__(self):
        """Initialize an empty registry."""
        self._factories: dict[str, ThemeFactory] = {}

    def register(self, name: str, factory: ThemeFactory) -> None:
        """Register a theme factory under ``name`` (case-insensitive)."""
        self._factories[name.lower()] = factory

    def get(self, name: str) -> ThemeConfig:
        """Build the named theme.

        Raises:
            ConfigurationError: If no theme is registered under ``name``.
        """
        factory = self._factories.get(name.lower())
        if factory is None:
            raise ConfigurationError(
                f"unknown theme {name!r} (available: {', '.join(self.names())})", "theme"
            )
        return factory()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._factories


class RegisteredThemeProvider:
    """Loads a named theme from a ThemeRegistry."""

    def __init__(self, registry: ThemeRegistry, name: str):
        self.registry = registry
        self.name = name

    def load(self) -> ThemeConfig:
        return self.registry.get(self.name)


class YamlThemeProvider:
    """Loads a theme from a YAML file of theme options."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> ThemeConfig:
        """Read and validate the theme file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a
                valid theme.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as exc:
            raise ConfigurationError(f"cannot read theme file: {exc}", "theme") from None
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"invalid YAML in {self.path}: {exc}", "theme") from None
        return ThemeConfig.from_mapping(data)


def create_default_registry() -> ThemeRegistry:
    """Create a registry with the bundled themes."""
    registry = ThemeRegistry()
    registry.register(default.NAME, default.theme)
    registry.register(de_young.NAME, de_young.theme)
    return registry


def theme_provider(
    name_or_path: str,
    registry: ThemeRegistry | None = None,
    project_root: Path | None = None,
) -> ThemeProvider:
    """Pick the provider for a theme name or YAML file path.

    Args:
        name_or_path: Registered theme name, or a path ending in .yaml/.yml.
        registry: Registry to consult; defaults to the bundled themes.
        project_root: Base directory for relative theme paths.
    """
    if str(name_or_path).endswith((".yaml", ".yml")):
        path = Path(name_or_path)
        if project_root is not None and not path.is_absolute():
            path = project_root / path
        return YamlThemeProvider(path)
    return RegisteredThemeProvider(registry or create_default_registry(), str(name_or_path))


def load_theme(
    name_or_path: str,
    registry: ThemeRegistry | None = None,
    project_root: Path | None = None,
) -> ThemeConfig:
    """Resolve a theme name or YAML file path to a ThemeConfig.

    Raises:
        ConfigurationError: If the theme is unknown or its file is invalid.
    """
    return theme_provider(name_or_path, registry, project_root).load()
