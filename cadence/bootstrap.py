"""Theme bootstrap for Cadence.

Startup runs once: validate the theme, merge the style-override patch, build
the typography engine and, outside production, inject its styles. The result
is an AppContext that is handed to whatever renders pages.

Key functions:
- initialize: Build an AppContext from a theme and an override patch.
- initialize_project: Same, driven by cadence.yaml and the environment.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import (
    ConfigurationError,
    StyleOverride,
    ThemeConfig,
    is_production,
    load_config,
    merge_overrides,
    resolve_environment,
)
from .engine import ScaledSize, TypographyEngine, create_typography_engine
from .injection import inject_styles as _inject_styles
from .injection import target_for_path
from .protocols import StyleTarget
from .themes import load_theme
from .units import Length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Process-wide typography state.

    Attributes:
        config: Theme with the override patch applied.
        engine: Engine built from ``config``.
        injected: Whether styles were injected during initialization.
    """

    config: ThemeConfig
    engine: TypographyEngine
    injected: bool = False

    def rhythm(self, lines: float = 1, font_size: Any = None, offset: Any = 0) -> Length:
        return self.engine.rhythm(lines, font_size, offset)

    def scale(self, step: float = 0) -> ScaledSize:
        return self.engine.scale(step)


def initialize(
    config: ThemeConfig | Mapping[str, Any],
    overrides: StyleOverride | None = None,
    *,
    inject_styles: bool = False,
    target: StyleTarget | None = None,
) -> AppContext:
    """Build the typography engine for a theme.

    Args:
        config: Base theme, as a ThemeConfig or a mapping of theme options.
        overrides: Style-override patch merged into the theme's override
            table.
        inject_styles: Inject the engine's CSS into ``target``. Pass False in
            production, where the CSS is embedded at build time.
        target: Where to inject styles.

    Returns:
        AppContext holding the merged config and the engine.

    Raises:
        ConfigurationError: If the theme or the patch is malformed. Nothing
            is built in that case.
    """
    if isinstance(config, Mapping):
        config = ThemeConfig.from_mapping(config)
    elif not isinstance(config, ThemeConfig):
        raise ConfigurationError(f"expected a theme, got {type(config).__name__}")

    merged = merge_overrides(config, overrides)
    engine = create_typography_engine(merged)
    injected = False
    if inject_styles:
        injected = _inject_styles(engine, target)
    return AppContext(merged, engine, injected)


def initialize_project(
    project_root: Path,
    environ: Mapping[str, str] | None = None,
    target: StyleTarget | None = None,
) -> AppContext:
    """Initialize from a project's cadence.yaml.

    The theme named by ``theme`` is loaded, ``options`` are applied on top of
    it and ``overrides`` is the patch. Styles are injected unless the
    environment is production.

    Args:
        project_root: Directory containing cadence.yaml.
        environ: Process environment; defaults to ``os.environ``.
        target: Style target; defaults to the ``target`` path in the config.

    Returns:
        The initialized AppContext.
    """
    settings = load_config(project_root)
    theme = load_theme(settings["theme"], project_root=project_root)
    options = settings.get("options") or {}
    if not isinstance(options, Mapping):
        raise ConfigurationError("must be a mapping of theme options", "options")
    if options:
        theme = theme.updated(options)

    environment = resolve_environment(settings, environ)
    if target is None and settings.get("target"):
        target = target_for_path(project_root / str(settings["target"]))
    logger.debug("Initializing theme %r for %s", theme.title, environment)
    return initialize(
        theme,
        settings.get("overrides") or None,
        inject_styles=not is_production(environment),
        target=target,
    )
