"""Theme and project configuration for Cadence.

This module holds the immutable ThemeConfig record that every typography
engine is built from, the style-override merge applied on top of a theme, and
the project-level settings loaded from ``cadence.yaml``.

Key components:
- ConfigurationError: Raised for malformed themes and settings.
- ThemeConfig: Validated, frozen typographic defaults plus override table.
- merge_overrides: Selector-scoped merge of a StyleOverride patch.
- load_config: Loads project settings from cadence.yaml.
- resolve_environment: Determines the runtime environment (production or not).
"""

from __future__ import annotations

import dataclasses
import os
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

import yaml

from .scale import resolve_ratio
from .units import Length, is_unitless, parse_length, to_px

StyleDeclarations = Mapping[str, Any]
StyleTable = Mapping[str, StyleDeclarations]
StyleOverride = Union[StyleTable, Callable[[], StyleTable]]

DEFAULT_HEADER_FONT_FAMILY = (
    "-apple-system",
    "BlinkMacSystemFont",
    "Segoe UI",
    "Roboto",
    "Oxygen",
    "Ubuntu",
    "Cantarell",
    "Fira Sans",
    "Droid Sans",
    "Helvetica Neue",
    "sans-serif",
)

REQUIRED_THEME_FIELDS = ("base_font_size", "base_line_height")

RHYTHM_UNITS = ("px", "rem", "em")

CONFIG_FILENAME = "cadence.yaml"

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "default",
    "environment": "development",
    "options": {},
    "overrides": {},
    "target": None,
    "site_title": "Blog",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class ConfigurationError(Exception):
    """Malformed or missing theme configuration.

    Attributes:
        message: Human-readable error message.
        field: Name of the offending option, when known.
    """

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)


@dataclass(frozen=True)
class GoogleFont:
    """A web font family requested from Google Fonts."""

    name: str
    styles: tuple[str, ...] = ()


@dataclass(frozen=True)
class ThemeConfig:
    """Typographic defaults of a theme.

    Only ``base_font_size`` and ``base_line_height`` are required; everything
    else falls back to the usual typography defaults. Container values are
    frozen on construction, so a ThemeConfig never changes once built.

    Attributes:
        base_font_size: Root font size, a pixel length such as ``"16px"``.
        base_line_height: Unitless multiplier (``1.45``) or a length.
        scale_ratio: Modular scale ratio, a number or an interval name.
        rhythm_unit: Unit rhythm values are expressed in.
        overrides: Selector to declarations table merged over the generated
            styles.
        override_styles: Optional callable receiving the engine and returning
            extra theme styles.
    """

    base_font_size: str | float
    base_line_height: str | float
    title: str = "Cadence"
    header_line_height: float = 1.1
    scale_ratio: float | str = 2
    rhythm_unit: str = "rem"
    header_font_family: tuple[str, ...] = DEFAULT_HEADER_FONT_FAMILY
    body_font_family: tuple[str, ...] = ("georgia", "serif")
    header_color: str = "inherit"
    body_color: str = "hsla(0,0%,0%,0.8)"
    header_weight: str | int = "bold"
    body_weight: str | int = "normal"
    bold_weight: str | int = "bold"
    block_margin_bottom: float = 1
    include_normalize: bool = True
    google_fonts: tuple[GoogleFont, ...] = ()
    round_to_nearest_half_line: bool = True
    min_line_padding: str | float = "2px"
    overrides: StyleTable = field(default_factory=dict, hash=False)
    override_styles: Callable[[Any], StyleTable] | None = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self):
        for name in REQUIRED_THEME_FIELDS:
            if getattr(self, name) in (None, ""):
                raise ConfigurationError("missing required theme value", name)

        base = _parse_option(self.base_font_size, "base_font_size")
        if base.unit != "px" or base.value <= 0:
            raise ConfigurationError(
                f"must be a positive pixel length, got {self.base_font_size!r}",
                "base_font_size",
            )
        if is_unitless(self.base_line_height):
            if float(parse_length(self.base_line_height).value) <= 0:
                raise ConfigurationError("must be positive", "base_line_height")
        elif _parse_option(self.base_line_height, "base_line_height").value <= 0:
            raise ConfigurationError("must be positive", "base_line_height")

        try:
            resolve_ratio(self.scale_ratio)
        except ValueError as exc:
            raise ConfigurationError(str(exc), "scale_ratio") from None

        if self.rhythm_unit not in RHYTHM_UNITS:
            raise ConfigurationError(
                f"must be one of {', '.join(RHYTHM_UNITS)}", "rhythm_unit"
            )
        for name in ("header_line_height", "block_margin_bottom"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"must be a number, got {value!r}", name)
        _parse_option(self.min_line_padding, "min_line_padding")

        object.__setattr__(
            self, "header_font_family", _font_family(self.header_font_family, "header_font_family")
        )
        object.__setattr__(
            self, "body_font_family", _font_family(self.body_font_family, "body_font_family")
        )
        object.__setattr__(self, "google_fonts", _google_fonts(self.google_fonts))
        object.__setattr__(self, "overrides", freeze_style_table(self.overrides))
        if self.override_styles is not None and not callable(self.override_styles):
            raise ConfigurationError("must be callable", "override_styles")

    @property
    def base_font_size_px(self) -> float:
        return parse_length(self.base_font_size).value

    @property
    def base_line_height_px(self) -> float:
        """Base line height resolved to pixels."""
        if is_unitless(self.base_line_height):
            return self.base_font_size_px * parse_length(self.base_line_height).value
        return to_px(parse_length(self.base_line_height), self.base_font_size_px)

    @property
    def ratio(self) -> float:
        return resolve_ratio(self.scale_ratio)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ThemeConfig:
        """Build a ThemeConfig from a plain mapping.

        Keys may be snake_case or camelCase (``baseFontSize``), so theme
        definitions written for JavaScript tooling can be reused as-is.

        Args:
            data: Theme options.

        Returns:
            Validated ThemeConfig.

        Raises:
            ConfigurationError: If the mapping is malformed, has unknown keys
                or lacks a required base value.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"theme must be a mapping, got {type(data).__name__}"
            )
        options = _normalize_keys(data)
        for name in REQUIRED_THEME_FIELDS:
            if name not in options:
                raise ConfigurationError("missing required theme value", name)
        return cls(**options)

    def updated(self, options: Mapping[str, Any]) -> ThemeConfig:
        """Return a copy with some options replaced."""
        return dataclasses.replace(self, **_normalize_keys(options))

    def as_dict(self) -> dict[str, Any]:
        """Return the options as plain, YAML-friendly data."""
        result: dict[str, Any] = {}
        for item in dataclasses.fields(self):
            if item.name == "override_styles":
                continue
            value = getattr(self, item.name)
            if item.name == "overrides":
                value = {sel: dict(decls) for sel, decls in value.items()}
            elif item.name == "google_fonts":
                value = [{"name": f.name, "styles": list(f.styles)} for f in value]
            elif isinstance(value, tuple):
                value = list(value)
            result[item.name] = value
        return result


def camel_to_snake(name: str) -> str:
    """Convert ``baseFontSize`` to ``base_font_size``."""
    return _CAMEL_RE.sub("_", name).lower()


def _normalize_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    known = {item.name for item in dataclasses.fields(ThemeConfig)}
    options: dict[str, Any] = {}
    for key, value in data.items():
        name = camel_to_snake(str(key))
        # ``overrideThemeStyles`` is the JavaScript spelling of a patch literal.
        if name == "override_theme_styles":
            name = "overrides"
        if name not in known:
            raise ConfigurationError("unknown theme option", str(key))
        options[name] = value
    return options


def _parse_option(value: Any, name: str) -> Length:
    try:
        return parse_length(value)
    except ValueError as exc:
        raise ConfigurationError(str(exc), name) from None


def _font_family(value: Any, name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [part.strip() for part in value.split(",")]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError("must be a list of font names", name)
    families = tuple(v for v in value if v)
    if not families:
        raise ConfigurationError("must name at least one font", name)
    return families


def _google_fonts(value: Any) -> tuple[GoogleFont, ...]:
    if not isinstance(value, (list, tuple)):
        raise ConfigurationError("must be a list", "google_fonts")
    fonts = []
    for entry in value:
        if isinstance(entry, GoogleFont):
            fonts.append(entry)
        elif isinstance(entry, Mapping) and isinstance(entry.get("name"), str):
            styles = tuple(str(style) for style in entry.get("styles", ()))
            fonts.append(GoogleFont(entry["name"], styles))
        else:
            raise ConfigurationError(f"invalid font entry {entry!r}", "google_fonts")
    return tuple(fonts)


def freeze_style_table(table: Any) -> StyleTable:
    """Validate a selector table and return a read-only copy.

    Raises:
        ConfigurationError: If the table is not a mapping of selector to a
            mapping of property names.
    """
    if not isinstance(table, Mapping):
        raise ConfigurationError("must map selectors to declarations", "overrides")
    frozen = {}
    for selector, declarations in table.items():
        if not isinstance(selector, str) or not isinstance(declarations, Mapping):
            raise ConfigurationError(
                f"invalid entry for selector {selector!r}", "overrides"
            )
        if not all(isinstance(prop, str) for prop in declarations):
            raise ConfigurationError(
                f"property names for {selector!r} must be strings", "overrides"
            )
        frozen[selector] = MappingProxyType(dict(declarations))
    return MappingProxyType(frozen)


def resolve_override(patch: StyleOverride | None) -> StyleTable:
    """Turn a StyleOverride (literal or zero-argument callable) into a table."""
    if patch is None:
        return {}
    if callable(patch):
        patch = patch()
    return freeze_style_table(patch)


def merge_overrides(config: ThemeConfig, patch: StyleOverride | None) -> ThemeConfig:
    """Merge a StyleOverride patch into a theme's override table.

    The merge is scoped to the selectors the patch names: a selector already
    present gets its declarations updated property by property (patch wins),
    new selectors are added and every other selector is left alone.

    Args:
        config: Base theme.
        patch: Literal table or zero-argument callable returning one.

    Returns:
        A new ThemeConfig; ``config`` itself is unchanged.
    """
    table = resolve_override(patch)
    if not table:
        return config
    merged = {selector: dict(decls) for selector, decls in config.overrides.items()}
    for selector, declarations in table.items():
        merged.setdefault(selector, {}).update(declarations)
    return dataclasses.replace(config, overrides=merged)


def load_config(project_root: Path) -> dict[str, Any]:
    """Load project configuration from cadence.yaml.

    Args:
        project_root: Root directory of the project.

    Returns:
        Dictionary containing configuration values, with defaults applied.

    Raises:
        ConfigurationError: If the file is not valid YAML.
    """
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"invalid YAML: {exc}", CONFIG_FILENAME) from None
            if isinstance(loaded, dict):
                config.update(loaded)
    return config


def resolve_environment(
    config: Mapping[str, Any], environ: Mapping[str, str] | None = None
) -> str:
    """Return the runtime environment name.

    ``CADENCE_ENV`` in the process environment wins over the ``environment``
    setting in cadence.yaml.
    """
    environ = os.environ if environ is None else environ
    env = environ.get("CADENCE_ENV") or config.get("environment") or "development"
    return str(env).strip().lower()


def is_production(environment: str) -> bool:
    return environment == "production"
