"""Cadence typography theming.

This package turns a typography theme (base font size, line height, modular
scale ratio, font stacks and style overrides) into a read-only typography
engine. The engine answers vertical-rhythm and modular-scale questions for
presentation code and renders the global CSS for a static blog.

The main entry point for applications is ``cadence.bootstrap.initialize``,
which merges a style-override patch into a theme, builds the engine and,
outside production, injects its CSS into a style target.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
