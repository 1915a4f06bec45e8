"""Command-line interface for Cadence.

This module defines the CLI commands using the Click framework. Commands run
against the project in the current directory (its cadence.yaml).

Commands:
- css: Print the theme's stylesheet.
- themes: List bundled themes.
- rhythm: Print a vertical-rhythm value.
- scale: Print the font size and line height for a modular scale step.
- inject: Inject the stylesheet into an HTML or CSS file.
- watch: Re-inject styles whenever the configuration changes.
- not-found: Render the 404 page.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from . import __version__
from .bootstrap import AppContext, initialize_project
from .config import ConfigurationError, is_production, load_config, resolve_environment
from .injection import MemoryTarget, target_for_path
from .themes import create_default_registry

# Lets negative numbers such as "-1" through as arguments instead of options.
NUMERIC_ARGUMENT_SETTINGS = {"ignore_unknown_options": True}


@click.group()
@click.version_option(version=__version__, prog_name="cadence")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
def cli(verbose: bool):
    """Cadence typography theming."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_context(target=None) -> AppContext:
    """Initialize from the current directory, turning config errors into exit code 1."""
    project_root = Path.cwd()
    # Commands that only read values use a throwaway target so nothing on
    # disk is touched.
    try:
        return initialize_project(project_root, target=target or MemoryTarget())
    except ConfigurationError as exc:
        _fail(exc)


def _fail(exc: ConfigurationError) -> None:
    click.echo(click.style("Configuration error:", fg="red", bold=True), err=True)
    if exc.field:
        click.echo(click.style(f"  Option: {exc.field}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
    raise SystemExit(1) from None


@cli.command()
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Write to a file")
def css(output: Path | None):
    """Print the theme's stylesheet."""
    context = _load_context()
    text = context.engine.to_css()
    if output:
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {len(text)} bytes of CSS to {output}")
    else:
        click.echo(text)


@cli.command()
def themes():
    """List bundled themes."""
    for name in create_default_registry().names():
        click.echo(name)


@cli.command(context_settings=NUMERIC_ARGUMENT_SETTINGS)
@click.argument("lines", type=float, default=1.0)
def rhythm(lines: float):
    """Print LINES base line heights as a CSS length."""
    context = _load_context()
    click.echo(str(context.rhythm(lines)))


@cli.command(context_settings=NUMERIC_ARGUMENT_SETTINGS)
@click.argument("step", type=float, default=0.0)
def scale(step: float):
    """Print font size and line height for STEP on the modular scale."""
    context = _load_context()
    try:
        size = context.scale(step)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="STEP") from None
    click.echo(f"font-size: {size.font_size}")
    click.echo(f"line-height: {size.line_height}")


@cli.command()
@click.argument("target", type=click.Path(path_type=Path))
def inject(target: Path):
    """Inject the stylesheet into TARGET (an .html or .css file).

    Nothing is injected when the environment is production.
    """
    context = _load_context(target_for_path(target))
    if context.injected:
        click.echo(f"Injected {context.config.title} styles into {target}")
        return
    environment = resolve_environment(load_config(Path.cwd()))
    if is_production(environment):
        click.echo("Production environment; styles are embedded at build time.")
    else:
        raise click.ClickException(f"Could not inject styles into {target}")


@cli.command()
@click.argument("target", type=click.Path(path_type=Path))
def watch(target: Path):
    """Re-inject styles into TARGET whenever the configuration changes."""
    project_root = Path.cwd()
    try:
        environment = resolve_environment(load_config(project_root))
    except ConfigurationError as exc:
        _fail(exc)
    if is_production(environment):
        raise click.ClickException("watch is a development command; unset CADENCE_ENV=production")
    from .watch import StyleWatcher

    watcher = StyleWatcher(project_root, target_for_path(target))
    click.echo(f"Watching {project_root} for theme changes (Ctrl+C to stop)")
    watcher.start()


@cli.command("not-found")
@click.argument("output", type=click.Path(path_type=Path))
@click.option("--title", help="Site title (overrides cadence.yaml site_title)")
def not_found(output: Path, title: str | None):
    """Render the 404 page to OUTPUT."""
    from .pages import render_not_found

    context = _load_context()
    site_title = title or load_config(Path.cwd()).get("site_title") or "Blog"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_not_found(context, site_title), encoding="utf-8")
    click.echo(f"Wrote {output}")


def main():
    """Entry point for the CLI application."""
    cli()
