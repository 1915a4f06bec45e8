"""Page rendering helpers for Cadence.

Pages are rendered with Jinja2. The typography context is exposed to
templates as globals so markup can space and size itself on the theme's
rhythm, e.g. ``style="margin-bottom: {{ rhythm(0.25) }}"``.

Key functions:
- create_environment: Jinja2 environment with typography globals installed.
- install_typography_globals: Add typography globals to an existing environment.
- render_not_found: Render the 404 page.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .bootstrap import AppContext

_TEMPLATES_DIR = Path(__file__).parent / "templates"


def install_typography_globals(env: Environment, context: AppContext) -> None:
    """Install typography globals in a Jinja environment."""
    engine = context.engine
    env.globals["rhythm"] = context.rhythm
    env.globals["scale"] = context.scale
    env.globals["typography_css"] = lambda: Markup(engine.to_css())
    env.globals["google_fonts_url"] = engine.google_fonts_url


def create_environment(context: AppContext, template_dirs: list[Path] | None = None) -> Environment:
    """Create a Jinja2 environment for typography-aware pages.

    Args:
        context: Initialized typography context.
        template_dirs: Extra template directories searched before the
            bundled templates.

    Returns:
        Configured Jinja2 Environment.
    """
    env = Environment(
        loader=FileSystemLoader([*(template_dirs or []), _TEMPLATES_DIR]),
        autoescape=select_autoescape(["html", "xml", "jinja"]),
    )
    install_typography_globals(env, context)
    return env


def render_not_found(context: AppContext, site_title: str, home_url: str = "/") -> str:
    """Render the 404 page.

    Args:
        context: Initialized typography context.
        site_title: Site title for the header and <title>.
        home_url: Link target of the "back home" link.

    Returns:
        Rendered HTML.
    """
    env = create_environment(context)
    template = env.get_template("404.html.jinja")
    return template.render(site_title=site_title, home_url=home_url)
