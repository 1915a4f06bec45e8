"""Style injection for Cadence.

In development the engine's CSS is pushed into a style target so pages pick up
theme changes without a full build. Every target keeps a single copy of the
styles: re-injecting replaces what was injected before.

Key components:
- InjectionError: Raised by targets that cannot accept styles.
- HtmlDocumentTarget: Maintains a <style> element in an HTML file's <head>.
- StylesheetTarget: Writes a standalone CSS file.
- MemoryTarget: Keeps the CSS in memory.
- inject_styles: Injects and logs failures instead of raising.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from .protocols import StyleTarget

if TYPE_CHECKING:
    from .engine import TypographyEngine

logger = logging.getLogger(__name__)

STYLE_ELEMENT_ID = "typography"

_HEAD_OPEN_RE = re.compile(r"<head(\s[^>]*)?>", re.IGNORECASE)


class InjectionError(Exception):
    """A style target could not accept styles.

    Attributes:
        target: Description of the target.
        message: Human-readable error message.
    """

    def __init__(self, target: str, message: str):
        self.target = target
        self.message = message
        super().__init__(f"{target}: {message}")


def _style_element_re(element_id: str) -> re.Pattern[str]:
    return re.compile(
        r'<style\b[^>]*\bid=["\']' + re.escape(element_id) + r'["\'][^>]*>.*?</style>',
        re.IGNORECASE | re.DOTALL,
    )


class HtmlDocumentTarget:
    """Injects styles into an HTML document on disk.

    The styles live in ``<style id="typography">`` as the first child of
    ``<head>``. If the element already exists its contents are replaced.

    Attributes:
        path: HTML file to update.
        element_id: id of the managed style element.
    """

    def __init__(self, path: Path, element_id: str = STYLE_ELEMENT_ID):
        self.path = path
        self.element_id = element_id

    def inject(self, css: str) -> None:
        if not self.path.exists():
            raise InjectionError(str(self.path), "document does not exist")
        try:
            html = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            raise InjectionError(str(self.path), "document is not valid UTF-8") from None
        self.path.write_text(self.apply(html, css), encoding="utf-8")

    def apply(self, html: str, css: str) -> str:
        """Return ``html`` with the managed style element set to ``css``."""
        element = f'<style id="{self.element_id}">{css}</style>'
        pattern = _style_element_re(self.element_id)
        if pattern.search(html):
            return pattern.sub(lambda _: element, html, count=1)
        head = _HEAD_OPEN_RE.search(html)
        if not head:
            raise InjectionError(str(self.path), "document has no <head> element")
        return html[: head.end()] + element + html[head.end() :]

    def __repr__(self) -> str:
        return f"HtmlDocumentTarget({str(self.path)!r})"


class StylesheetTarget:
    """Writes styles to a standalone CSS file, replacing its contents."""

    def __init__(self, path: Path):
        self.path = path

    def inject(self, css: str) -> None:
        if not self.path.parent.is_dir():
            raise InjectionError(str(self.path), "parent directory does not exist")
        self.path.write_text(css, encoding="utf-8")

    def __repr__(self) -> str:
        return f"StylesheetTarget({str(self.path)!r})"


class MemoryTarget:
    """Keeps injected styles in memory.

    Attributes:
        css: Last injected stylesheet, or None.
        injections: Number of times styles were injected.
    """

    def __init__(self):
        self.css: str | None = None
        self.injections = 0

    def inject(self, css: str) -> None:
        self.css = css
        self.injections += 1


def target_for_path(path: Path) -> StyleTarget:
    """Pick a style target for a file based on its extension."""
    if path.suffix.lower() == ".css":
        return StylesheetTarget(path)
    return HtmlDocumentTarget(path)


def inject_styles(engine: TypographyEngine, target: StyleTarget | None) -> bool:
    """Inject the engine's CSS into ``target``.

    Failures are logged and reported through the return value; the engine
    stays usable either way.

    Args:
        engine: Engine whose stylesheet to inject.
        target: Style target, or None when no target is available.

    Returns:
        True if the styles were injected.
    """
    if target is None:
        logger.warning("No style target available; skipping style injection")
        return False
    try:
        target.inject(engine.to_css())
    except (InjectionError, OSError) as exc:
        logger.warning("Style injection into %r failed: %s", target, exc)
        return False
    logger.debug("Injected typography styles into %r", target)
    return True
