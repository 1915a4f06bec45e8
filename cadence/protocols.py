"""Protocol definitions for Cadence.

These interfaces decouple the bootstrap from where themes come from and where
generated CSS goes, so either side can be swapped for a test double or a new
implementation without modifying existing code.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .config import ThemeConfig


@runtime_checkable
class StyleTarget(Protocol):
    """Protocol for places generated CSS can be injected into.

    Implementations must be idempotent: injecting twice leaves the target in
    the same state as injecting once with the latest CSS.
    """

    @abstractmethod
    def inject(self, css: str) -> None:
        """Install ``css`` into the target.

        Args:
            css: Stylesheet text.

        Raises:
            InjectionError: If the target is unavailable.
        """
        ...


@runtime_checkable
class ThemeProvider(Protocol):
    """Protocol for sources of a base ThemeConfig."""

    @abstractmethod
    def load(self) -> ThemeConfig:
        """Return the theme.

        Raises:
            ConfigurationError: If the theme definition is malformed.
        """
        ...
