"""
Overlay component interface.

The host mounts one overlay at a time, forwards raw keystrokes to
``handle_input`` and paints whatever ``render`` returns. ``dispose`` is
called when the overlay is unmounted and must release any timers.
"""

from abc import ABC, abstractmethod
from typing import List


class OverlayComponent(ABC):
    """Base class for modal overlays (palette, confirmation dialog)."""

    width: int

    @abstractmethod
    def render(self, width: int) -> List[str]:
        """Render to styled lines no wider than ``width - 4``."""

    @abstractmethod
    def handle_input(self, data: str) -> None:
        """Handle one raw input event."""

    def invalidate(self) -> None:
        """Drop cached render state. Nothing is cached by default."""

    def dispose(self) -> None:
        """Release resources held by the component."""
