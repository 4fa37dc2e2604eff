"""
Styling and box-drawing helpers shared by the overlays.

All styling goes through ``click.style``; widths are measured on the
unstyled text.
"""

from typing import Optional

import click


def dim(text: str) -> str:
    return click.style(text, dim=True)


def bold(text: str, fg: Optional[str] = None) -> str:
    return click.style(text, fg=fg, bold=True)


def hint(key: str, label: str) -> str:
    """Footer hint: italic key name followed by a dim label."""
    return click.style(key, italic=True, dim=True) + dim(label)


def visible_len(text: str) -> int:
    return len(click.unstyle(text))


def pad(text: str, length: int) -> str:
    return text + " " * max(0, length - visible_len(text))


def center(text: str, length: int) -> str:
    padding = max(0, length - visible_len(text))
    left = padding // 2
    return " " * left + text + " " * (padding - left)


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    if max_len <= 0:
        return ""
    return text[:max_len - 1] + "…"


def progress_bar(fraction: float, slots: int = 10) -> str:
    """``●●●○○○○○○○`` with ``fraction`` rounded half up to a slot."""
    filled = min(slots, max(0, int(fraction * slots + 0.5)))
    return "●" * filled + "○" * (slots - filled)


class Box:
    """Rounded border box of a fixed inner width."""

    def __init__(self, inner_width: int):
        self.inner_width = max(0, inner_width)

    def top(self, title: str) -> str:
        border_len = max(0, self.inner_width - len(title))
        left = border_len // 2
        right = border_len - left
        return dim("╭" + "─" * left + title + "─" * right + "╮")

    def bottom(self) -> str:
        return dim("╰" + "─" * self.inner_width + "╯")

    def divider(self) -> str:
        return dim("├" + "─" * self.inner_width + "┤")

    def row(self, content: str) -> str:
        return dim("│") + pad(" " + content, self.inner_width) + dim("│")

    def center_row(self, content: str) -> str:
        return dim("│") + center(content, self.inner_width) + dim("│")

    def empty_row(self) -> str:
        return dim("│") + " " * self.inner_width + dim("│")
