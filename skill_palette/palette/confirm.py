"""
Unqueue confirmation dialog.

``ConfirmationSession`` reaches exactly one outcome: ``True`` (remove the
queued skill) or ``False`` (keep it). Input and the deadline timer race for
it; whichever arrives first wins and both timers are released at once.
When the deadline passes without input the outcome is ``False``.
"""

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional

import click

from skill_palette.palette.component import OverlayComponent
from skill_palette.palette.keys import matches_key
from skill_palette.palette.render import Box, bold, dim, hint, progress_bar
from skill_palette.palette.timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

CONFIRM_WIDTH = 44
CONFIRM_TIMEOUT_SECONDS = 30


class ConfirmButton(str, Enum):
    REMOVE = "remove"
    KEEP = "keep"


class ConfirmationSession:
    """State for one open confirmation dialog.

    Args:
        skill_name: Name of the queued skill being removed
        on_done: Called exactly once with the outcome
        scheduler: Source of the countdown and deadline timers
        timeout_seconds: Seconds before the dialog keeps the skill on its own
    """

    def __init__(
        self,
        skill_name: str,
        on_done: Callable[[bool], None],
        scheduler: Scheduler,
        timeout_seconds: int = CONFIRM_TIMEOUT_SECONDS,
    ):
        self.skill_name = skill_name
        self.timeout_seconds = timeout_seconds
        self.remaining_seconds = timeout_seconds
        self.focused = ConfirmButton.KEEP
        self.outcome: Optional[bool] = None
        self._on_done = on_done
        self._lock = threading.Lock()
        self._timers: List[TimerHandle] = [
            scheduler.call_later(timeout_seconds, self._on_deadline),
            scheduler.call_every(1, self._on_tick),
        ]

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None

    def toggle_focus(self) -> None:
        with self._lock:
            if self.outcome is None:
                self.focused = (
                    ConfirmButton.KEEP if self.focused is ConfirmButton.REMOVE
                    else ConfirmButton.REMOVE
                )

    def confirm(self) -> bool:
        """Choose the focused button."""
        return self._finish(self.focused is ConfirmButton.REMOVE)

    def cancel(self) -> bool:
        return self._finish(False)

    def answer(self, remove: bool) -> bool:
        """Yes/no shortcut, ignoring focus."""
        return self._finish(remove)

    def release(self) -> None:
        """Cancel both timers. Idempotent."""
        for timer in self._timers:
            timer.cancel()

    def _finish(self, remove: bool) -> bool:
        with self._lock:
            if self.outcome is not None:
                return False
            self.outcome = remove
            self.release()
        self._on_done(remove)
        return True

    def _on_tick(self) -> None:
        with self._lock:
            if self.outcome is None and self.remaining_seconds > 0:
                self.remaining_seconds -= 1

    def _on_deadline(self) -> None:
        if self._finish(False):
            logger.info(f"Unqueue confirmation for '{self.skill_name}' timed out; keeping skill")


class ConfirmDialog(OverlayComponent):
    """Remove/Keep dialog shown when the queued skill is selected again."""

    def __init__(
        self,
        skill_name: str,
        done: Callable[[bool], None],
        scheduler: Scheduler,
        timeout_seconds: int = CONFIRM_TIMEOUT_SECONDS,
        width: int = CONFIRM_WIDTH,
    ):
        self.width = width
        self.session = ConfirmationSession(skill_name, done, scheduler, timeout_seconds)

    def handle_input(self, data: str) -> None:
        session = self.session
        if matches_key(data, "escape"):
            session.cancel()
        elif matches_key(data, "return"):
            session.confirm()
        elif matches_key(data, "left") or matches_key(data, "right") or matches_key(data, "tab"):
            session.toggle_focus()
        elif data in ("y", "Y"):
            session.answer(True)
        elif data in ("n", "N"):
            session.answer(False)

    def render(self, width: int) -> List[str]:
        session = self.session
        box = Box(min(self.width, width - 4) - 2)
        lines: List[str] = [box.top(" Unqueue Skill "), box.empty_row()]

        lines.append(box.center_row(f"{click.style('◆', fg='yellow')} {bold(session.skill_name)}"))
        lines.append(box.empty_row())
        lines.append(box.divider())
        lines.append(box.empty_row())

        remove_label = "  Remove  "
        keep_label = "  Keep  "
        if session.focused is ConfirmButton.REMOVE:
            remove_button = click.style(remove_label, fg="red", bold=True, reverse=True)
            keep_button = dim(keep_label)
        else:
            remove_button = dim(remove_label)
            keep_button = click.style(keep_label, fg="green", bold=True, reverse=True)
        lines.append(box.center_row(f"{remove_button}   {keep_button}"))
        lines.append(box.empty_row())

        bar = progress_bar(session.remaining_seconds / session.timeout_seconds)
        lines.append(box.center_row(dim(f"{bar}  {session.remaining_seconds}s")))
        lines.append(box.empty_row())

        lines.append(box.center_row(
            hint("tab", " switch  ") + hint("enter", " confirm  ") + hint("esc", " cancel")
        ))
        lines.append(box.bottom())
        return lines

    def dispose(self) -> None:
        self.session.release()
