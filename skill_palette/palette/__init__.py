"""
Skill palette overlays.

Components:
- SkillPaletteComponent: searchable skill list (selection state machine)
- ConfirmDialog: timed Remove/Keep confirmation for unqueueing
"""

from skill_palette.palette.component import OverlayComponent
from skill_palette.palette.confirm import (
    ConfirmButton,
    ConfirmDialog,
    ConfirmationSession,
)
from skill_palette.palette.keys import matches_key
from skill_palette.palette.selector import (
    PaletteAction,
    PaletteResult,
    SelectionSession,
    SkillPaletteComponent,
)
from skill_palette.palette.timers import Scheduler, ThreadingScheduler, TimerHandle

__all__ = [
    "OverlayComponent",
    "SkillPaletteComponent",
    "SelectionSession",
    "PaletteAction",
    "PaletteResult",
    "ConfirmDialog",
    "ConfirmationSession",
    "ConfirmButton",
    "Scheduler",
    "ThreadingScheduler",
    "TimerHandle",
    "matches_key",
]
