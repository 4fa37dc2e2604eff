"""
Skill palette overlay.

``SelectionSession`` is the state machine behind the palette: it owns the
query, the ranked view of the catalog and the highlighted row, and ends in
exactly one ``PaletteResult``. ``SkillPaletteComponent`` maps raw keys onto
it and renders it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence

import click

from skill_palette.palette.component import OverlayComponent
from skill_palette.palette.keys import is_printable, matches_key
from skill_palette.palette.render import (
    Box,
    bold,
    dim,
    hint,
    progress_bar,
    truncate,
    visible_len,
)
from skill_palette.skills.models import Skill
from skill_palette.skills.ranking import filter_skills

PALETTE_WIDTH = 70
MAX_VISIBLE = 8


class PaletteAction(str, Enum):
    """How the palette was closed."""
    SELECT = "select"
    UNQUEUE = "unqueue"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PaletteResult:
    action: PaletteAction
    skill: Optional[Skill] = None


class SelectionSession:
    """Query, ranked view and highlight for one palette invocation.

    ``highlight_index`` stays within ``filtered`` whenever ``filtered`` is
    non-empty. Every query change moves the highlight back to the top match.
    Once ``result`` is set the session ignores further input.
    """

    def __init__(self, skills: Sequence[Skill], queued_name: Optional[str] = None):
        self.all_skills: List[Skill] = list(skills)
        self.filtered: List[Skill] = list(skills)
        self.highlight_index = 0
        self.query = ""
        self.queued_name = queued_name
        self.result: Optional[PaletteResult] = None

    @property
    def is_open(self) -> bool:
        return self.result is None

    @property
    def highlighted(self) -> Optional[Skill]:
        if not self.filtered:
            return None
        return self.filtered[self.highlight_index]

    def cancel(self) -> Optional[PaletteResult]:
        if self.is_open:
            self.result = PaletteResult(PaletteAction.CANCEL)
        return self.result

    def confirm(self) -> Optional[PaletteResult]:
        """Select the highlighted skill, or request unqueue if it is queued.

        Does nothing when no skill matches the query.
        """
        skill = self.highlighted
        if not self.is_open or skill is None:
            return None
        if skill.name == self.queued_name:
            self.result = PaletteResult(PaletteAction.UNQUEUE, skill)
        else:
            self.result = PaletteResult(PaletteAction.SELECT, skill)
        return self.result

    def move_up(self) -> None:
        if self.is_open and self.filtered:
            if self.highlight_index == 0:
                self.highlight_index = len(self.filtered) - 1
            else:
                self.highlight_index -= 1

    def move_down(self) -> None:
        if self.is_open and self.filtered:
            if self.highlight_index == len(self.filtered) - 1:
                self.highlight_index = 0
            else:
                self.highlight_index += 1

    def erase(self) -> None:
        if self.is_open and self.query:
            self.query = self.query[:-1]
            self._update_filter()

    def type_char(self, char: str) -> None:
        if self.is_open:
            self.query += char
            self._update_filter()

    def _update_filter(self) -> None:
        self.filtered = filter_skills(self.all_skills, self.query)
        self.highlight_index = 0


class SkillPaletteComponent(OverlayComponent):
    """Searchable list of skills.

    Args:
        skills: The catalog
        queued_skill: Skill currently in the queue, if any
        done: Called once with the PaletteResult when the palette closes
    """

    def __init__(
        self,
        skills: Sequence[Skill],
        queued_skill: Optional[Skill],
        done: Callable[[PaletteResult], None],
        width: int = PALETTE_WIDTH,
        max_visible: int = MAX_VISIBLE,
    ):
        self.width = width
        self.max_visible = max_visible
        self.session = SelectionSession(
            skills, queued_skill.name if queued_skill else None
        )
        self._done = done

    def handle_input(self, data: str) -> None:
        session = self.session
        if not session.is_open:
            return

        if matches_key(data, "escape"):
            self._finish(session.cancel())
        elif matches_key(data, "return"):
            self._finish(session.confirm())
        elif matches_key(data, "up"):
            session.move_up()
        elif matches_key(data, "down"):
            session.move_down()
        elif matches_key(data, "backspace"):
            session.erase()
        elif is_printable(data):
            session.type_char(data)

    def _finish(self, result: Optional[PaletteResult]) -> None:
        if result is not None:
            self._done(result)

    def _visible_range(self) -> range:
        session = self.session
        total = len(session.filtered)
        start = max(0, min(session.highlight_index - self.max_visible // 2, total - self.max_visible))
        end = min(start + self.max_visible, total)
        return range(start, end)

    def render(self, width: int) -> List[str]:
        session = self.session
        box = Box(min(self.width, width - 4) - 2)
        lines: List[str] = [box.top(" Skills "), box.empty_row()]

        cursor = click.style("│", fg="cyan")
        query_display = session.query or click.style("type to filter...", dim=True, italic=True)
        lines.append(box.row(f"{dim('◎')}  {query_display}{cursor}"))
        lines.append(box.empty_row())
        lines.append(box.divider())

        if not session.filtered:
            lines.append(box.empty_row())
            lines.append(box.row(click.style("No matching skills", dim=True, italic=True)))
            lines.append(box.empty_row())
        else:
            lines.append(box.empty_row())
            for index in self._visible_range():
                lines.append(box.row(self._render_skill(index, box.inner_width)))
            lines.append(box.empty_row())

            total = len(session.filtered)
            if total > self.max_visible:
                position = session.highlight_index + 1
                bar = progress_bar(position / total)
                lines.append(box.row(dim(f"{bar}  {position}/{total}")))
                lines.append(box.empty_row())

        lines.append(box.divider())
        lines.append(box.empty_row())
        lines.append(box.row(self._render_hints()))
        lines.append(box.bottom())
        return lines

    def _render_skill(self, index: int, inner_width: int) -> str:
        skill = self.session.filtered[index]
        is_highlighted = index == self.session.highlight_index
        is_queued = skill.name == self.session.queued_name

        prefix = click.style("▸", fg="cyan") if is_highlighted else dim("·")
        name = bold(skill.name, fg="cyan") if is_highlighted else skill.name
        badge = " " + click.style("●", fg="green") if is_queued else ""
        max_desc_len = inner_width - visible_len(skill.name) - 12
        description = dim(truncate(skill.description, max_desc_len))
        return f"{prefix} {name}{badge}  {dim('—')}  {description}"

    def _render_hints(self) -> str:
        select = hint("enter", " select")
        if self.session.queued_name:
            select += dim("/unqueue")
        return hint("↑↓", " navigate  ") + select + dim("  ") + hint("esc", " cancel")
