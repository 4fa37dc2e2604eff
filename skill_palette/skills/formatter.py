"""
Formatter for the skill palette.

Builds the injected skill message and the text of the persistent
indicators shown while a skill is queued.
"""

from typing import List

import click

from skill_palette.skills.message_protocol import SkillMessage
from skill_palette.skills.models import Skill

INDICATOR_KEY = "skill"
SKILL_ICON = "📚"


class SkillMessageFormatter:
    """Format skill-related messages and indicators."""

    @staticmethod
    def create_context_message(skill: Skill, content: str) -> SkillMessage:
        """Wrap skill instructions for injection.

        The message is hidden from the transcript (display=False) and only
        sent to the model.
        """
        return SkillMessage(content=f'<skill name="{skill.name}">\n{content}\n</skill>')

    @staticmethod
    def status_text(skill: Skill) -> str:
        return f"{SKILL_ICON} {skill.name}"

    @staticmethod
    def widget_lines(skill: Skill) -> List[str]:
        """One-line widget shown above the editor while queued."""
        return [
            click.style(f"{SKILL_ICON} Skill: ", dim=True)
            + click.style(skill.name, fg="cyan")
            + click.style(" — will be applied to next message", dim=True)
        ]

    @staticmethod
    def queued_notice(skill: Skill) -> str:
        return f"Skill queued: {skill.name}"

    @staticmethod
    def unqueued_notice() -> str:
        return "Skill unqueued"

    @staticmethod
    def load_failed_notice(skill: Skill) -> str:
        return f"Failed to load skill: {skill.name}"
