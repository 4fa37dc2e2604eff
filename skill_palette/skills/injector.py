"""
Skill Injector for the skill palette.

Drains the queue right before the next outgoing message and turns the
queued skill into a hidden skill-context message.
"""

import logging
from typing import Optional, TYPE_CHECKING

from skill_palette.skills.formatter import INDICATOR_KEY, SkillMessageFormatter
from skill_palette.skills.loader import SkillLoadError, read_skill_content
from skill_palette.skills.message_protocol import SkillMessage
from skill_palette.skills.queue import SkillQueue

if TYPE_CHECKING:
    from skill_palette.hooks.hook_manager import HookContext

logger = logging.getLogger(__name__)


class SkillInjector:
    """Attach the queued skill to the next outgoing message.

    The injector is responsible for:
    - Taking the queued skill exactly once
    - Clearing the queued-skill indicators
    - Reading the skill body and wrapping it for the model
    """

    def __init__(self, queue: SkillQueue):
        """Initialize the skill injector.

        Args:
            queue: The queue shared with the palette command
        """
        self.queue = queue
        self.formatter = SkillMessageFormatter()

    def __call__(self, context: "HookContext") -> Optional[SkillMessage]:
        return self.inject(context.ui)

    def inject(self, ui) -> Optional[SkillMessage]:
        """Build the skill-context message for the queued skill.

        The slot is cleared before the file is read, so a read failure
        does not inject the skill again on a later message.

        Args:
            ui: UIContext used to clear indicators and report failures

        Returns:
            SkillMessage, or None when nothing is queued or the skill
            file could not be read
        """
        skill = self.queue.take()
        if skill is None:
            return None

        if ui is not None:
            ui.set_status(INDICATOR_KEY, None)
            ui.set_widget(INDICATOR_KEY, None)

        try:
            content = read_skill_content(skill)
        except SkillLoadError as e:
            logger.warning(f"Failed to load skill '{skill.name}': {e}")
            if ui is not None:
                ui.notify(self.formatter.load_failed_notice(skill), "warning")
            return None

        logger.info(f"Injecting skill '{skill.name}' into outgoing message")
        return self.formatter.create_context_message(skill, content)
