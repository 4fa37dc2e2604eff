"""
Single-slot skill queue.

The queue holds the skill that will be attached to the next outgoing
message. One instance is shared by reference between the palette command
and the pre-send hook; it lives for the whole process and is never
persisted.
"""

import logging
from typing import Optional

from skill_palette.skills.models import Skill

logger = logging.getLogger(__name__)


class SkillQueue:
    """Holds at most one pending skill."""

    def __init__(self) -> None:
        self._queued: Optional[Skill] = None

    @property
    def queued_skill(self) -> Optional[Skill]:
        return self._queued

    @property
    def queued_name(self) -> Optional[str]:
        return self._queued.name if self._queued else None

    def is_empty(self) -> bool:
        return self._queued is None

    def is_queued(self, skill_name: str) -> bool:
        return self._queued is not None and self._queued.name == skill_name

    def enqueue(self, skill: Skill) -> Optional[Skill]:
        """Queue ``skill``, replacing whatever was queued.

        Returns:
            The skill that was replaced, if any
        """
        previous = self._queued
        self._queued = skill
        if previous is not None and previous.name != skill.name:
            logger.info(f"Replaced queued skill '{previous.name}' with '{skill.name}'")
        else:
            logger.info(f"Queued skill '{skill.name}'")
        return previous

    def clear(self) -> Optional[Skill]:
        """Empty the slot and return what was in it."""
        previous = self._queued
        self._queued = None
        if previous is not None:
            logger.info(f"Unqueued skill '{previous.name}'")
        return previous

    def take(self) -> Optional[Skill]:
        """Drain the slot for injection. Second call returns None."""
        skill = self._queued
        self._queued = None
        return skill
