"""
Skill Message Protocol

Defines the message attached to an outgoing prompt when a queued skill
is injected.
"""

from dataclasses import dataclass
from typing import Any, Dict

SKILL_CONTEXT_TYPE = "skill-context"


@dataclass
class SkillMessage:
    """
    Extra message segment sent alongside the operator's prompt.

    Attributes:
        content: Message content (the wrapped skill instructions)
        custom_type: Tag identifying the segment to the host
        display: Whether the host shows the segment in the transcript
    """
    content: str
    custom_type: str = SKILL_CONTEXT_TYPE
    display: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the host's message format."""
        return {
            "customType": self.custom_type,
            "content": self.content,
            "display": self.display,
        }


__all__ = [
    "SKILL_CONTEXT_TYPE",
    "SkillMessage",
]
