"""
Skill data models for the skill palette.

Defines:
- SkillFrontmatter: key/value header parsed from SKILL.md
- Skill: immutable catalog entry
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class SkillFrontmatter(BaseModel):
    """Header block parsed from the top of a SKILL.md file.

    Only ``name`` and ``description`` are read; any other keys in the
    block are ignored by the parser.
    """

    name: Optional[str] = Field(
        None,
        description="Skill name; falls back to the directory name when absent",
    )
    description: str = Field(
        default="",
        description="What the skill does. Skills without one are not listed.",
    )


@dataclass(frozen=True)
class Skill:
    """A discovered skill.

    Created once while the catalog loads and never mutated. ``path`` points
    at the SKILL.md file and is only used to re-read the body on injection.
    """

    name: str
    description: str
    path: Path
