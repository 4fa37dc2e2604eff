"""
Skill Palette Skills System

Skills are instruction packages (SKILL.md files) that the operator picks
explicitly from the palette. A picked skill waits in a single-slot queue
and is attached to the next outgoing message as hidden context.

Components:
- SkillLoader: Scan skill directories and build the catalog
- SkillRegistry: Hold the catalog for the session
- fuzzy_score / filter_skills: Rank the catalog against a query
- SkillQueue: Single-slot queue for the pending skill
- SkillInjector: Drain the queue into a skill-context message
- SkillMessageFormatter: Format injected messages and indicators
"""

from skill_palette.skills.formatter import INDICATOR_KEY, SkillMessageFormatter
from skill_palette.skills.injector import SkillInjector
from skill_palette.skills.loader import (
    SkillLoadError,
    SkillLoader,
    load_skills,
    parse_frontmatter,
    read_skill_content,
    strip_frontmatter,
)
from skill_palette.skills.message_protocol import SKILL_CONTEXT_TYPE, SkillMessage
from skill_palette.skills.models import Skill, SkillFrontmatter
from skill_palette.skills.queue import SkillQueue
from skill_palette.skills.ranking import filter_skills, fuzzy_score, rank_skills
from skill_palette.skills.registry import SkillRegistry

__all__ = [
    # Models
    "Skill",
    "SkillFrontmatter",
    "SkillMessage",
    "SKILL_CONTEXT_TYPE",
    # Core components
    "SkillLoader",
    "SkillRegistry",
    "SkillQueue",
    "SkillInjector",
    "SkillMessageFormatter",
    "INDICATOR_KEY",
    # Functions
    "load_skills",
    "parse_frontmatter",
    "strip_frontmatter",
    "read_skill_content",
    "fuzzy_score",
    "rank_skills",
    "filter_skills",
    # Exceptions
    "SkillLoadError",
]
