"""
Skill Registry for the skill palette.

Holds the catalog for the lifetime of the process. The catalog is read
from disk on first access and never reloaded afterwards.
"""

from typing import List, Optional

from skill_palette.skills.loader import SkillLoader
from skill_palette.skills.models import Skill
from skill_palette.skills.ranking import filter_skills


class SkillRegistry:
    """Central registry for all available skills.

    The registry caches the catalog and provides methods to:
    - Look up skills by name
    - Filter the catalog against a palette query
    - Format the catalog for listings
    """

    def __init__(self, loader: SkillLoader):
        """Initialize the skill registry.

        Args:
            loader: SkillLoader instance used for the one-time scan
        """
        self.loader = loader
        self._catalog: Optional[List[Skill]] = None

    def get_catalog(self) -> List[Skill]:
        """Get the sorted catalog, scanning the directories on first use."""
        if self._catalog is None:
            self._catalog = self.loader.load()
        return self._catalog

    def get_skill(self, skill_name: str) -> Optional[Skill]:
        """Get a skill by name, or None if not found."""
        for skill in self.get_catalog():
            if skill.name == skill_name:
                return skill
        return None

    def skill_exists(self, skill_name: str) -> bool:
        return self.get_skill(skill_name) is not None

    def list_skill_names(self) -> List[str]:
        """List all skill names in catalog order."""
        return [skill.name for skill in self.get_catalog()]

    def filter(self, query: str) -> List[Skill]:
        """Filter and rank the catalog for ``query``."""
        return filter_skills(self.get_catalog(), query)

    def get_formatted_skills_list(self) -> str:
        """Format the catalog one skill per line.

        Returns:
            Formatted string like:
            "code-review — Review a diff for bugs
             planning — Break work into steps"
        """
        return "\n".join(
            f"{skill.name} — {skill.description}" for skill in self.get_catalog()
        )
