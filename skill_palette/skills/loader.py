"""
Skill Loader for the skill palette.

Scans a priority-ordered list of directories for ``<dir>/<skill>/SKILL.md``
files and builds the catalog. Directories are searched in order and the
first directory that provides a name wins; lower-priority duplicates are
dropped, not merged.
"""

import locale
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from skill_palette.skills.models import Skill, SkillFrontmatter

logger = logging.getLogger(__name__)


class SkillLoadError(Exception):
    """Raised when a skill definition file cannot be read."""

    pass


SKILL_FILE_NAME = "SKILL.md"
FRONTMATTER_MARKER = "---"


def _split_frontmatter(content: str) -> Optional[Tuple[str, str]]:
    """Split ``content`` into (header, body) or return None.

    The header must start at the very first character and ends at the
    first following line that begins with the marker.
    """
    if not content.startswith(FRONTMATTER_MARKER):
        return None

    end_index = content.find("\n" + FRONTMATTER_MARKER, len(FRONTMATTER_MARKER))
    if end_index == -1:
        return None

    header = content[len(FRONTMATTER_MARKER) + 1:end_index]
    body = content[end_index + len(FRONTMATTER_MARKER) + 1:]
    return header, body


def parse_frontmatter(content: str, fallback_name: str) -> SkillFrontmatter:
    """Parse the ``key: value`` header of a SKILL.md file.

    Args:
        content: Raw file text
        fallback_name: Name used when the header is missing or has no name

    Returns:
        SkillFrontmatter with ``name`` always set
    """
    parts = _split_frontmatter(content)
    if parts is None:
        return SkillFrontmatter(name=fallback_name, description="")

    values: Dict[str, str] = {}
    for line in parts[0].split("\n"):
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key in ("name", "description"):
            values[key] = value.strip()

    return SkillFrontmatter(
        name=values.get("name") or fallback_name,
        description=values.get("description", ""),
    )


def strip_frontmatter(content: str) -> str:
    """Return the body of a SKILL.md file without its header block."""
    parts = _split_frontmatter(content)
    if parts is None:
        return content
    return parts[1].strip()


def read_skill_content(skill: Skill) -> str:
    """Read a skill's instructions with the header block removed.

    Raises:
        SkillLoadError: If the definition file can no longer be read
    """
    try:
        raw = skill.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SkillLoadError(f"{skill.path}: {e}") from e
    return strip_frontmatter(raw)


def catalog_sort_key(name: str) -> Tuple[str, str]:
    """Locale-aware sort key, case-insensitive first, then exact."""
    return locale.strxfrm(name.casefold()), name


class SkillLoader:
    """Scan skill directories and build the catalog.

    Missing or unreadable directories, non-directory entries, entries
    without SKILL.md and files that cannot be read are skipped; nothing
    raised by the filesystem escapes ``load()``.
    """

    def __init__(self, skills_dirs: Iterable[Path], file_name: str = SKILL_FILE_NAME):
        """Initialize the skill loader.

        Args:
            skills_dirs: Directories to search, highest priority first.
                        Example: [Path("~/.pi/agent/skills").expanduser(), Path(".pi/skills")]
            file_name: Name of the definition file inside each skill directory
        """
        self.skills_dirs = [Path(d) for d in skills_dirs]
        self.file_name = file_name

    def load(self) -> List[Skill]:
        """Build the deduplicated, sorted catalog.

        Returns:
            Skills sorted by name, names unique
        """
        skills_by_name: Dict[str, Skill] = {}

        for directory in self.skills_dirs:
            try:
                entries = sorted(directory.iterdir())
            except OSError as e:
                logger.debug(f"Skipping skills directory {directory}: {e}")
                continue

            for entry in entries:
                skill = self._load_entry(entry)
                if skill is None:
                    continue
                if not skill.description:
                    logger.debug(f"Skipping {skill.path}: no description")
                    continue
                # First occurrence wins (higher priority directory)
                if skill.name in skills_by_name:
                    logger.debug(
                        f"Skipping {skill.path}: '{skill.name}' already provided by "
                        f"{skills_by_name[skill.name].path}"
                    )
                    continue
                skills_by_name[skill.name] = skill

        catalog = sorted(skills_by_name.values(), key=lambda s: catalog_sort_key(s.name))
        logger.info(f"Loaded {len(catalog)} skills from {len(self.skills_dirs)} directories")
        return catalog

    def _load_entry(self, entry: Path) -> Optional[Skill]:
        """Parse one directory entry, or None if it is not a usable skill."""
        try:
            # is_dir() follows symlinks
            if not entry.is_dir():
                return None
            skill_md = entry / self.file_name
            if not skill_md.is_file():
                return None
            content = skill_md.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping {entry}: {e}")
            return None

        frontmatter = parse_frontmatter(content, entry.name)
        if "\x00" in frontmatter.name:
            logger.debug(f"Skipping {skill_md}: name contains a NUL character")
            return None
        return Skill(
            name=frontmatter.name,
            description=frontmatter.description,
            path=skill_md,
        )


def load_skills(skills_dirs: Iterable[Path], file_name: str = SKILL_FILE_NAME) -> List[Skill]:
    """Convenience wrapper around ``SkillLoader(...).load()``."""
    return SkillLoader(skills_dirs, file_name=file_name).load()
