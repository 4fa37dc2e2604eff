"""
Shared fixtures for skills tests
"""

from pathlib import Path

import pytest

from skill_palette.skills.models import Skill


@pytest.fixture
def skills_base_dir(tmp_path):
    """Create a temporary skills directory."""
    skills_dir = tmp_path / "skills"
    skills_dir.mkdir()
    return skills_dir


@pytest.fixture
def catalog():
    """Small alphabetical catalog (no files behind it)."""
    return [
        Skill(name="alpha", description="A", path=Path("/nonexistent/alpha/SKILL.md")),
        Skill(name="beta", description="B", path=Path("/nonexistent/beta/SKILL.md")),
    ]
