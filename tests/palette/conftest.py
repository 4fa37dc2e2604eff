"""
Shared fixtures for palette tests
"""

from pathlib import Path

import pytest

from skill_palette.skills.models import Skill


@pytest.fixture
def three_skills():
    return [
        Skill(name=name, description=f"{name} description", path=Path(f"/skills/{name}/SKILL.md"))
        for name in ["code-review", "planning", "testing"]
    ]
