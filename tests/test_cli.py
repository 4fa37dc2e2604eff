"""
Skill Palette CLI 测试
"""

import logging

import pytest
from click.testing import CliRunner

from skill_palette import __version__
from skill_palette.cli import cli


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI 会重置根日志处理器，测试后恢复"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def skills_dir(tmp_path, make_skill_md):
    base = tmp_path / "skills"
    make_skill_md(base, "code-review", name="code-review", description="Review code changes",
                  body="Check every diff.\n")
    make_skill_md(base, "planning", name="planning", description="Plan the work")
    return base


def invoke(tmp_path, *args):
    """在不读取用户配置的前提下运行 CLI"""
    runner = CliRunner()
    return runner.invoke(cli, ["--config", str(tmp_path / "missing.yaml"), *args])


class TestSkillPaletteCLI:
    """测试 Skill Palette CLI 命令"""

    def test_help(self):
        """测试帮助信息"""
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Skill Palette CLI" in result.output

    def test_version(self):
        """测试版本号"""
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_list(self, tmp_path, skills_dir):
        """测试 list 命令"""
        result = invoke(tmp_path, "--dir", str(skills_dir), "list")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "code-review — Review code changes",
            "planning — Plan the work",
        ]

    def test_list_empty(self, tmp_path):
        """测试没有 Skill 时的 list 命令"""
        result = invoke(tmp_path, "--dir", str(tmp_path / "empty"), "list")
        assert result.exit_code == 0
        assert "No skills found" in result.output

    def test_list_first_dir_wins(self, tmp_path, skills_dir, make_skill_md):
        """测试重名 Skill 以先出现的目录为准"""
        other = tmp_path / "other"
        make_skill_md(other, "planning", name="planning", description="Shadowed")
        result = invoke(tmp_path, "--dir", str(skills_dir), "--dir", str(other), "list")
        assert result.exit_code == 0
        assert "planning — Plan the work" in result.output
        assert "Shadowed" not in result.output

    def test_search(self, tmp_path, skills_dir):
        """测试 search 命令"""
        result = invoke(tmp_path, "--dir", str(skills_dir), "search", "code")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 1
        assert lines[0].endswith("code-review — Review code changes")

    def test_search_no_match(self, tmp_path, skills_dir):
        """测试 search 无匹配结果"""
        result = invoke(tmp_path, "--dir", str(skills_dir), "search", "zzz")
        assert result.exit_code == 0
        assert 'No skills matching "zzz"' in result.output

    def test_show(self, tmp_path, skills_dir):
        """测试 show 命令输出注入内容"""
        result = invoke(tmp_path, "--dir", str(skills_dir), "show", "code-review")
        assert result.exit_code == 0
        assert result.output == '<skill name="code-review">\nCheck every diff.\n</skill>\n'

    def test_show_unknown(self, tmp_path, skills_dir):
        """测试 show 未知 Skill"""
        result = invoke(tmp_path, "--dir", str(skills_dir), "show", "nope")
        assert result.exit_code == 1
        assert "Unknown skill: nope" in result.output

    def test_dirs_from_config_file(self, tmp_path, skills_dir):
        """测试从 YAML 配置读取目录"""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(f"skills:\n  dirs:\n    - {skills_dir}\n", encoding="utf-8")
        result = CliRunner().invoke(cli, ["--config", str(config_file), "list"])
        assert result.exit_code == 0
        assert "code-review" in result.output
