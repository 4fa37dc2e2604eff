"""
End-to-end tests for the /skill command, the queue protocol and injection.
"""

import pytest

from config import Config, ConfigManager
from skill_palette.extension import (
    COMMAND_NAME,
    NO_SKILLS_STATUS,
    SkillPaletteExtension,
    create_extension,
)
from skill_palette.hooks.hook_manager import HookEvent
from skill_palette.host import CommandContext, ExtensionHost, UnknownCommandError
from skill_palette.palette.confirm import ConfirmDialog
from skill_palette.palette.selector import SkillPaletteComponent
from skill_palette.skills.formatter import INDICATOR_KEY
from skill_palette.skills.loader import SkillLoader
from skill_palette.skills.registry import SkillRegistry

DOWN = "\x1b[B"
ENTER = "\r"
ESCAPE = "\x1b"
TAB = "\t"


@pytest.fixture
def skills_dir(tmp_path, make_skill_md):
    base = tmp_path / "skills"
    make_skill_md(base, "alpha", name="alpha", description="First skill", body="Alpha body\n")
    make_skill_md(base, "beta", name="beta", description="Second skill", body="Beta body\n")
    return base


@pytest.fixture
def host_and_extension(skills_dir, scheduler):
    host = ExtensionHost()
    extension = SkillPaletteExtension(SkillRegistry(SkillLoader([skills_dir])), scheduler=scheduler)
    extension.register(host)
    return host, extension


def run(host, ui, tmp_path):
    host.run_command(COMMAND_NAME, "", CommandContext(ui=ui, cwd=tmp_path))


class TestRegistration:
    """Test what the extension registers with the host."""

    def test_registers_command_and_hook(self, host_and_extension):
        host, _ = host_and_extension
        assert COMMAND_NAME in host.commands
        assert "skill palette" in host.commands[COMMAND_NAME].description
        assert len(host.hook_manager.hooks[HookEvent.BEFORE_AGENT_START]) == 1

    def test_unknown_command(self, host_and_extension, make_ui, tmp_path):
        host, _ = host_and_extension
        with pytest.raises(UnknownCommandError, match="/nope"):
            host.run_command("nope", "", CommandContext(ui=make_ui(), cwd=tmp_path))


class TestPaletteCommand:
    """Test /skill outcomes applied to the queue."""

    def test_select_queues_skill(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(DOWN, ENTER)])

        run(host, ui, tmp_path)

        assert extension.queue.queued_name == "beta"
        assert ui.status[INDICATOR_KEY] == "📚 beta"
        assert "beta" in ui.widgets[INDICATOR_KEY][0]
        assert ui.notifications == [("Skill queued: beta", "info")]
        assert isinstance(ui.components[0], SkillPaletteComponent)

    def test_cancel_changes_nothing(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ESCAPE)])

        run(host, ui, tmp_path)

        assert extension.queue.is_empty()
        assert ui.status == {}
        assert ui.notifications == []

    def test_selecting_other_skill_replaces_without_confirmation(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER), press(DOWN, ENTER)])

        run(host, ui, tmp_path)
        run(host, ui, tmp_path)

        assert extension.queue.queued_name == "beta"
        assert len(ui.components) == 2
        assert not any(isinstance(c, ConfirmDialog) for c in ui.components)

    def test_reselect_then_remove(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER), press(ENTER), press(TAB, ENTER)])

        run(host, ui, tmp_path)
        run(host, ui, tmp_path)

        assert isinstance(ui.components[-1], ConfirmDialog)
        assert extension.queue.is_empty()
        assert INDICATOR_KEY not in ui.status
        assert INDICATOR_KEY not in ui.widgets
        assert ui.notifications[-1] == ("Skill unqueued", "info")

    def test_reselect_then_keep(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER), press(ENTER), press("n")])

        run(host, ui, tmp_path)
        run(host, ui, tmp_path)

        assert extension.queue.queued_name == "alpha"
        assert ui.status[INDICATOR_KEY] == "📚 alpha"

    def test_confirmation_timeout_keeps_skill(self, host_and_extension, make_ui, press, scheduler, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER), press(ENTER), lambda dialog: scheduler.advance(30)])

        run(host, ui, tmp_path)
        run(host, ui, tmp_path)

        assert extension.queue.queued_name == "alpha"
        assert ui.notifications == [("Skill queued: alpha", "info")]
        assert scheduler.active == []

    def test_empty_catalog_shows_transient_status(self, tmp_path, scheduler, make_ui):
        host = ExtensionHost()
        extension = SkillPaletteExtension(
            SkillRegistry(SkillLoader([tmp_path / "none"])), scheduler=scheduler
        )
        extension.register(host)
        ui = make_ui()

        run(host, ui, tmp_path)

        assert ui.status[INDICATOR_KEY] == NO_SKILLS_STATUS
        assert ui.components == []
        scheduler.advance(3)
        assert INDICATOR_KEY not in ui.status


class TestInjection:
    """Test the pre-send hook."""

    def test_queued_skill_sent_once(self, host_and_extension, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER)])
        run(host, ui, tmp_path)

        first = host.before_send(ui, "do it")
        second = host.before_send(ui, "again")

        assert [m.to_dict() for m in first.messages] == [{
            "customType": "skill-context",
            "content": '<skill name="alpha">\nAlpha body\n</skill>',
            "display": False,
        }]
        assert second.messages == []
        assert INDICATOR_KEY not in ui.status
        assert INDICATOR_KEY not in ui.widgets

    def test_nothing_queued(self, host_and_extension, make_ui):
        host, _ = host_and_extension
        assert host.before_send(make_ui(), "hi").messages == []

    def test_deleted_file_warns_and_message_proceeds(self, host_and_extension, skills_dir, make_ui, press, tmp_path):
        host, extension = host_and_extension
        ui = make_ui([press(ENTER)])
        run(host, ui, tmp_path)
        (skills_dir / "alpha" / "SKILL.md").unlink()

        result = host.before_send(ui, "hi")

        assert result.messages == []
        assert extension.queue.is_empty()
        assert ui.notifications[-1] == ("Failed to load skill: alpha", "warning")


class TestCreateExtension:
    """Test building the extension from configuration."""

    def test_dirs_resolved_from_home_and_cwd(self, tmp_path, make_skill_md, scheduler, make_ui):
        home = tmp_path / "home"
        cwd = tmp_path / "project"
        make_skill_md(home / ".pi" / "agent" / "skills", "shared", name="shared", description="From user")
        make_skill_md(cwd / ".pi" / "skills", "shared", name="shared", description="From project")
        make_skill_md(cwd / ".pi" / "skills", "local", name="local", description="Project only")

        extension = create_extension(cwd=cwd, home=home, scheduler=scheduler)
        catalog = extension.registry.get_catalog()

        assert [(s.name, s.description) for s in catalog] == [
            ("local", "Project only"),
            ("shared", "From user"),
        ]

    def test_config_controls_dialog_timeout(self, skills_dir, scheduler, make_ui, press, tmp_path):
        config = Config(skills={"dirs": [str(skills_dir)]}, confirm={"timeout_seconds": 5})
        extension = create_extension(config=config, cwd=tmp_path, scheduler=scheduler)
        host = ExtensionHost()
        extension.register(host)
        ui = make_ui([press(ENTER), press(ENTER), lambda dialog: scheduler.advance(5)])

        run(host, ui, tmp_path)
        run(host, ui, tmp_path)

        assert ui.components[-1].session.outcome is False
        assert extension.queue.queued_name == "alpha"

    def test_env_override_reaches_extension(self, tmp_path, scheduler, monkeypatch):
        monkeypatch.setenv("SKILL_PALETTE_CONFIRM__TIMEOUT_SECONDS", "10")

        extension = create_extension(cwd=tmp_path, home=tmp_path, scheduler=scheduler)

        assert extension.config.confirm.timeout_seconds == 10

    def test_settings_file_dirs_reach_extension(self, tmp_path, skills_dir, scheduler, monkeypatch):
        settings = tmp_path / "settings.yaml"
        settings.write_text(f"skills:\n  dirs:\n    - {skills_dir}\n", encoding="utf-8")
        monkeypatch.setattr("config.config._config_manager", ConfigManager(str(settings)))

        extension = create_extension(cwd=tmp_path, home=tmp_path, scheduler=scheduler)

        assert extension.registry.list_skill_names() == ["alpha", "beta"]
