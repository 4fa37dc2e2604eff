"""
Skill palette extension.

Registers the ``/skill`` command and the ``before_agent_start`` hook with
the host and applies palette outcomes to the shared queue:

- select: queue the skill (replacing any other queued skill)
- unqueue: ask for confirmation, clear the queue only on "Remove"
- cancel: nothing changes
"""

import logging
from pathlib import Path
from typing import Optional

from config import Config, get_config
from skill_palette.hooks.hook_manager import HookContext, HookEvent
from skill_palette.host import CommandContext, ExtensionHost
from skill_palette.palette.confirm import ConfirmDialog
from skill_palette.palette.selector import PaletteAction, PaletteResult, SkillPaletteComponent
from skill_palette.palette.timers import Scheduler, ThreadingScheduler
from skill_palette.skills.formatter import INDICATOR_KEY, SkillMessageFormatter
from skill_palette.skills.injector import SkillInjector
from skill_palette.skills.loader import SkillLoader
from skill_palette.skills.message_protocol import SkillMessage
from skill_palette.skills.models import Skill
from skill_palette.skills.queue import SkillQueue
from skill_palette.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)

COMMAND_NAME = "skill"
COMMAND_DESCRIPTION = "Open skill palette to select a skill for the next message"
NO_SKILLS_STATUS = "No skills found"


class SkillPaletteExtension:
    """Owns the queue and connects the palette to the host."""

    def __init__(
        self,
        registry: SkillRegistry,
        queue: Optional[SkillQueue] = None,
        scheduler: Optional[Scheduler] = None,
        config: Optional[Config] = None,
    ):
        """
        Args:
            registry: Catalog source
            queue: Queue shared with the injection hook (created if omitted)
            scheduler: Timer source for the dialog and status timeouts
            config: Palette/dialog settings (global config if omitted)
        """
        self.registry = registry
        self.queue = queue or SkillQueue()
        self.scheduler = scheduler or ThreadingScheduler()
        self.config = config or get_config()
        self.formatter = SkillMessageFormatter()
        self.injector = SkillInjector(self.queue)

    def register(self, host: ExtensionHost) -> None:
        host.register_command(COMMAND_NAME, COMMAND_DESCRIPTION, self.open_palette)
        host.on(HookEvent.BEFORE_AGENT_START, self.before_agent_start, "inject queued skill")

    def open_palette(self, args: str, ctx: CommandContext) -> None:
        """Handler for ``/skill``."""
        skills = self.registry.get_catalog()
        ui = ctx.ui

        if not skills:
            ui.set_status(INDICATOR_KEY, NO_SKILLS_STATUS)
            self.scheduler.call_later(
                self.config.palette.status_clear_seconds,
                lambda: ui.set_status(INDICATOR_KEY, None),
            )
            return

        result: Optional[PaletteResult] = ui.custom(
            lambda done: SkillPaletteComponent(
                skills,
                self.queue.queued_skill,
                done,
                width=self.config.palette.width,
                max_visible=self.config.palette.max_visible,
            )
        )
        if result is None or result.skill is None:
            return

        if result.action is PaletteAction.SELECT:
            self.queue_skill(result.skill, ctx)
        elif result.action is PaletteAction.UNQUEUE:
            self.confirm_unqueue(result.skill, ctx)

    def queue_skill(self, skill: Skill, ctx: CommandContext) -> None:
        self.queue.enqueue(skill)
        ctx.ui.set_status(INDICATOR_KEY, self.formatter.status_text(skill))
        ctx.ui.set_widget(INDICATOR_KEY, self.formatter.widget_lines(skill))
        ctx.ui.notify(self.formatter.queued_notice(skill), "info")

    def confirm_unqueue(self, skill: Skill, ctx: CommandContext) -> bool:
        """Show the Remove/Keep dialog; clear the queue on Remove.

        Returns:
            True if the skill was removed from the queue
        """
        confirmed = ctx.ui.custom(
            lambda done: ConfirmDialog(
                skill.name,
                done,
                self.scheduler,
                timeout_seconds=self.config.confirm.timeout_seconds,
                width=self.config.confirm.width,
            )
        )
        if not confirmed:
            return False

        self.queue.clear()
        ctx.ui.set_status(INDICATOR_KEY, None)
        ctx.ui.set_widget(INDICATOR_KEY, None)
        ctx.ui.notify(self.formatter.unqueued_notice(), "info")
        return True

    def before_agent_start(self, context: HookContext) -> Optional[SkillMessage]:
        return self.injector(context)


def create_extension(
    config: Optional[Config] = None,
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
    scheduler: Optional[Scheduler] = None,
) -> SkillPaletteExtension:
    """Build the extension from configuration.

    Without an explicit ``config`` the global one is used, so
    settings.yaml and ``SKILL_PALETTE_*`` overrides apply. The scan
    directories are resolved once here and fixed for the lifetime of the
    extension.
    """
    config = config or get_config()
    dirs = config.skills.resolve_dirs(cwd=cwd, home=home)
    loader = SkillLoader(dirs, file_name=config.skills.file_name)
    return SkillPaletteExtension(SkillRegistry(loader), scheduler=scheduler, config=config)
