"""
Host collaborator contracts.

The skill palette runs inside an interactive agent host. The host provides
a UI surface (status line, widgets, notifications, modal overlays), a
command registry and lifecycle hooks. ``ExtensionHost`` is an in-process
implementation of the registry and hook side; ``UIContext`` is implemented
by whatever terminal front end embeds the palette.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from skill_palette.hooks.hook_manager import (
    HookContext,
    HookEvent,
    HookHandler,
    HookManager,
    HookRegistration,
    HookResult,
)
from skill_palette.palette.component import OverlayComponent

logger = logging.getLogger(__name__)

DoneCallback = Callable[[Any], None]
ComponentFactory = Callable[[DoneCallback], OverlayComponent]


class UnknownCommandError(Exception):
    """Raised when running a command that was never registered."""

    pass


class UIContext(ABC):
    """UI surface offered by the host to extensions."""

    @abstractmethod
    def set_status(self, key: str, text: Optional[str]) -> None:
        """Set or clear (None) a status-line entry."""

    @abstractmethod
    def set_widget(self, key: str, lines: Optional[List[str]]) -> None:
        """Set or clear (None) a persistent widget."""

    @abstractmethod
    def notify(self, message: str, level: str = "info") -> None:
        """Show a transient notification ("info", "warning" or "error")."""

    @abstractmethod
    def custom(self, factory: ComponentFactory) -> Any:
        """Mount a modal overlay and block until it finishes.

        ``factory`` receives the ``done`` callback and returns the
        component. The host forwards input to the component until ``done``
        is called, then disposes it and returns the value passed to
        ``done``. Returns None if the overlay is closed by other means.
        """


@dataclass
class CommandContext:
    """Context passed to command handlers."""
    ui: UIContext
    cwd: Path = field(default_factory=Path.cwd)


CommandHandler = Callable[[str, CommandContext], None]


@dataclass
class RegisteredCommand:
    name: str
    description: str
    handler: CommandHandler


class ExtensionHost:
    """Command registry plus lifecycle hooks."""

    def __init__(self, hook_manager: Optional[HookManager] = None):
        self.commands: Dict[str, RegisteredCommand] = {}
        self.hook_manager = hook_manager or HookManager()

    def register_command(self, name: str, description: str, handler: CommandHandler) -> None:
        if name in self.commands:
            logger.warning(f"Command '/{name}' registered twice; keeping the latest handler")
        self.commands[name] = RegisteredCommand(name, description, handler)

    def run_command(self, name: str, args: str, ctx: CommandContext) -> None:
        """Run a registered command.

        Raises:
            UnknownCommandError: If no command called ``name`` exists
        """
        command = self.commands.get(name)
        if command is None:
            raise UnknownCommandError(
                f"Unknown command '/{name}'. "
                f"Available commands: {', '.join(sorted(self.commands)) or 'none'}"
            )
        command.handler(args, ctx)

    def on(self, event: HookEvent, handler: HookHandler, description: str = "") -> HookRegistration:
        return self.hook_manager.register(event, handler, description)

    def before_send(self, ui: Optional[UIContext], prompt: str) -> HookResult:
        """Fire ``before_agent_start`` for an outgoing prompt."""
        context = HookContext(event=HookEvent.BEFORE_AGENT_START, ui=ui, prompt=prompt)
        return self.hook_manager.trigger(HookEvent.BEFORE_AGENT_START, context)
