"""
Skill Palette Hooks

Lifecycle hooks fired by the host around outgoing messages.
"""

from skill_palette.hooks.hook_manager import (
    HookContext,
    HookEvent,
    HookHandler,
    HookManager,
    HookRegistration,
    HookResult,
)

__all__ = [
    "HookContext",
    "HookEvent",
    "HookHandler",
    "HookManager",
    "HookRegistration",
    "HookResult",
]
