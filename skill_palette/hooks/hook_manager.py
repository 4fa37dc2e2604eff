"""
Skill Palette Hooks Manager

In-process lifecycle hooks fired by the host:

- before_agent_start: fired right before an outgoing message is sent;
  handlers may return an extra message to attach to it

Handlers run in registration order. A handler that raises is logged and
skipped; the remaining handlers still run and the message still sends.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from skill_palette.skills.message_protocol import SkillMessage

logger = logging.getLogger(__name__)


class HookEvent(Enum):
    """Hook 事件类型"""
    BEFORE_AGENT_START = "before_agent_start"


@dataclass
class HookContext:
    """Hook 上下文"""
    event: HookEvent
    ui: Any = None  # UIContext of the session sending the message
    prompt: Optional[str] = None


@dataclass
class HookResult:
    """Hook 执行结果"""
    messages: List[SkillMessage] = field(default_factory=list)


HookHandler = Callable[[HookContext], Optional[SkillMessage]]


@dataclass
class HookRegistration:
    """已注册的 Hook"""
    event: HookEvent
    handler: HookHandler
    description: str = ""


class HookManager:
    """
    Hooks 管理器

    负责注册和触发所有 Hooks
    """

    def __init__(self):
        self.hooks: Dict[HookEvent, List[HookRegistration]] = {
            event: [] for event in HookEvent
        }
        self.hook_results: List[Dict] = []

    def register(
        self,
        event: HookEvent,
        handler: HookHandler,
        description: str = ""
    ) -> HookRegistration:
        """
        注册 Hook

        Args:
            event: 事件类型
            handler: 处理函数，返回要附加的消息或 None
            description: 描述

        Returns:
            注册记录
        """
        registration = HookRegistration(event=event, handler=handler, description=description)
        self.hooks[event].append(registration)
        return registration

    def trigger(
        self,
        event: HookEvent,
        context: HookContext
    ) -> HookResult:
        """
        触发特定事件的所有 Hooks

        Args:
            event: 事件类型
            context: Hook 上下文

        Returns:
            所有 Hook 附加的消息
        """
        result = HookResult()

        for hook in self.hooks.get(event, []):
            try:
                message = hook.handler(context)
            except Exception:
                logger.warning(f"Hook '{hook.description}' failed for {event.value}", exc_info=True)
                self._record(hook, event, error=True)
                continue

            if message is not None:
                result.messages.append(message)
            self._record(hook, event, attached=message is not None)

        return result

    def _record(self, hook: HookRegistration, event: HookEvent, **outcome: Any) -> None:
        self.hook_results.append({
            "hook": hook.description,
            "event": event.value,
            "result": outcome,
            "timestamp": datetime.now().isoformat()
        })

    def get_history(self) -> List[Dict]:
        """获取 Hook 执行历史"""
        return self.hook_results

    def clear_history(self):
        """清除 Hook 执行历史"""
        self.hook_results = []
