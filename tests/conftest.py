"""
Pytest 配置文件

设置测试环境，提供共享的假 UI 和手动调度器
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

# 添加项目根目录到 Python 路径（必须放在最前面，确保 config 包从项目根目录加载）
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import ConfigManager  # noqa: E402
from skill_palette.host import UIContext  # noqa: E402
from skill_palette.palette.timers import Scheduler, TimerHandle  # noqa: E402


class ManualTimer(TimerHandle):
    """Timer fired only when the owning scheduler is advanced."""

    def __init__(self, due: float, callback: Callable[[], None], interval: Optional[float] = None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(Scheduler):
    """Deterministic scheduler; time only moves through ``advance``."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[ManualTimer] = []

    def call_later(self, delay, callback):
        timer = ManualTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    def call_every(self, interval, callback):
        timer = ManualTimer(self.now + interval, callback, interval)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> List[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.active if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            if timer.interval is None:
                timer.cancelled = True
            else:
                timer.due += timer.interval
            timer.callback()
        self.now = target


class FakeUI(UIContext):
    """Records indicator changes and drives overlays with scripted input.

    Each call to ``custom`` consumes the next script; a script receives
    the mounted component and feeds it input.
    """

    def __init__(self, scripts=()):
        self.status: Dict[str, str] = {}
        self.widgets: Dict[str, List[str]] = {}
        self.notifications: List[tuple] = []
        self.scripts = list(scripts)
        self.components = []
        self.renders: List[List[str]] = []

    def set_status(self, key, text):
        if text is None:
            self.status.pop(key, None)
        else:
            self.status[key] = text

    def set_widget(self, key, lines):
        if lines is None:
            self.widgets.pop(key, None)
        else:
            self.widgets[key] = lines

    def notify(self, message, level="info"):
        self.notifications.append((message, level))

    def custom(self, factory):
        outcome = {}

        def done(value):
            outcome.setdefault("value", value)

        component = factory(done)
        self.components.append(component)
        self.renders.append(component.render(100))
        script = self.scripts.pop(0)
        script(component)
        component.dispose()
        return outcome.get("value")


def press(*keys: str):
    """Script that sends ``keys`` to the overlay in order."""
    def script(component):
        for key in keys:
            component.handle_input(key)
    return script


@pytest.fixture(name="press")
def press_fixture():
    """Build a script that sends keys to an overlay."""
    return press


@pytest.fixture
def make_ui():
    """Factory for FakeUI with the given overlay scripts."""
    return FakeUI


@pytest.fixture(autouse=True)
def fresh_global_config(monkeypatch, tmp_path):
    """每个测试使用独立的全局配置，不读取仓库或用户的 settings.yaml"""
    for key in list(os.environ):
        if key.startswith("SKILL_PALETTE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("config.config._config_manager", ConfigManager(str(tmp_path / "no-settings.yaml")))


@pytest.fixture
def scheduler():
    """Manually advanced scheduler."""
    return ManualScheduler()


@pytest.fixture
def make_skill_md():
    """Factory writing ``<base>/<dir_name>/SKILL.md``."""
    def _make(base: Path, dir_name: str, name: Optional[str] = None,
              description: Optional[str] = "A test skill", body: str = "# Instructions\n\nDo the thing.\n",
              raw: Optional[str] = None) -> Path:
        skill_dir = base / dir_name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if raw is None:
            header = []
            if name is not None:
                header.append(f"name: {name}")
            if description is not None:
                header.append(f"description: {description}")
            raw = "---\n" + "\n".join(header) + "\n---\n\n" + body
        skill_md = skill_dir / "SKILL.md"
        skill_md.write_text(raw, encoding="utf-8")
        return skill_md
    return _make
