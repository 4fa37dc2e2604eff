"""
配置管理系统

支持从 YAML 文件、环境变量加载配置
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# 加载 .env 文件
load_dotenv()

ENV_PREFIX = "SKILL_PALETTE_"


class SkillsConfig(BaseModel):
    """Skill 目录配置"""

    dirs: List[str] = Field(
        default_factory=lambda: [
            "~/.pi/agent/skills",
            "~/.pi/skills",
            "./.pi/skills",
        ],
        description="Skill 扫描目录，按优先级从高到低排列"
    )
    file_name: str = Field(default="SKILL.md", description="每个 Skill 目录中的定义文件名")

    @field_validator("dirs", mode="before")
    @classmethod
    def split_dirs(cls, v: Any) -> Any:
        """环境变量中的目录列表按 os.pathsep 分隔"""
        if isinstance(v, str):
            return [part for part in v.split(os.pathsep) if part]
        return v

    def resolve_dirs(self, cwd: Optional[Path] = None, home: Optional[Path] = None) -> List[Path]:
        """
        解析扫描目录

        ``~`` 相对于 home 目录展开，相对路径相对于工作目录解析

        Args:
            cwd: 工作目录（默认: 当前目录）
            home: home 目录（默认: 当前用户 home）

        Returns:
            绝对路径列表，顺序与配置一致
        """
        cwd = Path(cwd) if cwd is not None else Path.cwd()
        home = Path(home) if home is not None else Path.home()

        resolved = []
        for entry in self.dirs:
            if entry == "~" or entry.startswith("~/"):
                path = home / entry[2:]
            else:
                path = Path(entry)
                if not path.is_absolute():
                    path = cwd / path
            resolved.append(path)
        return resolved


class PaletteConfig(BaseModel):
    """Skill 面板配置"""

    width: int = Field(default=70, ge=20, description="面板最大宽度")
    max_visible: int = Field(default=8, ge=1, description="同时显示的最大 Skill 数")
    status_clear_seconds: float = Field(default=3.0, ge=0.0, description="\"No skills found\" 状态保留时间（秒）")


class ConfirmConfig(BaseModel):
    """移除确认对话框配置"""

    width: int = Field(default=44, ge=20, description="对话框最大宽度")
    timeout_seconds: int = Field(default=30, gt=0, description="自动取消超时时间（秒）")


class LoggingConfig(BaseModel):
    """日志配置"""

    level: str = Field(default="WARNING", description="日志级别")
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        description="日志格式"
    )
    file: Optional[str] = Field(default=None, description="日志文件路径")
    max_bytes: int = Field(default=10485760, description="日志文件最大大小（10MB）")
    backup_count: int = Field(default=5, description="日志备份数量")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """验证日志级别"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


class Config(BaseModel):
    """Skill Palette 总配置"""

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    palette: PaletteConfig = Field(default_factory=PaletteConfig)
    confirm: ConfirmConfig = Field(default_factory=ConfirmConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


class ConfigManager:
    """
    配置管理器

    支持从 YAML 文件加载配置，支持环境变量覆盖
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        初始化配置管理器

        Args:
            config_path: YAML 配置文件路径，默认为 config/settings.yaml
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Config] = None

    @staticmethod
    def _find_config_file() -> str:
        """
        查找配置文件

        按以下顺序查找：
        1. ./config/settings.yaml
        2. ./settings.yaml
        3. ~/.config/skill_palette/settings.yaml
        """
        possible_paths = [
            "./config/settings.yaml",
            "./settings.yaml",
            os.path.expanduser("~/.config/skill_palette/settings.yaml"),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                return path

        # 如果都没找到，使用默认路径
        return "./config/settings.yaml"

    def load_yaml(self) -> Dict[str, Any]:
        """
        从 YAML 文件加载配置

        Returns:
            配置字典
        """
        if not os.path.exists(self.config_path):
            return {}

        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _override_from_env(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        从环境变量覆盖配置

        支持嵌套配置，使用 __ 分隔层级，例如：
        SKILL_PALETTE_CONFIRM__TIMEOUT_SECONDS=10
        SKILL_PALETTE_LOGGING__LEVEL=DEBUG

        Args:
            config_dict: 原始配置字典

        Returns:
            覆盖后的配置字典
        """
        result = config_dict.copy()

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            # 移除前缀，将 __ 替换为 .
            key = env_key[len(ENV_PREFIX):].replace("__", ".").lower()
            parts = key.split(".")

            # 设置嵌套值
            current = result
            for part in parts[:-1]:
                if not isinstance(current.get(part), dict):
                    current[part] = {}
                else:
                    current[part] = dict(current[part])
                current = current[part]
            current[parts[-1]] = self._parse_env_value(env_value)

        return result

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """
        解析环境变量值

        Args:
            value: 环境变量值

        Returns:
            解析后的值
        """
        # 尝试解析为布尔值
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        # 尝试解析为数字
        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # 返回字符串
        return value

    def load(self) -> Config:
        """
        加载配置

        从 YAML 文件加载配置，并使用环境变量覆盖

        Returns:
            配置对象
        """
        if self._config is not None:
            return self._config

        yaml_config = self.load_yaml()
        merged_config = self._override_from_env(yaml_config)
        self._config = Config(**merged_config)
        return self._config

    def reload(self) -> Config:
        """
        重新加载配置

        Returns:
            配置对象
        """
        self._config = None
        return self.load()

    def save(self, path: Optional[str] = None) -> None:
        """
        保存当前配置到 YAML 文件

        Args:
            path: 保存路径，默认为原配置文件路径
        """
        save_path = path or self.config_path

        # 确保目录存在
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        config_dict = self.load().model_dump(exclude_none=True)

        with open(save_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config_dict, f, allow_unicode=True, default_flow_style=False)


# 全局配置管理器实例
_config_manager: Optional[ConfigManager] = None


def get_config(config_path: Optional[str] = None) -> Config:
    """
    获取全局配置对象

    Args:
        config_path: 可选的配置文件路径

    Returns:
        配置对象
    """
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager(config_path)

    return _config_manager.load()


def get_config_manager() -> ConfigManager:
    """
    获取全局配置管理器

    Returns:
        配置管理器
    """
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager()

    return _config_manager


def reload_config() -> Config:
    """
    重新加载全局配置

    Returns:
        配置对象
    """
    global _config_manager

    if _config_manager is not None:
        return _config_manager.reload()

    return get_config()
