"""
Skill Palette CLI

命令行工具用于查看、搜索和预览 Skills
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from config import ConfigManager
from skill_palette import __version__
from skill_palette.logging_config import setup_logging
from skill_palette.skills.formatter import SkillMessageFormatter
from skill_palette.skills.loader import SkillLoadError, SkillLoader, read_skill_content
from skill_palette.skills.ranking import rank_skills
from skill_palette.skills.registry import SkillRegistry


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(), default=None, help="YAML 配置文件路径")
@click.option("--dir", "dirs", multiple=True, type=click.Path(file_okay=False), help="Skill 目录（可重复，优先级从高到低），覆盖配置")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], dirs: Tuple[str, ...]):
    """Skill Palette CLI

    查看、搜索和预览可用的 Skills
    """
    config = ConfigManager(config_path).load()
    setup_logging(
        log_level=config.logging.level,
        log_file=config.logging.file,
        max_bytes=config.logging.max_bytes,
        backup_count=config.logging.backup_count,
        log_format=config.logging.format,
    )

    if dirs:
        skill_dirs = [Path(d).expanduser().resolve() for d in dirs]
    else:
        skill_dirs = config.skills.resolve_dirs()

    loader = SkillLoader(skill_dirs, file_name=config.skills.file_name)
    ctx.obj = SkillRegistry(loader)


@cli.command("list")
@click.pass_obj
def list_skills(registry: SkillRegistry):
    """列出所有 Skills"""
    if not registry.get_catalog():
        click.echo("No skills found")
        return
    click.echo(registry.get_formatted_skills_list())


@cli.command()
@click.argument("query")
@click.pass_obj
def search(registry: SkillRegistry, query: str):
    """按模糊匹配搜索 Skills"""
    results = rank_skills(registry.get_catalog(), query)
    if not results:
        click.echo(f"No skills matching \"{query}\"")
        return

    for skill, score in results:
        click.echo(f"{score:6.1f}  {skill.name} — {skill.description}")


@cli.command()
@click.argument("name")
@click.pass_obj
def show(registry: SkillRegistry, name: str):
    """预览注入到下一条消息的 Skill 内容"""
    skill = registry.get_skill(name)
    if skill is None:
        click.echo(f"Unknown skill: {name}", err=True)
        sys.exit(1)

    try:
        content = read_skill_content(skill)
    except SkillLoadError as e:
        click.echo(f"Failed to load skill: {name} ({e})", err=True)
        sys.exit(1)

    click.echo(SkillMessageFormatter.create_context_message(skill, content).content)


def main():
    """CLI 入口"""
    cli()


if __name__ == "__main__":
    main()
