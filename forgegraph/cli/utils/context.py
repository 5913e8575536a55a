"""Shared helpers for building services from the click context."""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click

from forgegraph.config import ConfigAccessor, get_forge_executable
from forgegraph.exceptions import ConfigError
from forgegraph.forge import ForgeService
from forgegraph.git import GitService
from forgegraph.model.project import find_config_file, load_project_config

from .logging import logger


def get_project_dir(ctx: click.Context) -> Path:
    obj = ctx.find_root().obj or {}
    return Path(obj.get("PROJECT_DIR") or Path.cwd())


def get_user_config(ctx: click.Context) -> ConfigAccessor:
    obj = ctx.find_root().obj or {}
    config_path = obj.get("CONFIG_PATH")
    return ConfigAccessor(Path(config_path) if config_path else None)


def get_forge_service(ctx: click.Context, dry_run: bool = False) -> ForgeService:
    obj = ctx.find_root().obj or {}
    return ForgeService(
        cwd=get_project_dir(ctx),
        executable=get_forge_executable(get_user_config(ctx)),
        verbose=bool(obj.get("DEBUG")),
        dry_run=dry_run,
    )


def get_git_service(ctx: click.Context) -> GitService:
    return GitService(get_project_dir(ctx))


def load_local_config(
    ctx: click.Context,
) -> Tuple[Optional[Path], Optional[Dict[str, Any]]]:
    """
    Locate and parse forge.yaml in the project directory.

    Returns (None, None) when there is no forge.yaml. Exits on parse errors.
    """
    path = find_config_file(get_project_dir(ctx))
    if path is None:
        return None, None
    try:
        config = load_project_config(path)
    except ConfigError as e:
        log_error_and_quit(e)
    return path, config


def log_error_and_quit(error):
    logger.error(error)
    sys.exit(1)


def abort_if_user_does_not_confirm(msg: str):
    _msg = f"Are you sure you want to {msg}?"
    if not click.confirm(_msg, abort=True):
        logger.debug("aborting")
        raise click.Abort()
