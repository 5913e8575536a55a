"""CLI commands managing forge.yaml and the forge installation."""

from typing import Optional

import click

from forgegraph.constants import FORGE_REPOSITORY_URL
from forgegraph.exceptions import ForgeError, ForgeNotInstalledError
from forgegraph.model.project import find_config_file, validate_project_config

from .utils.context import (
    abort_if_user_does_not_confirm,
    get_forge_service,
    get_project_dir,
    load_local_config,
    log_error_and_quit,
)
from .utils.logging import logger


@click.command(name="validate")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--local-only",
    is_flag=True,
    default=False,
    help="Only check forge.yaml structure, do not run `forge validate`.",
)
@click.pass_context
def validate(ctx, app: Optional[str], local_only: bool):
    """Validate forge.yaml."""
    config_path, config = load_local_config(ctx)
    if config is None:
        log_error_and_quit("No forge.yaml found. Run `forgegraph init` first.")

    logger.info(f"Validating {config_path}")
    errors = validate_project_config(config)
    if errors:
        for error in errors:
            logger.error(f"  - {error}")
        ctx.exit(1)

    if local_only:
        logger.info("✅ forge.yaml structure is valid.")
        return

    try:
        result = get_forge_service(ctx).validate(app)
    except ForgeError as e:
        log_error_and_quit(e)

    for warning in result.warnings:
        logger.warning(warning)
    if not result.valid:
        for issue in result.issues:
            logger.error(f"  - {issue}")
        ctx.exit(1)

    logger.info("✅ forge.yaml is valid.")


@click.command(name="init")
@click.option(
    "--multi", is_flag=True, default=False, help="Create a multi-app configuration."
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Config file path.")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing file.")
@click.pass_context
def init(ctx, multi: bool, output: Optional[str], force: bool):
    """Create a forge.yaml in the project directory."""
    config_path = find_config_file(get_project_dir(ctx))
    if config_path is not None and not output:
        if not force:
            abort_if_user_does_not_confirm(f"overwrite {config_path}")
        force = True

    try:
        message = get_forge_service(ctx).init(multi=multi, output=output, force=force)
    except ForgeError as e:
        log_error_and_quit(e)

    if message.strip():
        logger.info(message.strip())


@click.command(name="install")
@click.pass_context
def install(ctx):
    """Install the forge CLI with `go install`."""
    forge = get_forge_service(ctx)
    installation = forge.check_installation()
    if installation.installed:
        logger.info(f"forge is already installed: {installation.version}")
        return

    try:
        installation = forge.install()
    except ForgeNotInstalledError:
        log_error_and_quit(
            f"Go is not installed. Install Go first, or see {FORGE_REPOSITORY_URL}"
        )
    except ForgeError as e:
        log_error_and_quit(e)

    if installation.installed:
        logger.info(f"✅ forge installed: {installation.version}")
