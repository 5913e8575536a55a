"""CLI commands showing the current version and the version history."""

import click

from forgegraph.config import get_history_limit, get_hotfix_suffixes
from forgegraph.constants import MAX_HISTORY_LIMIT
from forgegraph.exceptions import ForgeError
from forgegraph.views import (
    NO_CONFIG,
    STATUS_ERROR,
    STATUS_NO_CONFIG,
    STATUS_NO_GIT_REPO,
    STATUS_NOT_INSTALLED,
    format_history,
    format_status,
    format_status_tooltip,
)

from .utils.context import (
    get_forge_service,
    get_git_service,
    get_user_config,
    load_local_config,
    log_error_and_quit,
)
from .utils.logging import logger


@click.command(name="status")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--details",
    is_flag=True,
    default=False,
    help="Show scheme, commit and working tree state.",
)
@click.pass_context
def status(ctx, app: str, details: bool):
    """Show the current version of the project."""
    if not get_git_service(ctx).is_git_repository():
        click.echo(STATUS_NO_GIT_REPO)
        ctx.exit(1)

    config_path, _ = load_local_config(ctx)
    if config_path is None:
        click.echo(STATUS_NO_CONFIG)
        ctx.exit(1)

    forge = get_forge_service(ctx)
    if not forge.check_installation().installed:
        click.echo(STATUS_NOT_INSTALLED)
        ctx.exit(1)

    try:
        version_info = forge.get_version(app)
    except ForgeError as e:
        logger.debug(f"forge version failed: {e}")
        click.echo(STATUS_ERROR)
        ctx.exit(1)

    click.echo(format_status(version_info, app))
    if details:
        click.echo(format_status_tooltip(version_info, app))


@click.command(name="history")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(1, MAX_HISTORY_LIMIT),
    help="Number of versions to show (defaults to the history.limit setting).",
)
@click.pass_context
def history(ctx, app: str, limit: int):
    """List released versions, newest first."""
    config_path, _ = load_local_config(ctx)
    if config_path is None:
        click.echo(NO_CONFIG)
        return

    settings = get_user_config(ctx)
    limit = limit or get_history_limit(settings)

    try:
        response = get_forge_service(ctx).get_version_history(app, limit)
    except ForgeError as e:
        log_error_and_quit(e)

    for line in format_history(response.versions, get_hotfix_suffixes(settings)):
        click.echo(line)
