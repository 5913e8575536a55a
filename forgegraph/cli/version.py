"""CLI commands for reading and bumping the project version."""

from typing import Optional

import click

from forgegraph.constants import BumpType
from forgegraph.exceptions import ForgeError
from forgegraph.model.project import validate_project_config
from forgegraph.model.validation import (
    is_valid_bump_type,
    is_valid_version_scheme,
    validate_calver_format,
    validate_template_syntax,
)
from forgegraph.views import format_status, format_status_tooltip

from .utils.context import (
    abort_if_user_does_not_confirm,
    get_forge_service,
    get_git_service,
    load_local_config,
    log_error_and_quit,
)
from .utils.logging import logger


def _check_bump_type(ctx, param, value):
    if value is not None and not is_valid_bump_type(value):
        choices = ", ".join(bump.value for bump in BumpType)
        raise click.BadParameter(f"'{value}' is not one of {choices}")
    return value


def _check_scheme(ctx, param, value):
    if value is not None and not is_valid_version_scheme(value):
        raise click.BadParameter('must be "semver" or "calver"')
    return value


def _check_calver_format(ctx, param, value):
    if value is not None and not validate_calver_format(value):
        raise click.BadParameter(
            "must contain at least one of 2006, 06, 01, 02 or WW"
        )
    return value


def _check_template(ctx, param, value):
    if value is not None:
        errors = validate_template_syntax(value)
        if errors:
            raise click.BadParameter("; ".join(errors))
    return value


@click.group(name="version")
@click.pass_context
def version(ctx):
    """Show the current or the next version."""
    ctx.ensure_object(dict)


@version.command("show")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.pass_context
def show_version(ctx, app: Optional[str]):
    """Show the current version."""
    try:
        version_info = get_forge_service(ctx).get_version(app)
    except ForgeError as e:
        log_error_and_quit(e)

    click.echo(format_status(version_info, app))
    click.echo(format_status_tooltip(version_info, app))


@version.command("next")
@click.argument("bump_type", callback=_check_bump_type)
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.pass_context
def next_version(ctx, bump_type: str, app: Optional[str]):
    """Preview the version a bump of BUMP_TYPE would create."""
    try:
        result = get_forge_service(ctx).get_next_version(bump_type, app)
    except ForgeError as e:
        log_error_and_quit(e)

    click.echo(f"{result.current} -> {result.next} ({result.bump.value}, {result.scheme.value})")


@click.command(name="bump")
@click.argument("bump_type", required=False, callback=_check_bump_type)
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--initial",
    help="Create the first tag of a repository, e.g. v0.1.0.",
)
@click.option("--scheme", callback=_check_scheme, help="semver or calver.")
@click.option(
    "--calver-format", callback=_check_calver_format, help="CalVer format, e.g. 2006.01.02."
)
@click.option("--prefix", help="Tag prefix, e.g. v.")
@click.option("--pre", callback=_check_template, help="Pre-release identifier.")
@click.option("--meta", callback=_check_template, help="Build metadata.")
@click.option("--push", is_flag=True, default=False, help="Push the tag to the remote.")
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing tag.")
@click.option(
    "--dry-run", is_flag=True, default=False, help="Show what would happen, create nothing."
)
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_context
def bump(
    ctx,
    bump_type: Optional[str],
    app: Optional[str],
    initial: Optional[str],
    scheme: Optional[str],
    calver_format: Optional[str],
    prefix: Optional[str],
    pre: Optional[str],
    meta: Optional[str],
    push: bool,
    force: bool,
    dry_run: bool,
    yes: bool,
):
    """Create a new version tag.

    BUMP_TYPE is major, minor or patch. Use --initial instead for a repository
    without version tags.
    """
    if not initial and bump_type is None:
        log_error_and_quit("Specify a bump type (major, minor, patch) or --initial")

    config_path, config = load_local_config(ctx)
    if config is None and not initial:
        log_error_and_quit("No forge.yaml found. Run `forgegraph init` first.")

    if config is not None:
        errors = validate_project_config(config)
        if errors:
            logger.error(f"Invalid configuration in {config_path}:")
            for error in errors:
                logger.error(f"  - {error}")
            ctx.exit(1)

    if get_git_service(ctx).is_dirty():
        logger.warning("Working directory has uncommitted changes")
        if not yes:
            abort_if_user_does_not_confirm("create a tag with uncommitted changes")

    forge = get_forge_service(ctx, dry_run=dry_run)

    try:
        if not initial and not yes:
            preview = forge.get_next_version(bump_type, app)
            abort_if_user_does_not_confirm(
                f"bump {preview.current} to {preview.next}"
            )

        result = forge.bump(
            bump=None if initial else bump_type,
            app=app,
            initial=initial,
            scheme=scheme,
            calver_format=calver_format,
            prefix=prefix,
            push=push,
            force=force,
            pre=pre,
            meta=meta,
        )
    except ForgeError as e:
        log_error_and_quit(e)

    if dry_run:
        logger.info(f"Dry run: would create tag {result.tag}")
        return

    logger.info(f"Created tag {result.tag}")
    if result.pushed:
        logger.info(f"Pushed {result.tag} to remote")
    click.echo(result.tag)

