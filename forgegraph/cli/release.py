"""CLI commands producing release artifacts: binaries, images, changelogs."""

from typing import Dict, Optional, Tuple

import click

from forgegraph.exceptions import ForgeError
from forgegraph.model.forge import ChangelogResult
from forgegraph.model.validation import validate_platform_target

from .utils.context import get_forge_service, log_error_and_quit
from .utils.logging import logger


def _check_targets(ctx, param, value):
    invalid = [target for target in value if not validate_platform_target(target)]
    if invalid:
        raise click.BadParameter(
            f"{', '.join(invalid)}: expected OS/ARCH or OS/ARCH/VARIANT"
        )
    return value


def _parse_build_args(ctx, param, value) -> Dict[str, str]:
    build_args = {}
    for item in value:
        key, sep, arg_value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"'{item}' is not KEY=VALUE")
        build_args[key] = arg_value
    return build_args


def format_changelog(changelog: ChangelogResult) -> str:
    lines = [f"## {changelog.from_ref}..{changelog.to_ref}"]
    for commit_type, commits in changelog.grouped().items():
        lines += ["", f"### {commit_type}"]
        for commit in commits:
            scope = f"**{commit.scope}**: " if commit.scope else ""
            breaking = " (BREAKING)" if commit.breaking else ""
            lines.append(f"- {scope}{commit.message}{breaking} ({commit.hash[:7]})")
    return "\n".join(lines)


@click.command(name="build")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--target",
    "-t",
    "targets",
    multiple=True,
    callback=_check_targets,
    help="Platform target, e.g. linux/amd64. May be repeated.",
)
@click.option("--version", "build_version", help="Version to embed instead of the tag.")
@click.pass_context
def build(ctx, app: Optional[str], targets: Tuple[str, ...], build_version: Optional[str]):
    """Build binaries for the current version."""
    try:
        result = get_forge_service(ctx).build(app, list(targets), build_version)
    except ForgeError as e:
        log_error_and_quit(e)

    logger.info(f"Built {result.version} into {result.output_dir or 'the output directory'}")
    for binary in result.binaries:
        click.echo(binary)


@click.command(name="docker")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option("--push", is_flag=True, default=False, help="Push the image.")
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    callback=_check_targets,
    help="Image platform, e.g. linux/arm64. May be repeated.",
)
@click.option(
    "--build-arg",
    "build_args",
    multiple=True,
    callback=_parse_build_args,
    help="Docker build argument KEY=VALUE. May be repeated.",
)
@click.pass_context
def docker(
    ctx,
    app: Optional[str],
    push: bool,
    platforms: Tuple[str, ...],
    build_args: Dict[str, str],
):
    """Build a container image for the current version."""
    try:
        result = get_forge_service(ctx).build_image(
            app, push=push, platforms=list(platforms), build_args=build_args
        )
    except ForgeError as e:
        log_error_and_quit(e)

    for image_tag in result.tags:
        click.echo(f"{result.repository}:{image_tag}")
    if result.pushed:
        logger.info(f"Pushed {result.repository}")


@click.command(name="changelog")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option("--from", "from_ref", help="Start ref (defaults to the previous tag).")
@click.option("--to", "to_ref", help="End ref (defaults to HEAD).")
@click.option(
    "--format",
    "-f",
    type=click.Choice(["markdown", "json", "plain"], case_sensitive=False),
    default="markdown",
    show_default=True,
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write to file.")
@click.pass_context
def changelog(
    ctx,
    app: Optional[str],
    from_ref: Optional[str],
    to_ref: Optional[str],
    format: str,
    output: Optional[str],
):
    """Generate a changelog from conventional commits."""
    # markdown for stdout is rendered here from the json document
    forge_format = None if format == "markdown" and not output else format
    try:
        result = get_forge_service(ctx).changelog(
            app, from_ref, to_ref, format=forge_format, output=output
        )
    except ForgeError as e:
        log_error_and_quit(e)

    if output:
        logger.info(f"Changelog written to {output}")
        return

    if isinstance(result, ChangelogResult):
        if format == "json":
            click.echo(result.model_dump_json(by_alias=True, indent=2))
        else:
            click.echo(format_changelog(result))
    else:
        click.echo(result.rstrip())
