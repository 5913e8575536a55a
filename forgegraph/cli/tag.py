"""CLI commands inspecting version tags."""

from typing import Optional

import click

from forgegraph.exceptions import GitError
from forgegraph.model.forge import GitTag, VersionHistoryEntry
from forgegraph.views import STATUS_NO_GIT_REPO, format_tag_details

from .utils.context import get_git_service, log_error_and_quit


def _as_history_entry(tag: GitTag) -> VersionHistoryEntry:
    return VersionHistoryEntry(
        version=tag.version or tag.name,
        tag=tag.name,
        commit=tag.commit,
        date=tag.date.isoformat() if tag.date else "",
        message=tag.message,
    )


@click.group(name="tag")
@click.pass_context
def tag(ctx):
    """Inspect version tags."""
    ctx.ensure_object(dict)


@tag.command("list")
@click.option("--prefix", "-p", help="Only tags starting with this prefix.")
@click.pass_context
def list_tags(ctx, prefix: Optional[str]):
    """List tags, highest version first."""
    git = get_git_service(ctx)
    if not git.is_git_repository():
        log_error_and_quit(STATUS_NO_GIT_REPO)

    for git_tag in git.get_tags(prefix):
        date = git_tag.date.date().isoformat() if git_tag.date else ""
        click.echo(f"{git_tag.name:<24} {git_tag.commit}  {date}".rstrip())


@tag.command("show")
@click.argument("name")
@click.option("--prefix", "-p", help="Tag prefix stripped to obtain the version.")
@click.pass_context
def show_tag(ctx, name: str, prefix: Optional[str]):
    """Show the commit behind a tag and what changed since the previous tag."""
    git = get_git_service(ctx)
    if not git.is_git_repository():
        log_error_and_quit(STATUS_NO_GIT_REPO)

    tags = {git_tag.name: git_tag for git_tag in git.get_tags(prefix)}
    if name not in tags:
        log_error_and_quit(f"Tag '{name}' not found")

    entry = _as_history_entry(tags[name])
    try:
        details = git.get_commit_details(entry.commit)
        previous = git.get_previous_tag(name, prefix)
        range_stats = git.get_commit_range_stats(previous, name) if previous else None
    except GitError as e:
        log_error_and_quit(e)

    click.echo(format_tag_details(entry, details, previous, range_stats))
