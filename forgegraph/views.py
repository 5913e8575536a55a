"""Plain-text presentations of versions: status line, history listing, tag details."""

from typing import Iterable, List, Optional, Sequence

from forgegraph.git.service import CommitDetails, RangeStats
from forgegraph.model.forge import VersionHistoryEntry, VersionInfo
from forgegraph.versioning.hotfix import is_hotfix_version

STATUS_NOT_INSTALLED = "Forge: Not Installed"
STATUS_NO_CONFIG = "Forge: No Config"
STATUS_NO_GIT_REPO = "Forge: No Git Repository"
STATUS_ERROR = "Forge: Error"

NO_TAGS = "No tags found (create one with: forgegraph bump)"
NO_CONFIG = "No forge.yaml found (create one with: forgegraph init)"
GRAPH_HINT = "View as Graph: forgegraph graph --format html -o graph.html"

RELEASE_MARKER = "●"
HOTFIX_MARKER = "○"


def format_status(version_info: VersionInfo, app: Optional[str] = None) -> str:
    """One-line status, e.g. ``api: v1.2.0 (dirty)``."""
    app_prefix = f"{app}: " if app else ""
    dirty_suffix = " (dirty)" if version_info.dirty else ""
    return f"{app_prefix}{version_info.version}{dirty_suffix}"


def format_status_tooltip(version_info: VersionInfo, app: Optional[str] = None) -> str:
    lines = []
    if app:
        lines.append(f"App: {app}")
    lines.append(f"Version: {version_info.version}")
    lines.append(f"Scheme: {version_info.scheme.value}")
    if version_info.short_commit:
        lines.append(f"Commit: {version_info.short_commit}")
    if version_info.dirty:
        lines.append("Working directory has uncommitted changes")
    return "\n".join(lines)


def has_hotfixes(
    versions: Sequence[VersionHistoryEntry], suffixes: Optional[Iterable[str]] = None
) -> bool:
    return any(is_hotfix_version(entry.version, suffixes) for entry in versions)


def format_history(
    versions: Sequence[VersionHistoryEntry],
    suffixes: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Render the version history as listing lines.

    A graph hint comes first when the history contains hotfixes.
    """
    if not versions:
        return [NO_TAGS]

    suffixes = tuple(suffixes) if suffixes is not None else None
    lines = []
    if has_hotfixes(versions, suffixes):
        lines.append(GRAPH_HINT)

    width = max(len(entry.version) for entry in versions)
    for entry in versions:
        marker = (
            HOTFIX_MARKER if is_hotfix_version(entry.version, suffixes) else RELEASE_MARKER
        )
        line = f"{marker} {entry.version:<{width}}  {entry.short_commit}"
        if entry.date:
            line += f"  {entry.date}"
        lines.append(line.rstrip())
    return lines


def format_version_tooltip(entry: VersionHistoryEntry) -> str:
    lines = [f"Tag: {entry.tag}", f"Version: {entry.version}"]
    if entry.commit:
        lines.append(f"Commit: {entry.short_commit}")
    lines.append(f"Date: {entry.date}")
    if entry.message:
        lines.append(f"Message: {entry.message}")
    return "\n".join(lines)


def format_tag_details(
    entry: VersionHistoryEntry,
    details: CommitDetails,
    previous_tag: Optional[str] = None,
    range_stats: Optional[RangeStats] = None,
) -> str:
    """Full description of a tag and the commit it points at."""
    stats = details.stats
    lines = [
        f"Tag:     {entry.tag}",
        f"Version: {entry.version}",
        f"Commit:  {entry.commit}",
        f"Author:  {details.author}"
        + (f" <{details.author_email}>" if details.author_email else ""),
        f"Date:    {details.author_date}",
        "",
        details.full_message or entry.message or "N/A",
        "",
        f"{stats.files_changed} files changed, "
        f"{stats.insertions} insertions(+), {stats.deletions} deletions(-)",
    ]

    if details.diff_stat:
        lines += ["", details.diff_stat.rstrip()]

    if previous_tag:
        lines += ["", f"Since {previous_tag}:"]
        if range_stats is not None:
            range_diff = range_stats.stats
            lines.append(
                f"  {range_stats.commits} commits, {range_diff.files_changed} files changed, "
                f"{range_diff.insertions} insertions(+), {range_diff.deletions} deletions(-)"
            )

    return "\n".join(lines)
