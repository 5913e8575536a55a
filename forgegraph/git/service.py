"""Read-only git queries used by the tag views."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple, Union

from git import Repo
from git.exc import (
    BadName,
    BadObject,
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
)
from packaging.version import InvalidVersion, Version

from forgegraph.constants import SHORT_COMMIT_LENGTH
from forgegraph.exceptions import GitError
from forgegraph.model.forge import GitTag
from forgegraph.versioning.hotfix import parse_hotfix_version

logger = logging.getLogger("forgegraph")

SHORTSTAT_PATTERN = re.compile(
    r"(\d+)\s+files?\s+changed"
    r"(?:,\s+(\d+)\s+insertions?\(\+\))?"
    r"(?:,\s+(\d+)\s+deletions?\(-\))?"
)


@dataclass(frozen=True)
class DiffStats:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class CommitSummary:
    hash: str
    short_hash: str
    author: str
    date: str
    message: str


@dataclass(frozen=True)
class CommitDetails:
    full_message: str
    author: str
    author_email: str
    author_date: str
    stats: DiffStats
    diff_stat: str = ""


@dataclass(frozen=True)
class RangeStats:
    stats: DiffStats
    commits: int


def parse_shortstat(text: str) -> DiffStats:
    """Parse "3 files changed, 45 insertions(+), 12 deletions(-)"."""
    match = SHORTSTAT_PATTERN.search(text)
    if not match:
        return DiffStats()
    return DiffStats(
        files_changed=int(match.group(1) or 0),
        insertions=int(match.group(2) or 0),
        deletions=int(match.group(3) or 0),
    )


def extract_version_from_tag(tag_name: str, prefix: Optional[str] = None) -> str:
    if prefix and tag_name.startswith(prefix):
        return tag_name[len(prefix) :]
    return tag_name


def _version_sort_key(tag: GitTag) -> Tuple[int, Version, int, str]:
    """Sort key approximating ``git tag --sort=version:refname``.

    Hotfixes sort right above their base release; names that are not
    versions sort below all versions.
    """
    name = tag.version or tag.name
    info = parse_hotfix_version(name)
    base = info.base_version if info.is_hotfix and info.base_version else name
    sequence = info.sequence if info.sequence is not None else -1
    try:
        return (1, Version(base), sequence, tag.name)
    except InvalidVersion:
        return (0, Version("0"), sequence, tag.name)


class GitService:
    """Git queries against the repository containing ``path``."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else Path.cwd()
        self.repo: Optional[Repo] = None
        try:
            self.repo = Repo(self.path, search_parent_directories=True)
        except (InvalidGitRepositoryError, NoSuchPathError):
            # Not a git repo, that's OK
            logger.debug(f"{self.path} is not inside a git repository")

    def is_git_repository(self) -> bool:
        return self.repo is not None

    def _require_repo(self) -> Repo:
        if self.repo is None:
            raise GitError(f"{self.path} is not a git repository")
        return self.repo

    def get_current_commit(self) -> str:
        return self._require_repo().head.commit.hexsha

    def get_short_commit(self) -> str:
        return self.get_current_commit()[:SHORT_COMMIT_LENGTH]

    def get_current_branch(self) -> str:
        repo = self._require_repo()
        if repo.head.is_detached:
            return "HEAD"
        return repo.active_branch.name

    def is_dirty(self) -> bool:
        """True if there are uncommitted or untracked changes."""
        if self.repo is None:
            return False
        try:
            return self.repo.is_dirty(untracked_files=True)
        except GitCommandError as e:
            logger.debug(f"git status failed: {e}")
            return False

    def tag_exists(self, tag_name: str) -> bool:
        if self.repo is None:
            return False
        return any(tag.name == tag_name for tag in self.repo.tags)

    def get_tags(self, prefix: Optional[str] = None) -> List[GitTag]:
        """All tags matching prefix, highest version first."""
        if self.repo is None:
            return []

        tags = []
        for ref in self.repo.tags:
            if prefix and not ref.name.startswith(prefix):
                continue
            try:
                commit = ref.commit
            except ValueError:
                # tag pointing at a non-commit object
                continue

            annotation = ref.tag
            if annotation is not None:
                date = datetime.fromtimestamp(annotation.tagged_date)
                lines = annotation.message.strip().splitlines()
                message = lines[0] if lines else ""
            else:
                date = commit.committed_datetime
                message = commit.summary if isinstance(commit.summary, str) else ""

            tags.append(
                GitTag(
                    name=ref.name,
                    commit=commit.hexsha[:SHORT_COMMIT_LENGTH],
                    date=date,
                    message=message,
                    version=extract_version_from_tag(ref.name, prefix),
                )
            )

        return sorted(tags, key=_version_sort_key, reverse=True)

    def get_latest_tag(self, prefix: Optional[str] = None) -> Optional[GitTag]:
        tags = self.get_tags(prefix)
        return tags[0] if tags else None

    def get_previous_tag(
        self, current_tag: str, prefix: Optional[str] = None
    ) -> Optional[str]:
        names = [tag.name for tag in self.get_tags(prefix)]
        if current_tag not in names:
            return None
        index = names.index(current_tag)
        if index == len(names) - 1:
            return None
        return names[index + 1]

    def get_commit_details(self, commit: str) -> CommitDetails:
        """Message, author and change statistics of a commit.

        Falls back to placeholder values when the commit cannot be read.
        """
        repo = self._require_repo()
        try:
            obj = repo.commit(commit)
            total = obj.stats.total
            message = obj.message
            return CommitDetails(
                full_message=message.strip() if isinstance(message, str) else "",
                author=obj.author.name or "Unknown",
                author_email=obj.author.email or "",
                author_date=obj.authored_datetime.isoformat(),
                stats=DiffStats(
                    files_changed=int(total.get("files", 0)),
                    insertions=int(total.get("insertions", 0)),
                    deletions=int(total.get("deletions", 0)),
                ),
                diff_stat=repo.git.show("--stat", "--format=", commit),
            )
        except (GitCommandError, BadName, BadObject, ValueError) as e:
            logger.debug(f"Unable to read commit {commit}: {e}")
            return CommitDetails(
                full_message="Unable to fetch commit message",
                author="Unknown",
                author_email="",
                author_date="Unknown",
                stats=DiffStats(),
            )

    def get_commit_range(self, from_ref: str, to_ref: str) -> List[CommitSummary]:
        """Non-merge commits reachable from to_ref but not from from_ref."""
        repo = self._require_repo()
        try:
            commits = list(repo.iter_commits(f"{from_ref}..{to_ref}", no_merges=True))
        except (GitCommandError, BadName, BadObject, ValueError) as e:
            logger.debug(f"Unable to list commits {from_ref}..{to_ref}: {e}")
            return []

        return [
            CommitSummary(
                hash=commit.hexsha,
                short_hash=commit.hexsha[:SHORT_COMMIT_LENGTH],
                author=commit.author.name or "Unknown",
                date=commit.committed_datetime.isoformat(),
                message=(
                    commit.summary
                    if isinstance(commit.summary, str) and commit.summary
                    else "No message"
                ),
            )
            for commit in commits
        ]

    def get_commit_range_stats(self, from_ref: str, to_ref: str) -> RangeStats:
        repo = self._require_repo()
        try:
            output = repo.git.diff("--shortstat", from_ref, to_ref)
        except GitCommandError as e:
            logger.debug(f"Unable to diff {from_ref} {to_ref}: {e}")
            return RangeStats(stats=DiffStats(), commits=0)

        commits = self.get_commit_range(from_ref, to_ref)
        return RangeStats(stats=parse_shortstat(output), commits=len(commits))
