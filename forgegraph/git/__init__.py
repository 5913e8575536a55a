"""
Git operations module for forgegraph.

Read-only queries (tags, commits, diff statistics) backing the tag history and
tag detail views. Tag creation is left to forge.
"""

from .service import (
    GitService,
    CommitDetails,
    CommitSummary,
    DiffStats,
    RangeStats,
    parse_shortstat,
    extract_version_from_tag,
)

__all__ = [
    "GitService",
    "CommitDetails",
    "CommitSummary",
    "DiffStats",
    "RangeStats",
    "parse_shortstat",
    "extract_version_from_tag",
]
