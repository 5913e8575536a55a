"""
Hotfix detection and relationship building for version histories.

A hotfix is a version string of the form ``<base>-<suffix>.<sequence>``, e.g.
``v1.0.0-hotfix.1`` or ``api/v2.0.0-patch.3``. The recognised suffixes are
supplied by the caller and default to ``hotfix``, ``patch`` and ``fix``.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Pattern, Sequence, Tuple

from forgegraph.constants import DEFAULT_HOTFIX_SUFFIXES
from forgegraph.model.forge import VersionHistoryEntry

logger = logging.getLogger("forgegraph")


@dataclass(frozen=True)
class HotfixInfo:
    """Result of parsing a version string for the hotfix naming convention."""

    is_hotfix: bool
    base_version: Optional[str] = None
    suffix: Optional[str] = None
    sequence: Optional[int] = None


@dataclass(frozen=True)
class EnrichedVersionEntry:
    """A version history entry with derived hotfix metadata attached."""

    version: str
    tag: str
    commit: str = ""
    date: str = ""
    message: str = ""
    is_hotfix: bool = False
    base_tag: Optional[str] = None
    hotfix_sequence: Optional[int] = None
    children: Tuple[str, ...] = field(default_factory=tuple)


@lru_cache(maxsize=32)
def _hotfix_pattern(suffixes: Tuple[str, ...]) -> Optional[Pattern[str]]:
    if not suffixes:
        return None
    alternatives = "|".join(re.escape(suffix) for suffix in suffixes)
    return re.compile(rf"(.+)-({alternatives})\.([0-9]+)")


def _as_suffix_tuple(suffixes: Optional[Iterable[str]]) -> Tuple[str, ...]:
    if suffixes is None:
        return DEFAULT_HOTFIX_SUFFIXES
    return tuple(suffixes)


def parse_hotfix_version(
    version: str, suffixes: Optional[Iterable[str]] = None
) -> HotfixInfo:
    """
    Parse a version string for the hotfix naming convention.

    Examples:
        "v1.0.0-hotfix.1"    -> HotfixInfo(True, "v1.0.0", "hotfix", 1)
        "api/v2.0.0-patch.3" -> HotfixInfo(True, "api/v2.0.0", "patch", 3)
        "v1.0.0"             -> HotfixInfo(False)

    Args:
        version: Version string to parse
        suffixes: Hotfix suffixes to recognise (defaults to hotfix, patch, fix)

    Returns:
        HotfixInfo describing the match. Never raises.
    """
    pattern = _hotfix_pattern(_as_suffix_tuple(suffixes))
    if pattern is None:
        return HotfixInfo(is_hotfix=False)

    match = pattern.fullmatch(version)
    if not match:
        return HotfixInfo(is_hotfix=False)

    return HotfixInfo(
        is_hotfix=True,
        base_version=match.group(1),
        suffix=match.group(2),
        sequence=int(match.group(3)),
    )


def is_hotfix_version(version: str, suffixes: Optional[Iterable[str]] = None) -> bool:
    """Check if a version string is a hotfix."""
    return parse_hotfix_version(version, suffixes).is_hotfix


def get_base_tag(
    version: str, suffixes: Optional[Iterable[str]] = None
) -> Optional[str]:
    """Return the base version of a hotfix, or None for non-hotfix versions."""
    info = parse_hotfix_version(version, suffixes)
    return info.base_version if info.is_hotfix else None


def build_hotfix_relationships(
    versions: Sequence[VersionHistoryEntry],
    suffixes: Optional[Iterable[str]] = None,
) -> Dict[str, List[str]]:
    """
    Build the base version -> hotfix tags mapping.

    Children within a group are ordered by hotfix sequence; entries with equal
    sequence keep their input order.

    Example:
        [v1.0.0, v1.0.0-hotfix.2, v1.0.0-hotfix.1]
        -> {"v1.0.0": ["v1.0.0-hotfix.1", "v1.0.0-hotfix.2"]}
    """
    suffixes = _as_suffix_tuple(suffixes)
    groups: Dict[str, List[Tuple[int, str]]] = {}

    for entry in versions:
        info = parse_hotfix_version(entry.version, suffixes)
        if info.is_hotfix and info.base_version is not None:
            groups.setdefault(info.base_version, []).append(
                (info.sequence or 0, entry.tag)
            )

    return {
        base: [tag for _, tag in sorted(children, key=lambda child: child[0])]
        for base, children in groups.items()
    }


def enrich_versions_with_hotfix_data(
    versions: Sequence[VersionHistoryEntry],
    suffixes: Optional[Iterable[str]] = None,
) -> List[EnrichedVersionEntry]:
    """
    Attach hotfix metadata to version history entries.

    Every entry gets is_hotfix, base_tag and hotfix_sequence. Main-line entries
    additionally get the tags of their hotfixes as ``children``, looked up by
    their own version string. The input entries are left untouched.
    """
    suffixes = _as_suffix_tuple(suffixes)
    child_map = build_hotfix_relationships(versions, suffixes)

    enriched = []
    for entry in versions:
        info = parse_hotfix_version(entry.version, suffixes)
        children: Tuple[str, ...] = ()
        if not info.is_hotfix:
            children = tuple(child_map.get(entry.version, ()))

        enriched.append(
            EnrichedVersionEntry(
                version=entry.version,
                tag=entry.tag,
                commit=entry.commit,
                date=entry.date,
                message=entry.message,
                is_hotfix=info.is_hotfix,
                base_tag=info.base_version,
                hotfix_sequence=info.sequence,
                children=children,
            )
        )

    n_hotfixes = sum(1 for entry in enriched if entry.is_hotfix)
    logger.debug(f"Enriched {len(enriched)} versions ({n_hotfixes} hotfixes)")
    return enriched
