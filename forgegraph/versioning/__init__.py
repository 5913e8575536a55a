"""
Versioning module for forgegraph.

Hotfix detection and release/hotfix relationship building. Everything here is
pure computation over version strings; fetching the version history is the
job of forgegraph.forge.
"""

from .hotfix import (
    HotfixInfo,
    EnrichedVersionEntry,
    parse_hotfix_version,
    is_hotfix_version,
    get_base_tag,
    build_hotfix_relationships,
    enrich_versions_with_hotfix_data,
)

__all__ = [
    "HotfixInfo",
    "EnrichedVersionEntry",
    "parse_hotfix_version",
    "is_hotfix_version",
    "get_base_tag",
    "build_hotfix_relationships",
    "enrich_versions_with_hotfix_data",
]
