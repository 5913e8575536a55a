"""Tests for the forge JSON payload models."""

import pytest

from forgegraph.constants import BumpType, VersionScheme
from forgegraph.model.forge import (
    ChangelogResult,
    VersionHistoryEntry,
    VersionHistoryResponse,
    VersionInfo,
    VersionNextResult,
)


@pytest.mark.short
class TestForgeModels:
    def test_version_info(self):
        info = VersionInfo.model_validate(
            {"version": "v1.2.0", "scheme": "semver", "commit": "abcdef123456", "dirty": True}
        )
        assert info.scheme is VersionScheme.semver
        assert info.short_commit == "abcdef1"
        assert info.dirty

    def test_version_info_without_commit(self):
        assert VersionInfo(version="v1.0.0").short_commit is None

    def test_history_entry_nulls_become_empty(self):
        entry = VersionHistoryEntry.model_validate(
            {"version": "v1.0.0", "tag": "v1.0.0", "commit": None, "date": None}
        )
        assert entry.commit == ""
        assert entry.date == ""
        assert entry.short_commit == "unknown"

    def test_history_response_ignores_unknown_keys(self):
        response = VersionHistoryResponse.model_validate(
            {
                "versions": [{"version": "v1.0.0", "tag": "v1.0.0", "author": "x"}],
                "count": 1,
                "app": "api",
            }
        )
        assert response.count == 1
        assert response.versions[0].tag == "v1.0.0"

    def test_history_response_null_versions(self):
        assert VersionHistoryResponse.model_validate({"versions": None}).versions == []

    def test_next_version(self):
        result = VersionNextResult.model_validate(
            {"current": "v1.0.0", "next": "v1.1.0", "bump": "minor", "scheme": "semver"}
        )
        assert result.bump is BumpType.minor

    def test_changelog_aliases_and_grouping(self):
        changelog = ChangelogResult.model_validate(
            {
                "from": "v1.0.0",
                "to": "HEAD",
                "commits": [
                    {"type": "feat", "message": "add graph", "hash": "a" * 40},
                    {"type": "fix", "message": "fix layout", "hash": "b" * 40},
                    {"type": "feat", "message": "add html", "hash": "c" * 40},
                ],
            }
        )
        assert changelog.from_ref == "v1.0.0"
        groups = changelog.grouped()
        assert list(groups) == ["feat", "fix"]
        assert [c.message for c in groups["feat"]] == ["add graph", "add html"]
