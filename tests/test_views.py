import pytest

from forgegraph.git import CommitDetails, DiffStats, RangeStats
from forgegraph.model.forge import VersionInfo
from forgegraph.views import (
    GRAPH_HINT,
    HOTFIX_MARKER,
    NO_TAGS,
    RELEASE_MARKER,
    format_history,
    format_status,
    format_status_tooltip,
    format_tag_details,
    format_version_tooltip,
)

from .helpers import make_entry


@pytest.mark.short
class TestStatus:
    def test_format_status(self):
        info = VersionInfo(version="v1.2.0")
        assert format_status(info) == "v1.2.0"
        assert format_status(info, "api") == "api: v1.2.0"

    def test_dirty(self):
        info = VersionInfo(version="v1.2.0", dirty=True)
        assert format_status(info, "api") == "api: v1.2.0 (dirty)"

    def test_tooltip(self):
        info = VersionInfo(version="v1.2.0", commit="abcdef123456", dirty=True)
        assert format_status_tooltip(info, "api").splitlines() == [
            "App: api",
            "Version: v1.2.0",
            "Scheme: semver",
            "Commit: abcdef1",
            "Working directory has uncommitted changes",
        ]


@pytest.mark.short
class TestHistory:
    def test_graph_hint_only_with_hotfixes(self, history):
        lines = format_history(history)
        assert lines[0] == GRAPH_HINT
        assert len(lines) == len(history) + 1

        releases = [entry for entry in history if "hotfix" not in entry.version]
        assert GRAPH_HINT not in format_history(releases)

    def test_lines(self, history):
        lines = format_history(history)[1:]
        assert lines[0].startswith(f"{RELEASE_MARKER} v2.0.0 ")
        assert "2000000" in lines[0]
        assert "2024-03-01" in lines[0]
        assert lines[1].startswith(f"{HOTFIX_MARKER} v2.0.0-hotfix.1")

    def test_custom_suffixes(self, history):
        assert GRAPH_HINT not in format_history(history, ["hf"])

    def test_unknown_commit(self):
        assert format_history([make_entry("v1.0.0")]) == [f"{RELEASE_MARKER} v1.0.0  unknown"]

    def test_empty(self):
        assert format_history([]) == [NO_TAGS]

    def test_version_tooltip(self):
        entry = make_entry("v1.0.0", commit="abcdef123456", date="2024-01-01", message="Release")
        assert format_version_tooltip(entry).splitlines() == [
            "Tag: v1.0.0",
            "Version: v1.0.0",
            "Commit: abcdef1",
            "Date: 2024-01-01",
            "Message: Release",
        ]


@pytest.mark.short
class TestTagDetails:
    def test_details(self):
        entry = make_entry("v1.1.0", commit="abcdef1")
        details = CommitDetails(
            full_message="feat: graphs",
            author="Jane Doe",
            author_email="jane@example.com",
            author_date="2024-02-01T10:00:00",
            stats=DiffStats(2, 10, 3),
            diff_stat=" a.py | 13 ++++++++++---\n",
        )
        text = format_tag_details(
            entry, details, "v1.0.0", RangeStats(DiffStats(4, 20, 5), commits=3)
        )

        assert "Tag:     v1.1.0" in text
        assert "Author:  Jane Doe <jane@example.com>" in text
        assert "feat: graphs" in text
        assert "2 files changed, 10 insertions(+), 3 deletions(-)" in text
        assert "Since v1.0.0:" in text
        assert "3 commits, 4 files changed, 20 insertions(+), 5 deletions(-)" in text

    def test_first_tag(self):
        details = CommitDetails(
            full_message="",
            author="Unknown",
            author_email="",
            author_date="Unknown",
            stats=DiffStats(),
        )
        text = format_tag_details(make_entry("v0.1.0", message="Initial"), details)
        assert "Author:  Unknown\n" in text
        assert "Initial" in text
        assert "Since" not in text
