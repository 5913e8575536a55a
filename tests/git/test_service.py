"""Tests for GitService against throwaway repositories."""

from unittest.mock import patch

import pytest
from git import Actor, Repo
from git.exc import InvalidGitRepositoryError

from forgegraph.exceptions import GitError
from forgegraph.git import (
    DiffStats,
    GitService,
    extract_version_from_tag,
    parse_shortstat,
)

AUTHOR = Actor("Jane Doe", "jane@example.com")


def _commit(repo, name, content):
    path = repo.working_tree_dir + "/" + name
    with open(path, "w") as f:
        f.write(content)
    repo.index.add([name])
    return repo.index.commit(f"add {name}", author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def tagged_repo(tmp_path):
    """A repository with v1.0.0, v1.0.0-hotfix.1 and an annotated v1.1.0."""
    repo = Repo.init(tmp_path)
    with repo.config_writer() as config:
        config.set_value("user", "name", AUTHOR.name)
        config.set_value("user", "email", AUTHOR.email)

    _commit(repo, "a.txt", "a\n")
    repo.create_tag("v1.0.0")
    _commit(repo, "b.txt", "b\nb\n")
    repo.create_tag("v1.0.0-hotfix.1")
    _commit(repo, "c.txt", "c\n")
    repo.create_tag("v1.1.0", message="Release 1.1.0\n\nDetails")
    return repo


@pytest.mark.short
class TestHelpers:
    def test_parse_shortstat(self):
        assert parse_shortstat(
            " 3 files changed, 45 insertions(+), 12 deletions(-)"
        ) == DiffStats(3, 45, 12)
        assert parse_shortstat("1 file changed, 1 insertion(+)") == DiffStats(1, 1, 0)
        assert parse_shortstat("2 files changed, 4 deletions(-)") == DiffStats(2, 0, 4)
        assert parse_shortstat("") == DiffStats()

    def test_extract_version_from_tag(self):
        assert extract_version_from_tag("api/v1.0.0", "api/") == "v1.0.0"
        assert extract_version_from_tag("v1.0.0", "api/") == "v1.0.0"
        assert extract_version_from_tag("v1.0.0") == "v1.0.0"


@pytest.mark.short
class TestNotARepository:
    def test_not_a_repository(self, tmp_path):
        with patch("forgegraph.git.service.Repo") as MockRepo:
            MockRepo.side_effect = InvalidGitRepositoryError()
            service = GitService(tmp_path)

        assert not service.is_git_repository()
        assert not service.is_dirty()
        assert service.get_tags() == []
        assert not service.tag_exists("v1.0.0")
        with pytest.raises(GitError):
            service.get_current_commit()


@pytest.mark.short
class TestGitService:
    def test_tags_sorted_highest_first(self, tagged_repo):
        tags = GitService(tagged_repo.working_tree_dir).get_tags()
        assert [tag.name for tag in tags] == ["v1.1.0", "v1.0.0-hotfix.1", "v1.0.0"]

    def test_annotated_tag_message(self, tagged_repo):
        latest = GitService(tagged_repo.working_tree_dir).get_latest_tag()
        assert latest.name == "v1.1.0"
        assert latest.message == "Release 1.1.0"
        assert len(latest.commit) == 7

    def test_lightweight_tag_uses_commit_summary(self, tagged_repo):
        tags = GitService(tagged_repo.working_tree_dir).get_tags()
        assert tags[-1].message == "add a.txt"

    def test_prefix_filter(self, tagged_repo):
        tagged_repo.create_tag("api/v2.0.0")
        tags = GitService(tagged_repo.working_tree_dir).get_tags("api/")
        assert [(tag.name, tag.version) for tag in tags] == [("api/v2.0.0", "v2.0.0")]

    def test_previous_tag(self, tagged_repo):
        service = GitService(tagged_repo.working_tree_dir)
        assert service.get_previous_tag("v1.1.0") == "v1.0.0-hotfix.1"
        assert service.get_previous_tag("v1.0.0") is None
        assert service.get_previous_tag("v9.9.9") is None

    def test_tag_exists(self, tagged_repo):
        service = GitService(tagged_repo.working_tree_dir)
        assert service.tag_exists("v1.0.0")
        assert not service.tag_exists("v2.0.0")

    def test_commit_details(self, tagged_repo):
        service = GitService(tagged_repo.working_tree_dir)
        details = service.get_commit_details(service.get_current_commit())
        assert details.author == "Jane Doe"
        assert details.author_email == "jane@example.com"
        assert details.full_message == "add c.txt"
        assert details.stats == DiffStats(1, 1, 0)
        assert "c.txt" in details.diff_stat

    def test_commit_details_unknown_commit(self, tagged_repo):
        details = GitService(tagged_repo.working_tree_dir).get_commit_details("no-such-ref")
        assert details.author == "Unknown"
        assert details.full_message == "Unable to fetch commit message"

    def test_commit_range(self, tagged_repo):
        service = GitService(tagged_repo.working_tree_dir)
        commits = service.get_commit_range("v1.0.0", "v1.1.0")
        assert [commit.message for commit in commits] == ["add c.txt", "add b.txt"]
        assert commits[0].author == "Jane Doe"

        stats = service.get_commit_range_stats("v1.0.0", "v1.1.0")
        assert stats.commits == 2
        assert stats.stats == DiffStats(2, 3, 0)

    def test_dirty_and_branch(self, tagged_repo):
        service = GitService(tagged_repo.working_tree_dir)
        assert not service.is_dirty()
        assert service.get_current_branch() == tagged_repo.active_branch.name
        assert service.get_short_commit() == tagged_repo.head.commit.hexsha[:7]

        with open(tagged_repo.working_tree_dir + "/untracked.txt", "w") as f:
            f.write("x")
        assert service.is_dirty()

    def test_finds_repository_from_subdirectory(self, tagged_repo, tmp_path):
        subdir = tmp_path / "nested" / "dir"
        subdir.mkdir(parents=True)
        assert GitService(subdir).is_git_repository()
