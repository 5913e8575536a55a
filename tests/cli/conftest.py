from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from forgegraph.cli.main import cli

SINGLE_APP_CONFIG = "version:\n  scheme: semver\n  prefix: v\n"


@pytest.fixture
def project_dir(tmp_path):
    project = tmp_path / "project"
    project.mkdir()
    (project / "forge.yaml").write_text(SINGLE_APP_CONFIG)
    return project


@pytest.fixture
def invoke(settings_file):
    """Invoke the forgegraph CLI with an isolated settings file."""
    runner = CliRunner()

    def _invoke(args, project=None, **kwargs):
        base = ["--config", str(settings_file)]
        if project is not None:
            base += ["-C", str(project)]
        return runner.invoke(cli, base + list(args), **kwargs)

    return _invoke


@pytest.fixture
def forge():
    """The ForgeService instance handed to commands."""
    with patch("forgegraph.cli.utils.context.ForgeService") as MockForge:
        service = MagicMock()
        MockForge.return_value = service
        service.factory = MockForge
        yield service


@pytest.fixture
def git():
    """The GitService instance handed to commands; a clean repository by default."""
    with patch("forgegraph.cli.utils.context.GitService") as MockGit:
        service = MagicMock()
        service.is_git_repository.return_value = True
        service.is_dirty.return_value = False
        MockGit.return_value = service
        yield service
