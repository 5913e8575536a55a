import io
import json
import logging

import pytest

from .helpers import make_entry


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("forgegraph")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture
def history():
    """A newest-first history with two hotfixes of v1.0.0 and one of v2.0.0."""
    return [
        make_entry("v2.0.0", commit="2000000aaaaaaa", date="2024-03-01"),
        make_entry("v2.0.0-hotfix.1", commit="2000001bbbbbbb", date="2024-03-02"),
        make_entry("v1.0.0", commit="1000000ccccccc", date="2024-01-01"),
        make_entry("v1.0.0-hotfix.2", commit="1000002ddddddd", date="2024-01-05"),
        make_entry("v1.0.0-hotfix.1", commit="1000001eeeeeee", date="2024-01-03"),
        make_entry("v0.9.0", commit="0900000fffffff", date="2023-12-01"),
    ]


@pytest.fixture
def history_file(tmp_path, history):
    """The history fixture saved as `forge version list --json` output."""
    path = tmp_path / "versions.json"
    path.write_text(
        json.dumps(
            {
                "versions": [entry.model_dump() for entry in history],
                "count": len(history),
            }
        )
    )
    return path


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "settings" / "forgegraph.cfg"
