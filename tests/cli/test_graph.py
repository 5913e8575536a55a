"""Tests for the graph and history commands."""

import json

import pytest

from forgegraph.exceptions import ForgeCommandError
from forgegraph.model.forge import VersionHistoryResponse
from forgegraph.views import GRAPH_HINT, NO_CONFIG


@pytest.mark.short
class TestGraphCommand:
    def test_mermaid_from_input(self, invoke, history_file):
        result = invoke(["graph", "--input", str(history_file), "--format", "mermaid"])

        assert result.exit_code == 0, result.output
        assert "flowchart TB" in result.output
        assert '\tn1(["v2.0.0-hotfix.1"]):::hotfix' in result.output

    def test_svg_is_default(self, invoke, history_file):
        result = invoke(["graph", "--input", str(history_file)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("<svg")

    def test_json_to_file(self, invoke, history_file, tmp_path):
        out = tmp_path / "graph.json"
        result = invoke(
            ["graph", "-i", str(history_file), "-f", "json", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert len(data["nodes"]) == 6
        assert (data["width"], data["height"]) == (500, 260)

    def test_html_title(self, invoke, history_file):
        result = invoke(
            ["graph", "-i", str(history_file), "-f", "html", "--title", "Releases"]
        )
        assert "<title>Releases</title>" in result.output

    def test_dot(self, invoke, history_file):
        result = invoke(["graph", "-i", str(history_file), "-f", "dot"])
        assert result.output.startswith("strict digraph")

    def test_bare_list_input(self, invoke, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(
            json.dumps(
                [
                    {"version": "v1.0.0", "tag": "v1.0.0"},
                    {"version": "v1.0.0-hotfix.1", "tag": "v1.0.0-hotfix.1"},
                ]
            )
        )
        result = invoke(["graph", "-i", str(path), "-f", "json"])
        data = json.loads(result.output)
        assert [node["x"] for node in data["nodes"]] == [0, 150]

    def test_limit_applies_to_input(self, invoke, history_file):
        result = invoke(["graph", "-i", str(history_file), "-f", "json", "-n", "2"])
        data = json.loads(result.output)
        assert [node["id"] for node in data["nodes"]] == ["v2.0.0", "v2.0.0-hotfix.1"]

    def test_hotfix_suffixes_from_settings(self, invoke, history_file):
        invoke(["config", "set", "graph", "hotfix_suffixes", "hf"])
        result = invoke(["graph", "-i", str(history_file), "-f", "json"])
        data = json.loads(result.output)
        assert not any(node["isHotfix"] for node in data["nodes"])

    def test_invalid_input(self, invoke, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        result = invoke(["graph", "-i", str(path)])
        assert result.exit_code == 1

    def test_no_config_without_input(self, invoke, tmp_path):
        result = invoke(["graph"], project=tmp_path)
        assert result.exit_code == 1

    def test_history_from_forge(self, invoke, forge, history, project_dir):
        forge.get_version_history.return_value = VersionHistoryResponse(
            versions=history, count=len(history)
        )
        result = invoke(["graph", "-f", "json", "--app", "api"], project=project_dir)

        assert result.exit_code == 0, result.output
        forge.get_version_history.assert_called_once_with("api", 10)
        assert len(json.loads(result.output)["edges"]) == 6

    def test_forge_failure(self, invoke, forge, project_dir, capture_logs):
        forge.get_version_history.side_effect = ForgeCommandError(
            ["forge", "version", "list"], 1, "not a git repository"
        )
        result = invoke(["graph"], project=project_dir)
        assert result.exit_code == 1
        assert "not a git repository" in capture_logs.getvalue()


@pytest.mark.short
class TestHistoryCommand:
    def test_listing(self, invoke, forge, history, project_dir):
        forge.get_version_history.return_value = VersionHistoryResponse(versions=history)
        result = invoke(["history", "--limit", "20"], project=project_dir)

        assert result.exit_code == 0, result.output
        forge.get_version_history.assert_called_once_with(None, 20)
        lines = result.output.splitlines()
        assert lines[0] == GRAPH_HINT
        assert len(lines) == 7

    def test_no_config(self, invoke, forge, tmp_path):
        result = invoke(["history"], project=tmp_path)
        assert result.output.strip() == NO_CONFIG
        forge.get_version_history.assert_not_called()

    def test_limit_out_of_range(self, invoke, project_dir):
        result = invoke(["history", "--limit", "0"], project=project_dir)
        assert result.exit_code == 2
