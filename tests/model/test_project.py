"""Tests for forge.yaml parsing and validation."""

import pytest

from forgegraph.exceptions import ConfigError
from forgegraph.model.project import (
    VersionConfig,
    detect_config_type,
    find_config_file,
    get_app_list,
    get_default_app,
    get_version_config,
    load_project_config,
    parse_project_config,
    validate_project_config,
    validate_version_config,
)

SINGLE_APP = """
version:
  scheme: semver
  prefix: v
build:
  targets: [linux/amd64, darwin/arm64]
"""

MULTI_APP = """
defaultApp: api
api:
  version:
    scheme: semver
    prefix: api/v
worker:
  version:
    scheme: calver
    calver_format: "2006.01.02"
"""


@pytest.mark.short
class TestParsing:
    def test_single_app(self):
        config = parse_project_config(SINGLE_APP)
        assert not detect_config_type(config).is_multi_app
        version_config = get_version_config(config)
        assert version_config.scheme == "semver"
        assert version_config.prefix == "v"

    def test_multi_app(self):
        config = parse_project_config(MULTI_APP)
        config_type = detect_config_type(config)
        assert config_type.is_multi_app
        assert get_app_list(config) == ["api", "worker"]
        assert get_default_app(config) == "api"

    def test_multi_app_version_config_defaults_to_default_app(self):
        config = parse_project_config(MULTI_APP)
        assert get_version_config(config).prefix == "api/v"
        assert get_version_config(config, "worker").calver_format == "2006.01.02"

    def test_unknown_app(self):
        config = parse_project_config(MULTI_APP)
        with pytest.raises(ConfigError, match="not found"):
            get_version_config(config, "missing")

    def test_invalid_yaml(self):
        with pytest.raises(ConfigError, match="Failed to parse"):
            parse_project_config("version: [unclosed")

    def test_non_mapping(self):
        with pytest.raises(ConfigError):
            parse_project_config("- a\n- b\n")

    def test_missing_version_and_default_app(self):
        with pytest.raises(ConfigError, match="missing version or defaultApp"):
            detect_config_type({"build": {}})


@pytest.mark.short
class TestFiles:
    def test_find_config_file_prefers_forge_yaml(self, tmp_path):
        (tmp_path / ".forge.yaml").write_text(SINGLE_APP)
        assert find_config_file(tmp_path) == tmp_path / ".forge.yaml"

        (tmp_path / "forge.yaml").write_text(SINGLE_APP)
        assert find_config_file(tmp_path) == tmp_path / "forge.yaml"

    def test_find_config_file_missing(self, tmp_path):
        assert find_config_file(tmp_path) is None

    def test_load(self, tmp_path):
        path = tmp_path / "forge.yaml"
        path.write_text(MULTI_APP)
        assert load_project_config(path)["defaultApp"] == "api"

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to load"):
            load_project_config(tmp_path / "forge.yaml")


@pytest.mark.short
class TestValidation:
    def test_valid_configs(self):
        assert validate_project_config(parse_project_config(SINGLE_APP)) == []
        assert validate_project_config(parse_project_config(MULTI_APP)) == []

    def test_version_config_rules(self):
        assert validate_version_config(None) == ["version.scheme is required"]
        assert validate_version_config(VersionConfig()) == ["version.scheme is required"]
        assert validate_version_config(VersionConfig(scheme="date")) == [
            'version.scheme must be "semver" or "calver"'
        ]
        assert validate_version_config(VersionConfig(scheme="calver")) == [
            'version.calver_format is required when scheme is "calver"'
        ]

    def test_multi_app_errors_are_prefixed(self):
        config = {
            "defaultApp": "api",
            "api": {"version": {"scheme": "calver"}},
            "web": {"version": {}},
        }
        assert validate_project_config(config) == [
            'api: version.calver_format is required when scheme is "calver"',
            "web: version.scheme is required",
        ]

    def test_multi_app_without_apps(self):
        assert validate_project_config({"defaultApp": "api"}) == [
            "Multi-app config must have at least one app"
        ]

    def test_structurally_invalid(self):
        assert validate_project_config({"build": {}}) == [
            "Invalid forge.yaml: missing version or defaultApp field"
        ]
