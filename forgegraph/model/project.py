"""Models and helpers for the forge.yaml project configuration.

A forge.yaml is either a single-app document with a top-level ``version``
section, or a multi-app document with a ``defaultApp`` key and one mapping per
app.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from forgegraph.constants import CONFIG_FILES, VersionScheme
from forgegraph.exceptions import ConfigError


class ProjectModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class VersionConfig(ProjectModel):
    # scheme is left as a plain string so that validate_version_config can
    # report bad values instead of failing at parse time
    scheme: Optional[str] = Field(None, description="semver or calver")
    prefix: Optional[str] = Field(None, description="Tag prefix, e.g. 'v'")
    calver_format: Optional[str] = None
    pre: Optional[str] = None
    meta: Optional[str] = None


class BuildBinary(ProjectModel):
    name: str
    path: str
    ldflags: Optional[str] = None


class BuildConfig(ProjectModel):
    name: Optional[str] = None
    main_path: Optional[str] = None
    targets: List[str] = Field(default_factory=list)
    ldflags: Optional[str] = None
    output_dir: Optional[str] = None
    binaries: List[BuildBinary] = Field(default_factory=list)


class DockerConfig(ProjectModel):
    enabled: bool = False
    repository: Optional[str] = None
    dockerfile: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    build_args: Dict[str, str] = Field(default_factory=dict)


class GitConfig(ProjectModel):
    tag_prefix: Optional[str] = None
    default_branch: Optional[str] = None


class AppConfig(ProjectModel):
    """Configuration of a single app (or the whole file for single-app configs)."""

    version: Optional[VersionConfig] = None
    build: Optional[BuildConfig] = None
    docker: Optional[DockerConfig] = None
    git: Optional[GitConfig] = None


class ConfigType(BaseModel):
    is_multi_app: bool
    apps: List[str] = Field(default_factory=list)
    default_app: Optional[str] = None


def find_config_file(root: Union[str, Path]) -> Optional[Path]:
    """Return the first forge.yaml / .forge.yaml found in root, if any."""
    root = Path(root)
    for name in CONFIG_FILES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def parse_project_config(content: str) -> Dict[str, Any]:
    """Parse forge.yaml content into a raw mapping."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse forge.yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Failed to parse forge.yaml: top level must be a mapping")
    return data


def load_project_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load and parse a forge.yaml file."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e
    return parse_project_config(content)


def detect_config_type(config: Dict[str, Any]) -> ConfigType:
    """
    Detect whether a configuration is multi-app or single-app.

    Raises:
        ConfigError: If neither ``defaultApp`` nor ``version`` is present
    """
    if "defaultApp" in config:
        apps = [
            key
            for key, value in config.items()
            if key != "defaultApp" and isinstance(value, dict)
        ]
        return ConfigType(
            is_multi_app=True, apps=apps, default_app=config.get("defaultApp")
        )

    if "version" in config:
        return ConfigType(is_multi_app=False)

    raise ConfigError("Invalid forge.yaml: missing version or defaultApp field")


def _parse_app_config(data: Dict[str, Any], label: str) -> AppConfig:
    try:
        return AppConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration for {label}: {e}") from e


def get_app_config(config: Dict[str, Any], app_name: str) -> AppConfig:
    """Return the configuration of one app of a multi-app config."""
    app_config = config.get(app_name)
    if app_name == "defaultApp" or not isinstance(app_config, dict):
        raise ConfigError(f"App '{app_name}' not found in configuration")
    return _parse_app_config(app_config, f"app '{app_name}'")


def get_version_config(
    config: Dict[str, Any], app_name: Optional[str] = None
) -> Optional[VersionConfig]:
    """
    Return the version section for an app, or for the single-app config.

    For multi-app configs the app falls back to ``defaultApp``.
    """
    config_type = detect_config_type(config)

    if config_type.is_multi_app:
        app_name = app_name or config_type.default_app
        if not app_name:
            raise ConfigError("Multi-app config requires app name")
        return get_app_config(config, app_name).version

    return _parse_app_config(config, "forge.yaml").version


def get_app_list(config: Dict[str, Any]) -> List[str]:
    return detect_config_type(config).apps


def get_default_app(config: Dict[str, Any]) -> Optional[str]:
    return detect_config_type(config).default_app


def validate_version_config(version_config: Optional[VersionConfig]) -> List[str]:
    """Validate a version section, returning a list of error messages."""
    errors: List[str] = []

    if version_config is None or not version_config.scheme:
        errors.append("version.scheme is required")
        return errors

    if version_config.scheme not in {scheme.value for scheme in VersionScheme}:
        errors.append('version.scheme must be "semver" or "calver"')

    if version_config.scheme == VersionScheme.calver.value and not (
        version_config.calver_format
    ):
        errors.append('version.calver_format is required when scheme is "calver"')

    return errors


def validate_project_config(config: Dict[str, Any]) -> List[str]:
    """Validate a whole forge.yaml mapping, returning a list of error messages."""
    errors: List[str] = []

    try:
        config_type = detect_config_type(config)
    except ConfigError as e:
        return [str(e)]

    if not config_type.is_multi_app:
        try:
            app_config = _parse_app_config(config, "forge.yaml")
        except ConfigError as e:
            return [str(e)]
        return validate_version_config(app_config.version)

    if not config_type.apps:
        errors.append("Multi-app config must have at least one app")

    for app_name in config_type.apps:
        try:
            app_config = get_app_config(config, app_name)
        except ConfigError as e:
            errors.append(f"{app_name}: {e}")
            continue
        errors.extend(
            f"{app_name}: {error}" for error in validate_version_config(app_config.version)
        )

    return errors
