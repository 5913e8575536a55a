"""Pydantic models for forgegraph."""

from forgegraph.model.forge import (
    # CLI payloads
    VersionInfo,
    VersionHistoryEntry,
    VersionHistoryResponse,
    VersionNextResult,
    BumpResult,
    BuildResult,
    ImageResult,
    ValidationResult,
    ChangelogCommit,
    ChangelogResult,
    ForgeInstallation,
    # Git
    GitTag,
)
from forgegraph.model.project import (
    VersionConfig,
    BuildBinary,
    BuildConfig,
    DockerConfig,
    GitConfig,
    AppConfig,
    ConfigType,
    find_config_file,
    parse_project_config,
    load_project_config,
    detect_config_type,
    get_app_config,
    get_version_config,
    get_app_list,
    get_default_app,
    validate_version_config,
    validate_project_config,
)
from forgegraph.model.validation import (
    is_valid_bump_type,
    is_valid_version_scheme,
    validate_template_syntax,
    validate_platform_target,
    validate_calver_format,
)

__all__ = [
    # CLI payloads
    "VersionInfo",
    "VersionHistoryEntry",
    "VersionHistoryResponse",
    "VersionNextResult",
    "BumpResult",
    "BuildResult",
    "ImageResult",
    "ValidationResult",
    "ChangelogCommit",
    "ChangelogResult",
    "ForgeInstallation",
    "GitTag",
    # forge.yaml
    "VersionConfig",
    "BuildBinary",
    "BuildConfig",
    "DockerConfig",
    "GitConfig",
    "AppConfig",
    "ConfigType",
    "find_config_file",
    "parse_project_config",
    "load_project_config",
    "detect_config_type",
    "get_app_config",
    "get_version_config",
    "get_app_list",
    "get_default_app",
    "validate_version_config",
    "validate_project_config",
    # Validators
    "is_valid_bump_type",
    "is_valid_version_scheme",
    "validate_template_syntax",
    "validate_platform_target",
    "validate_calver_format",
]
