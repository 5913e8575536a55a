from enum import Enum


class BumpType(str, Enum):
    major = "major"
    minor = "minor"
    patch = "patch"


class VersionScheme(str, Enum):
    semver = "semver"
    calver = "calver"


class GraphFormat(str, Enum):
    svg = "svg"
    html = "html"
    mermaid = "mermaid"
    dot = "dot"
    json = "json"


# Hotfix detection
DEFAULT_HOTFIX_SUFFIXES = ("hotfix", "patch", "fix")

# Version history
DEFAULT_HISTORY_LIMIT = 10
MAX_HISTORY_LIMIT = 1000

# forge.yaml lookup order
CONFIG_FILES = ("forge.yaml", ".forge.yaml")

FORGE_EXECUTABLE = "forge"
FORGE_REPOSITORY_URL = "https://github.com/alexjoedt/forge"

SHORT_COMMIT_LENGTH = 7
