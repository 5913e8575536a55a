"""Pydantic models for the JSON documents emitted by the forge CLI."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from forgegraph.constants import BumpType, SHORT_COMMIT_LENGTH, VersionScheme


class ForgeModel(BaseModel):
    """Base class for forge CLI payloads; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VersionInfo(ForgeModel):
    """Current version as reported by ``forge version``."""

    version: str = Field(..., description="Current version string")
    scheme: VersionScheme = Field(VersionScheme.semver, description="Version scheme")
    commit: Optional[str] = Field(None, description="Commit the version points at")
    dirty: bool = Field(False, description="Working directory has local changes")
    message: Optional[str] = None

    @property
    def short_commit(self) -> Optional[str]:
        if not self.commit:
            return None
        return self.commit[:SHORT_COMMIT_LENGTH]


class VersionHistoryEntry(ForgeModel):
    """One release or hotfix record from ``forge version list``."""

    version: str = Field(..., description="Version string, possibly hotfix-suffixed")
    tag: str = Field(..., description="Git tag, unique per entry")
    commit: str = Field("", description="Commit hash")
    date: str = Field("", description="Tag date")
    message: str = Field("", description="Tag or commit subject")

    @field_validator("commit", "date", "message", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return "" if v is None else v

    @property
    def short_commit(self) -> str:
        return self.commit[:SHORT_COMMIT_LENGTH] if self.commit else "unknown"


class VersionHistoryResponse(ForgeModel):
    """Response of ``forge version list``."""

    versions: List[VersionHistoryEntry] = Field(default_factory=list)
    count: int = 0

    @field_validator("versions", mode="before")
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v


class BumpResult(ForgeModel):
    tag: str
    created: bool = False
    pushed: bool = False
    version: Optional[str] = None
    message: str = ""


class BuildResult(ForgeModel):
    version: str
    commit: str = ""
    short_commit: str = ""
    date: str = ""
    output_dir: str = ""
    targets: List[str] = Field(default_factory=list)
    binaries: List[str] = Field(default_factory=list)
    message: str = ""


class ImageResult(ForgeModel):
    repository: str
    tags: List[str] = Field(default_factory=list)
    platforms: List[str] = Field(default_factory=list)
    pushed: bool = False
    message: str = ""


class ValidationResult(ForgeModel):
    valid: bool
    issues: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class ChangelogCommit(ForgeModel):
    type: str
    scope: Optional[str] = None
    message: str
    hash: str
    breaking: bool = False


class ChangelogResult(ForgeModel):
    from_ref: str = Field(..., alias="from")
    to_ref: str = Field(..., alias="to")
    commits: List[ChangelogCommit] = Field(default_factory=list)

    def grouped(self) -> Dict[str, List[ChangelogCommit]]:
        """Group commits by conventional-commit type, preserving order."""
        groups: Dict[str, List[ChangelogCommit]] = {}
        for commit in self.commits:
            groups.setdefault(commit.type, []).append(commit)
        return groups


class VersionNextResult(ForgeModel):
    current: str
    next: str
    bump: BumpType
    scheme: VersionScheme


class ForgeInstallation(ForgeModel):
    installed: bool
    version: Optional[str] = None
    path: Optional[str] = None


class GitTag(BaseModel):
    """A git tag with the version extracted from its name."""

    name: str
    commit: str
    date: Optional[datetime] = None
    message: str = ""
    version: Optional[str] = None
