"""
Client for the forge CLI.

Every call runs ``forge <args> --json`` in the project directory and parses the
JSON document forge prints into the models of forgegraph.model.forge.
"""

import json
import logging
import re
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from forgegraph.constants import FORGE_EXECUTABLE, MAX_HISTORY_LIMIT
from forgegraph.exceptions import (
    ForgeCommandError,
    ForgeNotInstalledError,
    ForgeOutputError,
)
from forgegraph.model.forge import (
    BuildResult,
    BumpResult,
    ChangelogResult,
    ForgeInstallation,
    ImageResult,
    ValidationResult,
    VersionHistoryResponse,
    VersionInfo,
    VersionNextResult,
)

logger = logging.getLogger("forgegraph")

ModelT = TypeVar("ModelT", bound=BaseModel)

INITIAL_TAG_PATTERN = re.compile(r"Created initial tag:\s*(.+)", re.IGNORECASE)
JSON_BLOCK_PATTERN = re.compile(r"\{[\s\S]*\}")
GO_INSTALL_TARGET = "github.com/alexjoedt/forge@latest"


def parse_forge_output(model: Type[ModelT], output: str) -> ModelT:
    """
    Parse forge JSON output into a model.

    Raises:
        ForgeOutputError: If the output is not JSON or does not fit the model
    """
    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise ForgeOutputError(f"forge returned invalid JSON: {e}", output) from e

    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ForgeOutputError(
            f"Unexpected forge output for {model.__name__}: {e}", output
        ) from e


class ForgeService:
    """Runs forge commands in a project directory."""

    def __init__(
        self,
        cwd: Optional[Union[str, Path]] = None,
        executable: str = FORGE_EXECUTABLE,
        verbose: bool = False,
        dry_run: bool = False,
    ):
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.executable = executable
        self.verbose = verbose
        self.dry_run = dry_run
        self._installation: Optional[ForgeInstallation] = None

    def execute(self, args: List[str], skip_json: bool = False) -> str:
        """
        Run forge with the given arguments and return its stdout.

        Raises:
            ForgeNotInstalledError: If the forge executable is not found
            ForgeCommandError: If forge exits with a non-zero status
        """
        args = list(args)
        if self.verbose:
            args.append("--verbose")
        if self.dry_run:
            args.append("--dry-run")
        if not skip_json and "--json" not in args and "--version" not in args:
            args.append("--json")

        command = [self.executable] + args
        logger.debug(f"$ {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                cwd=self.cwd,
                text=True,
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise ForgeNotInstalledError(self.executable) from e

        if result.stderr:
            logger.debug(result.stderr.rstrip())

        if result.returncode != 0:
            raise ForgeCommandError(command, result.returncode, result.stderr)

        return result.stdout

    def check_installation(self) -> ForgeInstallation:
        """Check if forge is installed. The result is cached."""
        if self._installation is not None:
            return self._installation

        try:
            output = self.execute(["--version"])
            self._installation = ForgeInstallation(
                installed=True,
                version=output.strip(),
                path=shutil.which(self.executable) or self.executable,
            )
        except (ForgeNotInstalledError, ForgeCommandError) as e:
            logger.debug(f"forge not available: {e}")
            self._installation = ForgeInstallation(installed=False)

        return self._installation

    def reset_installation(self) -> None:
        self._installation = None

    def ensure_installed(self) -> ForgeInstallation:
        installation = self.check_installation()
        if not installation.installed:
            raise ForgeNotInstalledError(self.executable)
        return installation

    def install(self) -> ForgeInstallation:
        """Install forge with ``go install`` and verify the result."""
        if shutil.which("go") is None:
            raise ForgeNotInstalledError("go")

        command = ["go", "install", GO_INSTALL_TARGET]
        logger.info(f"$ {' '.join(command)}")
        result = subprocess.run(command, text=True, capture_output=True, check=False)
        if result.returncode != 0:
            raise ForgeCommandError(command, result.returncode, result.stderr)

        self.reset_installation()
        installation = self.check_installation()
        if not installation.installed:
            logger.warning(
                "forge was installed but not found in PATH. "
                "You may need to add $GOPATH/bin to your PATH."
            )
        return installation

    def get_version(self, app: Optional[str] = None) -> VersionInfo:
        args = ["version"]
        if app:
            args += ["--app", app]
        return parse_forge_output(VersionInfo, self.execute(args))

    def get_version_history(
        self, app: Optional[str] = None, limit: Optional[int] = None
    ) -> VersionHistoryResponse:
        args = ["version", "list"]
        if app:
            args += ["--app", app]
        if limit:
            args += ["--limit", str(min(limit, MAX_HISTORY_LIMIT))]
        return parse_forge_output(VersionHistoryResponse, self.execute(args))

    def get_next_version(
        self, bump: str, app: Optional[str] = None
    ) -> VersionNextResult:
        args = ["version", "next", "--bump", bump]
        if app:
            args += ["--app", app]
        return parse_forge_output(VersionNextResult, self.execute(args))

    def bump(
        self,
        bump: Optional[str] = None,
        app: Optional[str] = None,
        initial: Optional[str] = None,
        scheme: Optional[str] = None,
        calver_format: Optional[str] = None,
        prefix: Optional[str] = None,
        push: bool = False,
        force: bool = False,
        pre: Optional[str] = None,
        meta: Optional[str] = None,
    ) -> BumpResult:
        """
        Create a version tag.

        With ``initial`` forge prints plain text ("Created initial tag: v1.0.0")
        instead of JSON.
        """
        args = ["bump"]
        if bump:
            args.append(bump)
        if app:
            args += ["--app", app]
        if initial:
            args += ["--initial", initial]
        if scheme:
            args += ["--scheme", scheme]
        if calver_format:
            args += ["--calver-format", calver_format]
        if prefix:
            args += ["--prefix", prefix]
        if push:
            args.append("--push")
        if force:
            args.append("--force")
        if pre:
            args += ["--pre", pre]
        if meta:
            args += ["--meta", meta]

        output = self.execute(args, skip_json=bool(initial))

        if initial:
            match = INITIAL_TAG_PATTERN.search(output)
            if not match:
                raise ForgeOutputError(
                    f"Failed to parse forge bump --initial output: {output}", output
                )
            tag = match.group(1).strip()
            return BumpResult(
                tag=tag, created=True, pushed=push, version=tag, message=output.strip()
            )

        try:
            return parse_forge_output(BumpResult, output)
        except ForgeOutputError:
            # forge sometimes prints progress text before the JSON document
            match = JSON_BLOCK_PATTERN.search(output)
            if not match:
                raise ForgeOutputError(
                    f"No valid JSON found in forge bump output: {output}", output
                )
            return parse_forge_output(BumpResult, match.group(0))

    def build(
        self,
        app: Optional[str] = None,
        targets: Optional[List[str]] = None,
        version: Optional[str] = None,
    ) -> BuildResult:
        args = ["build"]
        if app:
            args += ["--app", app]
        if targets:
            args += ["--targets", ",".join(targets)]
        if version:
            args += ["--version", version]
        return parse_forge_output(BuildResult, self.execute(args))

    def build_image(
        self,
        app: Optional[str] = None,
        push: bool = False,
        platforms: Optional[List[str]] = None,
        build_args: Optional[Dict[str, str]] = None,
    ) -> ImageResult:
        args = ["docker"]
        if app:
            args += ["--app", app]
        if push:
            args.append("--push")
        if platforms:
            args += ["--platforms", ",".join(platforms)]
        for key, value in (build_args or {}).items():
            args += ["--build-arg", f"{key}={value}"]
        return parse_forge_output(ImageResult, self.execute(args))

    def init(
        self, multi: bool = False, output: Optional[str] = None, force: bool = False
    ) -> str:
        args = ["init"]
        if multi:
            args.append("--multi")
        if output:
            args += ["--output", output]
        if force:
            args.append("--force")
        return self.execute(args)

    def validate(self, app: Optional[str] = None) -> ValidationResult:
        args = ["validate"]
        if app:
            args += ["--app", app]
        return parse_forge_output(ValidationResult, self.execute(args))

    def changelog(
        self,
        app: Optional[str] = None,
        from_ref: Optional[str] = None,
        to_ref: Optional[str] = None,
        format: Optional[str] = None,
        output: Optional[str] = None,
    ) -> Union[ChangelogResult, str]:
        """
        Generate a changelog.

        Returns:
            ChangelogResult for JSON output, the raw text otherwise
        """
        args = ["changelog"]
        if app:
            args += ["--app", app]
        if from_ref:
            args += ["--from", from_ref]
        if to_ref:
            args += ["--to", to_ref]
        if format:
            args += ["--format", format]
        if output:
            args += ["--output", output]

        text = self.execute(args)
        if format in (None, "json"):
            try:
                return parse_forge_output(ChangelogResult, text)
            except ForgeOutputError:
                return text
        return text
