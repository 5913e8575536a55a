"""
Exception classes for forgegraph.
"""

from typing import List, Optional


class ForgeError(Exception):
    """Base exception for all forgegraph errors."""

    pass


class ForgeNotInstalledError(ForgeError):
    """Raised when the forge executable cannot be found."""

    def __init__(self, executable: str = "forge"):
        self.executable = executable
        super().__init__(
            f"Forge CLI ('{executable}') is not installed or not on PATH. "
            "Install it with: go install github.com/alexjoedt/forge@latest"
        )


class ForgeCommandError(ForgeError):
    """Raised when a forge or git invocation exits with a non-zero status."""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        message = f"Command '{' '.join(command)}' failed with exit code {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class ForgeOutputError(ForgeError):
    """Raised when forge output cannot be parsed into the expected structure."""

    def __init__(self, message: str, output: Optional[str] = None):
        self.output = output
        super().__init__(message)


class ConfigError(ForgeError):
    """Raised when forge.yaml is missing, unreadable or structurally invalid."""

    pass


class GitError(ForgeError):
    """Raised when the working directory is not usable as a git repository."""

    pass
