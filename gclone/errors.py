"""
Exception classes for gclone.

Every failure is terminal for the current run. The CLI catches GCloneError,
prints it once prefixed with "Error:" and exits with status 1.
"""

from pathlib import Path
from typing import Optional, Sequence


class GCloneError(Exception):
    """Base exception for all gclone errors."""

    pass


# Configuration


class ConfigurationError(GCloneError):
    """Raised when the download location cannot be determined or used."""

    pass


class BaseDirNotFound(ConfigurationError):
    """Raised when no download path is configured."""

    def __init__(self, variables: Sequence[str] = ("GC_DOWNLOAD_PATH", "GOPATH")):
        self.variables = tuple(variables)
        names = " or ".join(f"${v}" for v in self.variables)
        super().__init__(
            "The base directory on which to download the repositories was not found. "
            f"Ensure you have set the {names} environment variable."
        )


class BaseDirCannotBeOpened(ConfigurationError):
    """Raised when the base directory does not exist or cannot be listed."""

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Base directory cannot be opened: {path}: {error}")


class InvalidConfigFile(ConfigurationError):
    """Raised when the config file exists but cannot be parsed."""

    def __init__(self, path: Path, error: Exception):
        self.path = path
        self.error = error
        super().__init__(f"Invalid config file {path}: {error}")


# Resolution


class ResolutionError(GCloneError):
    """Base class for references that cannot be classified or decomposed."""

    reason = "unrecognized reference"

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Invalid repository URL: {self.reason}: {reference}")


class NotSSH(ResolutionError):
    reason = "not SSH"


class CantParseColon(ResolutionError):
    reason = "cannot parse colon separator"


class CantFindProjectAndName(ResolutionError):
    reason = "cannot find project and name"


class InvalidShorthand(CantFindProjectAndName):
    reason = "cannot find project and name in shorthand"


class UnsupportedHost(ResolutionError):
    reason = "unsupported HTTP host"

    def __init__(self, reference: str, host: str):
        self.host = host
        super().__init__(reference)


class UnparseableURL(ResolutionError):
    reason = "unparseable HTTP URL"


class NotRecognized(ResolutionError):
    reason = "not a recognized SSH, HTTP or org/project reference"


# Filesystem


class FilesystemError(GCloneError):
    """Raised when the target directory cannot be prepared."""

    action = "prepare"

    def __init__(self, path: Path, error: Exception):
        self.path = path
        self.error = error
        super().__init__(f"Cannot {self.action} target directory {path}: {error}")


class CantCreateTargetDir(FilesystemError):
    action = "create"


class CantDeleteTargetDir(FilesystemError):
    action = "delete"


class TargetOutsideBaseDir(FilesystemError):
    """Raised when a target is not a host/org/project directory under the base."""

    action = "place"

    def __init__(self, path: Path, base_dir: Path):
        self.base_dir = base_dir
        super().__init__(path, ValueError(f"not inside base directory {base_dir}"))


# External git process


class GitError(GCloneError):
    """Base class for failures of the external git process."""

    pass


class FailedGitCommand(GitError):
    """Raised when git could not be launched at all."""

    def __init__(self, command: str, error: Exception):
        self.command = command
        self.error = error
        super().__init__(f"Failed to run the git {command} command: {error}")


class FailedGitOperation(GitError):
    """Raised when git ran but exited with a failure status."""

    def __init__(self, command: str, stderr: Optional[str] = None):
        self.command = command
        self.stderr = (stderr or "").strip()
        message = f"git {command} failed"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


# Interactive input


class FailedCaptureInput(GCloneError):
    """Raised when the confirmation line cannot be read."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Failed to capture prompt: {error}")
