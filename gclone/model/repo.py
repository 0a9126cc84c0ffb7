# Data model for a resolved repository reference

from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict, field_validator

GIT_SUFFIX = ".git"


def strip_git_suffix(name: str) -> str:
    """Drop trailing `.git` suffixes from a project name."""
    while name.endswith(GIT_SUFFIX):
        name = name[: -len(GIT_SUFFIX)]
    return name


def is_valid_segment(name: str) -> bool:
    """A single, non-empty path component that stays where it is joined."""
    name = name.strip()
    if not name or name in (".", ".."):
        return False
    return "/" not in name and "\\" not in name


def validate_non_empty_string(v: str) -> str:
    """Validate that a string is not empty."""
    if not v or not v.strip():
        raise ValueError("must be a non-empty string")
    return v


def validate_path_segment(v: str) -> str:
    """Validate a host, organization or project used as a directory name."""
    v = validate_non_empty_string(v)
    if not is_valid_segment(v):
        raise ValueError(f"'{v}' is not a valid path segment")
    return v


class RepositoryReference(BaseModel):
    """A repository identified by host, organization and project.

    Produced by the resolver, consumed once by the cloner to build the
    target path and the clone URL.
    """

    model_config = ConfigDict(frozen=True)

    host: str
    organization: str
    project: str

    @field_validator("host", "organization")
    @classmethod
    def validate_segment(cls, v: str) -> str:
        return validate_path_segment(v)

    @field_validator("project")
    @classmethod
    def validate_project(cls, v: str) -> str:
        v = validate_path_segment(v)
        if v.endswith(GIT_SUFFIX):
            raise ValueError("project must not carry a .git suffix")
        return v

    @property
    def clone_url(self) -> str:
        """SSH clone URL, whatever form the reference was given in."""
        return f"git@{self.host}:{self.organization}/{self.project}.git"

    @property
    def path(self) -> PurePosixPath:
        """Go-style relative location, e.g. github.com/user/repo"""
        return PurePosixPath(self.host, self.organization, self.project)

    def __str__(self) -> str:
        return f"{self.organization}/{self.project}"
