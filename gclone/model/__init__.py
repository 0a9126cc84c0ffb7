"""Pydantic models for gclone."""

from gclone.model.repo import RepositoryReference, strip_git_suffix

__all__ = ["RepositoryReference", "strip_git_suffix"]
