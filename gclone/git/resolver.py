"""
Resolve repository references into (host, organization, project).

Three input forms are accepted, tried in this order:

    git@github.com:user/repo.git                 SSH-style, any host
    https://github.com/user/repo/issues/42       HTTP(S) URL, allowed hosts only
    github.com/user/repo                         HTTP URL without a scheme
    user/repo                                    shorthand, on the default host

SSH references are recognized first: they are the only form containing both
`@` and `:`, while every form may contain `/`.
"""

import logging
import re
from typing import Optional, Sequence

from pydantic import ValidationError

from gclone.errors import (
    CantFindProjectAndName,
    CantParseColon,
    InvalidShorthand,
    NotRecognized,
    NotSSH,
    UnparseableURL,
    UnsupportedHost,
)
from gclone.model.repo import RepositoryReference, is_valid_segment, strip_git_suffix

logger = logging.getLogger(__name__)

SUPPORTED_HOSTS = ("github.com",)

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

# host, organization, project, then anything; scheme already removed
_HTTP_RE = re.compile(
    r"^"
    r"(?P<host>[^/?#]+)"
    r"(?:/(?P<organization>[^/?#]*))?"
    r"(?:/(?P<project>[^/?#]*))?"
    r"(?:[/?#].*)?$",
    re.IGNORECASE,
)


def is_ssh_reference(reference: str) -> bool:
    return "@" in reference and ":" in reference


def is_http_reference(reference: str, allowed_hosts: Sequence[str]) -> bool:
    if _SCHEME_RE.match(reference):
        return True
    lowered = reference.lower()
    return any(lowered.startswith(f"{host.lower()}/") for host in allowed_hosts)


def is_shorthand_reference(reference: str) -> bool:
    return reference.count("/") == 1 and "://" not in reference


def _build_reference(
    reference: str, error: type, host: str, organization: str, project: str
) -> RepositoryReference:
    # `.` and `..` would walk out of the download tree once joined as a path
    if not is_valid_segment(organization) or not is_valid_segment(project):
        raise error(reference)
    try:
        return RepositoryReference(
            host=host, organization=organization, project=project
        )
    except ValidationError as e:
        raise error(reference) from e


def parse_ssh_reference(reference: str) -> RepositoryReference:
    """
    Parse an SSH-style reference such as `git@github.com:user/repo.git`.

    The user part is ignored and any host is accepted. The path must be
    exactly `organization/project`; deeper paths are rejected.

    Raises:
        NotSSH: the reference does not contain exactly one `@`
        CantParseColon: the part after `@` is not exactly `host:path`
        CantFindProjectAndName: the path is not exactly `organization/project`
    """
    parts = reference.split("@")
    if len(parts) != 2:
        raise NotSSH(reference)

    parts = parts[1].split(":")
    if len(parts) != 2 or not is_valid_segment(parts[0]):
        raise CantParseColon(reference)
    host, repo_path = parts

    path_parts = repo_path.split("/")
    if len(path_parts) != 2:
        raise CantFindProjectAndName(reference)

    organization, project = path_parts[0], strip_git_suffix(path_parts[1])
    return _build_reference(
        reference, CantFindProjectAndName, host, organization, project
    )


def parse_http_reference(
    reference: str, allowed_hosts: Sequence[str] = SUPPORTED_HOSTS
) -> RepositoryReference:
    """
    Parse an HTTP(S) URL pointing at a repository on an allowed host.

    Anything after the project segment is discarded, so
    `https://github.com/user/repo/security/dependabot` resolves to
    `github.com/user/repo`. The scheme is optional.

    Raises:
        UnsupportedHost: the host is not in `allowed_hosts`
        UnparseableURL: organization or project segment is missing
    """
    match = _HTTP_RE.match(_SCHEME_RE.sub("", reference, count=1))
    if not match:
        raise UnparseableURL(reference)

    host = match.group("host").lower()
    if host not in {h.lower() for h in allowed_hosts}:
        raise UnsupportedHost(reference, host)

    organization = match.group("organization") or ""
    project = strip_git_suffix(match.group("project") or "")
    return _build_reference(reference, UnparseableURL, host, organization, project)


def parse_shorthand_reference(reference: str, default_host: str) -> RepositoryReference:
    """Parse `organization/project`, hosted on `default_host`."""
    parts = reference.split("/")
    if len(parts) != 2:
        raise InvalidShorthand(reference)

    organization, project = parts[0], strip_git_suffix(parts[1])
    return _build_reference(
        reference, InvalidShorthand, default_host, organization, project
    )


def resolve(
    reference: str,
    allowed_hosts: Optional[Sequence[str]] = None,
    default_host: Optional[str] = None,
) -> RepositoryReference:
    """
    Classify a repository reference and extract its identity.

    Args:
        reference: SSH reference, HTTP(S) URL or `organization/project`
        allowed_hosts: hosts accepted for HTTP and shorthand forms
            (defaults to github.com)
        default_host: host used for shorthand references
            (defaults to the first allowed host)

    Returns:
        The resolved RepositoryReference

    Raises:
        ResolutionError: one of its subclasses, naming why the reference
            was rejected
    """
    if allowed_hosts is None:
        allowed_hosts = SUPPORTED_HOSTS
    if default_host is None:
        default_host = allowed_hosts[0]

    if is_ssh_reference(reference):
        logger.debug(f"Resolving '{reference}' as an SSH reference")
        return parse_ssh_reference(reference)

    if is_http_reference(reference, allowed_hosts):
        logger.debug(f"Resolving '{reference}' as an HTTP URL")
        return parse_http_reference(reference, allowed_hosts)

    if is_shorthand_reference(reference):
        logger.debug(f"Resolving '{reference}' as shorthand on {default_host}")
        return parse_shorthand_reference(reference, default_host)

    raise NotRecognized(reference)
