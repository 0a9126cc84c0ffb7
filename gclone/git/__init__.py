"""
Git operations for gclone.

Repositories are laid out Go-style under a base directory:

    {base_dir}/
    ├── github.com/
    │   └── user/
    │       └── repo/            # full clone
    └── gitlab.com/
        └── org/
            └── project/

Resolution (resolver.py) turns a user reference into host/org/project,
cloning (clone.py) prepares the target directory and drives git through
the runner (runner.py).
"""

from .clone import CloneOutcome, Cloner, clone_repository, target_path_for
from .resolver import (
    SUPPORTED_HOSTS,
    parse_http_reference,
    parse_shorthand_reference,
    parse_ssh_reference,
    resolve,
)
from .runner import GitResult, GitRunner

__all__ = [
    "CloneOutcome",
    "Cloner",
    "clone_repository",
    "target_path_for",
    "SUPPORTED_HOSTS",
    "parse_http_reference",
    "parse_shorthand_reference",
    "parse_ssh_reference",
    "resolve",
    "GitResult",
    "GitRunner",
]
