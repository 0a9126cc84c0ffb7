"""Run the git binary for clone and checkout, capturing its exit status and stderr."""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from git import Git
from git.exc import GitCommandNotFound

from gclone.errors import FailedGitCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitResult:
    """Outcome of a single git invocation."""

    status: int
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.status == 0


class GitRunner:
    """
    Thin wrapper over GitPython's command layer.

    GitPython's `Git.execute` spawns the real `git` executable, so the clone
    uses the user's ssh setup and git configuration untouched. Failures are
    reported through GitResult rather than raised; only a git that cannot be
    launched at all raises FailedGitCommand.
    """

    def _execute(
        self, command: List[str], working_dir: Union[str, Path]
    ) -> GitResult:
        name = command[1]
        logger.debug(f"Running `{' '.join(command)}` in {working_dir}")
        try:
            status, _stdout, stderr = Git(str(working_dir)).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except (GitCommandNotFound, OSError) as e:
            raise FailedGitCommand(name, e) from e
        return GitResult(status=status, stderr=stderr)

    def clone(self, url: str, target: Path, cwd: Optional[Path] = None) -> GitResult:
        """`git clone <url> <target>`, run from the system temp directory by default."""
        working_dir = cwd if cwd is not None else Path(tempfile.gettempdir())
        return self._execute(["git", "clone", url, str(target)], working_dir)

    def checkout(self, branch: str, cwd: Path) -> GitResult:
        """`git checkout <branch>` inside the cloned repository."""
        return self._execute(["git", "checkout", branch], cwd)
