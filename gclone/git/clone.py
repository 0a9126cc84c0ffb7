import logging
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from gclone.errors import (
    CantCreateTargetDir,
    CantDeleteTargetDir,
    FailedGitOperation,
    TargetOutsideBaseDir,
)
from gclone.git.runner import GitRunner
from gclone.model.repo import RepositoryReference

logger = logging.getLogger(__name__)

Confirm = Callable[[], bool]


def always_confirm() -> bool:
    return True


@dataclass(frozen=True)
class CloneOutcome:
    target_path: Path
    branch: Optional[str] = None


def target_path_for(reference: RepositoryReference, base_dir: Path) -> Path:
    """
    Location of a repository under the base directory.

    Examples:
        (github.com, user, repo), ~/go/src -> ~/go/src/github.com/user/repo

    Raises:
        TargetOutsideBaseDir: the segments do not name a directory exactly
            three levels below `base_dir`
    """
    base_dir = Path(base_dir)
    target = base_dir / reference.host / reference.organization / reference.project

    # lexical check, before anything below base_dir is created or removed
    relative = os.path.relpath(os.path.normpath(target), os.path.normpath(base_dir))
    parts = Path(relative).parts
    if len(parts) != 3 or os.pardir in parts:
        raise TargetOutsideBaseDir(target, base_dir)
    return target


def _create_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CantCreateTargetDir(path, e) from e


def _delete_dir(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except OSError as e:
        raise CantDeleteTargetDir(path, e) from e


class Cloner:
    """
    Clone resolved repositories into `{base_dir}/{host}/{org}/{project}`.

    An existing target directory is only removed after `confirm` returns
    True. Every repository is cloned over SSH, whatever form the reference
    was originally given in. Git failures are terminal; nothing is retried.

    Args:
        base_dir: Directory that holds the host directories. Must already exist.
        git: Runner used for clone and checkout (defaults to GitRunner())
        confirm: Called before an existing target is deleted. Returning
            False aborts the run without touching the filesystem.
    """

    def __init__(
        self,
        base_dir: Path,
        git: Optional[GitRunner] = None,
        confirm: Optional[Confirm] = None,
    ):
        self.base_dir = Path(base_dir)
        self.git = git if git is not None else GitRunner()
        self.confirm = confirm if confirm is not None else always_confirm

    def prepare_target(self, target: Path) -> bool:
        """
        Make `target` an empty directory.

        Returns:
            False if the target exists and the overwrite was declined
        """
        if not target.exists():
            logger.info("Destination directory does not exist. Creating...")
            _create_dir(target)
            return True

        if not self.confirm():
            logger.info(f"Keeping existing directory {target}")
            return False

        logger.debug(f"Removing existing directory {target}")
        _delete_dir(target)
        _create_dir(target)
        return True

    def run(
        self, reference: RepositoryReference, branch: Optional[str] = None
    ) -> Optional[CloneOutcome]:
        """
        Clone `reference` and optionally check out `branch`.

        Returns:
            CloneOutcome on success, None when the overwrite was declined

        Raises:
            FilesystemError: target directory could not be deleted or created
            GitError: git could not be launched or returned a failure
        """
        target = target_path_for(reference, self.base_dir)
        branch = branch or None

        if not self.prepare_target(target):
            return None

        logger.info(f"Cloning {reference}...")
        result = self.git.clone(
            reference.clone_url, target, cwd=Path(tempfile.gettempdir())
        )
        if not result.success:
            raise FailedGitOperation("clone", result.stderr)
        logger.info(f"Successfully cloned {reference} into {target}")

        if branch:
            logger.info(f"Checking out branch {branch}...")
            result = self.git.checkout(branch, target)
            if not result.success:
                raise FailedGitOperation("checkout", result.stderr)
            logger.info(f"Successfully checked out branch {branch}")

        return CloneOutcome(target_path=target, branch=branch)


def clone_repository(
    reference: RepositoryReference,
    base_dir: Path,
    branch: Optional[str] = None,
    confirm: Optional[Confirm] = None,
    git: Optional[GitRunner] = None,
) -> Optional[CloneOutcome]:
    """Clone `reference` under `base_dir`; see Cloner.run."""
    return Cloner(base_dir, git=git, confirm=confirm).run(reference, branch)
