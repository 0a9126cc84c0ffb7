import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from gclone.git.runner import GitResult


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("gclone")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


class FakeGitRunner:
    """
    Records git invocations instead of spawning processes.

    A successful clone creates a marker file in the target so tests can tell
    a fresh clone from leftovers of a previous one.
    """

    def __init__(
        self,
        clone_result: Optional[GitResult] = None,
        checkout_result: Optional[GitResult] = None,
    ):
        self.clone_result = clone_result or GitResult(status=0)
        self.checkout_result = checkout_result or GitResult(status=0)
        self.calls: List[Tuple[str, ...]] = []

    def clone(self, url: str, target: Path, cwd: Optional[Path] = None) -> GitResult:
        self.calls.append(("clone", url, str(target), str(cwd)))
        if self.clone_result.success:
            (Path(target) / "CLONED").write_text(url)
        return self.clone_result

    def checkout(self, branch: str, cwd: Path) -> GitResult:
        self.calls.append(("checkout", branch, str(cwd)))
        return self.checkout_result


@pytest.fixture
def fake_git():
    return FakeGitRunner()


@pytest.fixture
def download_path(tmp_path) -> Path:
    """A GOPATH-style workspace with its src/ directory in place."""
    workspace = tmp_path / "workspace"
    (workspace / "src").mkdir(parents=True)
    return workspace


@pytest.fixture
def base_dir(download_path) -> Path:
    return (download_path / "src").resolve()


@pytest.fixture
def fake_git_factory():
    return FakeGitRunner
