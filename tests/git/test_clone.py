"""Tests for cloning into the Go-style directory tree."""

import tempfile
from pathlib import Path

import pytest

from gclone.errors import (
    CantCreateTargetDir,
    CantDeleteTargetDir,
    FailedGitOperation,
    TargetOutsideBaseDir,
)
from gclone.git.clone import CloneOutcome, Cloner, clone_repository, target_path_for
from gclone.git.runner import GitResult
from gclone.model.repo import RepositoryReference

REFERENCE = RepositoryReference(
    host="github.com", organization="example", project="application"
)


def declined():
    return False


class ConfirmSpy:
    def __init__(self, answer=True):
        self.answer = answer
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.answer


class TestTargetPath:
    @pytest.mark.short
    def test_layout(self, tmp_path):
        assert (
            target_path_for(REFERENCE, tmp_path)
            == tmp_path / "github.com" / "example" / "application"
        )

    @pytest.mark.short
    def test_deterministic(self, tmp_path):
        same = RepositoryReference(
            host="github.com", organization="example", project="application"
        )
        assert str(target_path_for(REFERENCE, tmp_path)) == str(
            target_path_for(same, tmp_path)
        )

    @pytest.mark.short
    @pytest.mark.parametrize(
        "segments",
        [
            ("github.com", "..", ".."),
            ("github.com", "example", ".."),
            ("github.com", ".", "application"),
            ("..", "..", "elsewhere"),
        ],
    )
    def test_must_stay_below_base_dir(self, tmp_path, segments):
        # skip validation to reach the path guard itself
        host, organization, project = segments
        reference = RepositoryReference.model_construct(
            host=host, organization=organization, project=project
        )
        with pytest.raises(TargetOutsideBaseDir) as excinfo:
            target_path_for(reference, tmp_path)
        assert excinfo.value.base_dir == tmp_path


class TestClonerFreshTarget:
    @pytest.mark.short
    def test_creates_target_and_clones(self, base_dir, fake_git):
        confirm = ConfirmSpy()
        outcome = Cloner(base_dir, git=fake_git, confirm=confirm).run(REFERENCE)

        target = base_dir / "github.com" / "example" / "application"
        assert outcome == CloneOutcome(target_path=target, branch=None)
        assert (target / "CLONED").exists()
        assert confirm.calls == 0
        assert fake_git.calls == [
            (
                "clone",
                "git@github.com:example/application.git",
                str(target),
                tempfile.gettempdir(),
            )
        ]

    @pytest.mark.short
    def test_checks_out_branch(self, base_dir, fake_git):
        outcome = Cloner(base_dir, git=fake_git).run(REFERENCE, branch="develop")

        target = base_dir / "github.com" / "example" / "application"
        assert outcome.branch == "develop"
        assert fake_git.calls[-1] == ("checkout", "develop", str(target))

    @pytest.mark.short
    def test_no_checkout_without_branch(self, base_dir, fake_git):
        Cloner(base_dir, git=fake_git).run(REFERENCE)
        assert [call[0] for call in fake_git.calls] == ["clone"]

    @pytest.mark.short
    def test_empty_branch_is_no_branch(self, base_dir, fake_git):
        outcome = Cloner(base_dir, git=fake_git).run(REFERENCE, branch="")

        assert outcome.branch is None
        assert [call[0] for call in fake_git.calls] == ["clone"]

    @pytest.mark.short
    def test_clone_url_uses_ssh_for_any_host(self, base_dir, fake_git):
        reference = RepositoryReference(
            host="gitlab.example.org", organization="group", project="tool"
        )
        Cloner(base_dir, git=fake_git).run(reference)
        assert fake_git.calls[0][1] == "git@gitlab.example.org:group/tool.git"

    @pytest.mark.short
    def test_logs_progress(self, base_dir, fake_git, capture_logs):
        Cloner(base_dir, git=fake_git).run(REFERENCE, branch="main")
        output = capture_logs.getvalue()
        assert "Cloning example/application" in output
        assert "Successfully checked out branch main" in output


class TestClonerExistingTarget:
    @pytest.fixture
    def existing(self, base_dir):
        target = base_dir / "github.com" / "example" / "application"
        target.mkdir(parents=True)
        (target / "old.txt").write_text("stale")
        return target

    @pytest.mark.short
    def test_declined_is_a_noop(self, base_dir, existing, fake_git):
        outcome = Cloner(base_dir, git=fake_git, confirm=declined).run(REFERENCE)

        assert outcome is None
        assert (existing / "old.txt").read_text() == "stale"
        assert fake_git.calls == []

    @pytest.mark.short
    def test_confirmed_replaces_directory(self, base_dir, existing, fake_git):
        confirm = ConfirmSpy(True)
        outcome = Cloner(base_dir, git=fake_git, confirm=confirm).run(REFERENCE)

        assert confirm.calls == 1
        assert outcome.target_path == existing
        assert not (existing / "old.txt").exists()
        assert (existing / "CLONED").exists()

    @pytest.mark.short
    def test_default_confirm_replaces_directory(self, base_dir, existing, fake_git):
        clone_repository(REFERENCE, base_dir, git=fake_git)
        assert not (existing / "old.txt").exists()

    @pytest.mark.short
    def test_delete_failure(self, base_dir, existing, fake_git, monkeypatch):
        def fail(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("gclone.git.clone.shutil.rmtree", fail)
        with pytest.raises(CantDeleteTargetDir) as excinfo:
            Cloner(base_dir, git=fake_git).run(REFERENCE)

        assert excinfo.value.path == existing
        assert "Permission denied" in str(excinfo.value)
        assert fake_git.calls == []


class TestClonerFailures:
    @pytest.mark.short
    def test_create_failure(self, tmp_path, fake_git):
        # a file where the host directory should be
        (tmp_path / "github.com").write_text("")
        with pytest.raises(CantCreateTargetDir):
            Cloner(tmp_path, git=fake_git).run(REFERENCE)
        assert fake_git.calls == []

    @pytest.mark.short
    def test_clone_failure_carries_stderr(self, base_dir, fake_git_factory):
        git = fake_git_factory(
            clone_result=GitResult(
                status=128, stderr="Permission denied (publickey)."
            )
        )
        with pytest.raises(FailedGitOperation) as excinfo:
            Cloner(base_dir, git=git).run(REFERENCE, branch="main")

        assert excinfo.value.command == "clone"
        assert "Permission denied (publickey)." in str(excinfo.value)
        # no checkout after a failed clone
        assert [call[0] for call in git.calls] == ["clone"]

    @pytest.mark.short
    def test_checkout_failure(self, base_dir, fake_git_factory):
        git = fake_git_factory(
            checkout_result=GitResult(
                status=1,
                stderr="error: pathspec 'nope' did not match any file(s) known to git",
            )
        )
        with pytest.raises(FailedGitOperation) as excinfo:
            Cloner(base_dir, git=git).run(REFERENCE, branch="nope")

        assert excinfo.value.command == "checkout"
        assert "pathspec 'nope'" in excinfo.value.stderr

    @pytest.mark.short
    def test_failure_without_stderr(self, base_dir, fake_git_factory):
        git = fake_git_factory(clone_result=GitResult(status=1))
        with pytest.raises(FailedGitOperation, match="^git clone failed$"):
            Cloner(base_dir, git=git).run(REFERENCE)


@pytest.mark.short
def test_base_dir_accepts_strings(base_dir, fake_git):
    outcome = Cloner(str(base_dir), git=fake_git).run(REFERENCE)
    assert isinstance(outcome.target_path, Path)
