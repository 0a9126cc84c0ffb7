"""gclone CLI"""

import sys

import click

from gclone import __version__
from gclone.config import load_settings
from gclone.errors import GCloneError
from gclone.git.clone import Cloner, always_confirm
from gclone.git.resolver import resolve
from gclone.git.runner import GitRunner
from gclone.cli.prompt import confirm_overwrite
from gclone.cli.utils.logging import logger

from .debug import add_debug_option

USAGE = "Usage: gclone <repository-url> [-b <branch>]"


class GCloneCommand(click.Command):
    """Command whose usage errors exit with status 1, like every other failure."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(name="gclone", cls=GCloneCommand)
@click.version_option(__version__, prog_name="gclone")
@click.argument("reference", required=False)
@click.option(
    "-b",
    "--branch",
    help="Set the branch to checkout after cloning.",
    type=str,
    default=None,
)
@click.option(
    "-y",
    "--yes",
    help="Replace an existing clone without asking.",
    is_flag=True,
    default=False,
)
def cli(reference, branch, yes):
    """
    Clone a repository into {base}/src/{host}/{org}/{project} and print its path.

    REFERENCE is an SSH reference (git@github.com:org/project.git), an HTTP(S)
    URL (https://github.com/org/project/...) or a bare org/project.
    The base directory is taken from $GC_DOWNLOAD_PATH or $GOPATH.

    Example:

      cd $(gclone org/project)
    """
    try:
        settings = load_settings()
    except GCloneError as e:
        log_error_and_quit(logger, e)
        return

    if not reference:
        click.echo(USAGE, err=True)
        return

    try:
        repository = resolve(
            reference,
            allowed_hosts=settings.allowed_hosts,
            default_host=settings.default_host,
        )
        logger.debug(
            f"Resolved {reference} to {repository.host}/{repository.organization}/{repository.project}"
        )

        cloner = Cloner(
            settings.base_dir,
            git=GitRunner(),
            confirm=always_confirm if yes else confirm_overwrite,
        )
        outcome = cloner.run(repository, branch=branch)
    except GCloneError as e:
        log_error_and_quit(logger, e)
        return

    if outcome is None:
        logger.debug("aborting")
        return

    click.echo(str(outcome.target_path))


def log_error_and_quit(logger, error):
    logger.error(f"Error: {error}")
    sys.exit(1)


add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
