"""Interactive confirmation before an existing clone is deleted"""

import sys

import click

from gclone.errors import FailedCaptureInput

OVERWRITE_PROMPT = (
    "Destination directory already exists. "
    "Press <Enter> to confirm deletion or <Ctrl+C> to cancel..."
)


def confirm_overwrite() -> bool:
    """
    Block until the user presses <Enter>.

    Any line counts as confirmation; cancelling is left to Ctrl+C, which is
    not intercepted. A closed or unreadable stdin is an error.
    """
    click.echo(OVERWRITE_PROMPT, err=True, nl=False)
    try:
        line = sys.stdin.readline()
    except (OSError, ValueError) as e:
        raise FailedCaptureInput(e) from e
    if not line:
        raise FailedCaptureInput(EOFError("standard input was closed"))
    return True
