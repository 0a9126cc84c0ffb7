import logging
import sys


logger = logging.getLogger("gclone")


def configure_logging(debug: bool):
    """
    Configures the logging system based on the debug flag.

    Messages go to stderr: stdout only ever carries the cloned path.
    """
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter("%(message)s")
    handler.setFormatter(formatter)

    log_level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(log_level)

    # sys.stderr may have been swapped since the last call (click's test runner)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
