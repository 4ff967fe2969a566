"""Process-wide logging setup for the CLI."""

import logging
import sys


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    """Configure logging for CLI usage.

    - Default: INFO
    - ``--verbose``: DEBUG
    - ``--quiet``: WARNING

    Records go to stderr so ``--json`` output on stdout stays parseable.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    fmt = "SmartGuard: %(message)s"
    if verbose:
        fmt = "SmartGuard [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
