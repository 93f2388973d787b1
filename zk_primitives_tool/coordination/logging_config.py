"""
Logging setup driven by the CLI verbosity count.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import logging
import sys

# Third-party loggers kept quiet unless -vvv is given
_LIBRARY_LOGGERS = ("kazoo", "kazoo.client", "kazoo.protocol.connection")


def setup_logging(verbose_count: int = 0) -> None:
    """
    Configure logging based on verbosity level.

    Args:
        verbose_count: Number of -v flags (0=WARNING, 1=INFO, 2=DEBUG, 3+=DEBUG with kazoo)
    """
    if verbose_count <= 0:
        level = logging.WARNING
    elif verbose_count == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )

    library_level = logging.DEBUG if verbose_count >= 3 else logging.WARNING
    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Module name, usually __name__

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
