"""Logging setup shared by the server and the app factory."""

import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging to stdout.

    Safe to call more than once; the first call installs the handler and
    later calls only adjust the level.
    """
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
    logging.getLogger().setLevel(level.upper())
