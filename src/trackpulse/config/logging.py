"""Logging setup for the ``trackpulse`` command."""

from __future__ import annotations

import logging

CLI_FORMAT = "%(message)s"
DEBUG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Route log records to stderr; command output is logged at INFO.

    Below INFO the logger name and timestamp are shown as well.
    """

    logging.basicConfig(
        level=level,
        format=DEBUG_FORMAT if level < logging.INFO else CLI_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )
