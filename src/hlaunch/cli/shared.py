"""Shared CLI helpers."""

import logging
import sys

LOG_FORMAT = "%(name)s %(levelname)s: %(message)s"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
    )


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
