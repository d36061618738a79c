"""Root logger setup for the command line entry point."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Send ethfetcher records to stderr as ``time level [logger] message`` lines.

    Only the first call takes effect unless ``force`` is set, which replaces
    whatever handlers an earlier call installed.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
