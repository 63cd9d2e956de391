"""Logging setup for the command line tool.

Library modules only create loggers; handlers are installed here, once,
by the CLI. Logs go to stderr so stdout stays clean for plan JSON.
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """Install a RichHandler on the root logger at the given level."""
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


@contextmanager
def timed_operation(name: str) -> Iterator[None]:
    """Log start and completion (with duration_ms) of an operation."""
    start = time.perf_counter()
    logger.info("Starting operation %s", name)
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info("Operation %s completed in %.1f ms", name, duration_ms)
