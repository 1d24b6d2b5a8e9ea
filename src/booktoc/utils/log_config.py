"""structlog setup for command-line use."""

import logging
import sys

import structlog


def configure_logging(verbose: bool = False) -> None:
    """Send log events to stderr, hiding info/debug unless verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )
