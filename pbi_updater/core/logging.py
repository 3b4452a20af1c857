"""
Logging utilities for the refresher CLI and its services.

Provides a consistent logging format and configuration.
"""

import logging
import sys


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )
    # httpx logs every request at INFO, which drowns the per-dataset report.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.root.level))


__all__ = ["configure_logging"]
