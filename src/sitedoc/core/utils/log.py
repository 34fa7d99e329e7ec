"""Logging configuration for the CLI"""

import logging
import sys


def setup_logging(log_level: str = "INFO") -> None:
    """Configure root logging to stderr at the given level."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logging.getLogger("markdown_it").setLevel(logging.WARNING)
