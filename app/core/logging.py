"""
Logging setup for the API process.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at application start-up."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # SQL echo is controlled by DEBUG on the engine, keep the driver quiet
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
