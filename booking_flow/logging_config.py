"""Logging setup for booking flow runs."""

import logging
import sys

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO"):
    """Configure logging for the booking flow driver.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    if hasattr(configure_logging, "has_run"):
        return

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    # Client names carry accents
    if hasattr(handler.stream, "reconfigure"):
        try:
            handler.stream.reconfigure(encoding="utf-8", errors="replace")
        except (AttributeError, ValueError):
            pass

    logging.basicConfig(
        level=numeric_level,
        force=True,
        handlers=[handler],
    )

    configure_logging.has_run = True
    logger.info(f"Logging configured at level: {log_level}")
