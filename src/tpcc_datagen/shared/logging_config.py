"""Logging configuration for population generation runs."""
import logging
import sys


def configure_logging(level: str = "INFO"):
    """Configure root logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )

    # numpy/pandas emit nothing useful at INFO
    logging.getLogger("numpy").setLevel(logging.WARNING)
    logging.getLogger("pandas").setLevel(logging.WARNING)
