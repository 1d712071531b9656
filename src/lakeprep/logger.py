import logging
import os

from rich.logging import RichHandler


def setup_logger(name: str = "lakeprep", level: int = logging.ERROR) -> logging.Logger:
    """Configures and returns a logger with RichHandler."""

    logger = logging.getLogger(name)

    # main() calls this again for --verbose; keep a single handler

    if not logger.handlers:
        handler = RichHandler(rich_tracebacks=True, markup=False, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    logger.setLevel(level)
    return logger


def _default_level() -> int:
    # LAKEPREP_LOG_LEVEL=INFO shows skipped resources and fallback attempts
    name = os.environ.get("LAKEPREP_LOG_LEVEL", "ERROR").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.ERROR


# Global logger instance (default to ERROR to reduce noise)
logger = setup_logger(level=_default_level())
