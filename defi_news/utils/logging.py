"""
Simplified logging for defi-news-mcp
"""

import logging


_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)7s %(name)s : %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "defi-news", level: str = "INFO") -> logging.Logger:
    """
    Get a logger instance for defi-news-mcp

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        # stderr only, stdout belongs to the stdio MCP transport
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        logger.addHandler(console_handler)

        logger.propagate = False

    return logger


def set_level(level: str) -> None:
    """Apply a level to every logger already created through get_logger."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and name.startswith("defi-news"):
            logger.setLevel(resolved)
