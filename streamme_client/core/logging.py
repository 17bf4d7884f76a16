"""
Logging utilities for the StreamMe OAuth2 client demo.

Provides a consistent logging format for the web app and its outbound calls.
"""

import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging and keep HTTP client chatter at WARNING or above."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    root_level = logging.getLogger().getEffectiveLevel()
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))


__all__ = ["configure_logging"]
