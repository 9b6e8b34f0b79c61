"""
Logging helpers shared across the service.
"""
import logging

from healthassist.config import settings

_configured = False


def configure_logging(level: str = None) -> None:
    """Configure the root logger once from settings."""
    global _configured
    if _configured:
        return
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(name)
