#!/usr/bin/env python3
"""Logging configuration"""
import logging
import os
from dataclasses import dataclass


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: str = ""
    enable_console: bool = True

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=os.getenv("LOG_CONSOLE", "true").lower() == "true",
        )


def setup_logging(config: LoggingConfig = None) -> logging.Logger:
    """
    Configure the zitadel_client logger

    Args:
        config: Logging settings (default: from environment)

    Returns:
        The package logger
    """
    config = config or LoggingConfig.from_env()
    logger = logging.getLogger("zitadel_client")
    logger.setLevel(config.log_level.upper())

    # replace handlers from an earlier call
    for handler in [h for h in logger.handlers if getattr(h, "_zitadel_client", False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.log_format)
    handlers = []
    if config.enable_console:
        handlers.append(logging.StreamHandler())
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler._zitadel_client = True
        logger.addHandler(handler)
    return logger
