#!/usr/bin/env python3
"""Configuration for zitadel_client

- client_config: platform domain, port, TLS and personal access token
- logging_config: logging configuration

Values come from the environment. A dotenv file (ZITADEL_ENV_FILE, default
.env) is loaded first without overriding variables that are already set.
"""
import os
from typing import Optional

from dotenv import load_dotenv

from .client_config import ClientConfig
from .logging_config import LoggingConfig, setup_logging

_settings: Optional[ClientConfig] = None


def get_settings() -> ClientConfig:
    """Get global settings instance"""
    if _settings is None:
        return reload_settings()
    return _settings


def reload_settings() -> ClientConfig:
    """Reload settings from environment"""
    global _settings
    load_dotenv(os.getenv("ZITADEL_ENV_FILE", ".env"), override=False)
    _settings = ClientConfig.from_env()
    return _settings


__all__ = [
    'ClientConfig',
    'LoggingConfig',
    'setup_logging',
    'get_settings',
    'reload_settings',
]
