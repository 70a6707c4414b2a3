#!/usr/bin/env python3
"""Platform connection configuration"""
import os
from dataclasses import dataclass, field
from typing import Optional


def _bool(val: str) -> bool:
    return val.lower() in ("true", "1", "yes")


def _float(val: str) -> Optional[float]:
    try:
        return float(val) if val else None
    except ValueError:
        return None


@dataclass
class ClientConfig:
    """Connection settings for Client.from_env"""
    domain: str = ""
    port: str = "443"
    insecure: bool = False
    pat: str = field(default="", repr=False)
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> 'ClientConfig':
        """Load client config from environment variables"""
        return cls(
            domain=os.getenv("ZITADEL_DOMAIN", ""),
            port=os.getenv("ZITADEL_PORT", "443"),
            insecure=_bool(os.getenv("ZITADEL_INSECURE", "false")),
            pat=os.getenv("ZITADEL_PAT", ""),
            timeout=_float(os.getenv("ZITADEL_TIMEOUT", "")),
        )

