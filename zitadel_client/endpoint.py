#!/usr/bin/env python3
"""
Target Endpoint

Identifies the platform instance a client talks to: domain, external port and
whether the connection is TLS protected.

Example:
    endpoint = Endpoint.new("example.zitadel.cloud")
    local = Endpoint.new("localhost", with_insecure("8080"))
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from .errors import InvalidEndpointError

DEFAULT_TLS_PORT = "443"
DEFAULT_PLAIN_PORT = "80"

EndpointOption = Callable[["Endpoint"], "Endpoint"]


@dataclass(frozen=True)
class Endpoint:
    """Immutable description of a platform instance"""
    domain: str
    port: str = DEFAULT_TLS_PORT
    tls: bool = True

    def __post_init__(self):
        object.__setattr__(self, "port", str(self.port))
        _validate_domain(self.domain)
        _validate_port(self.port)

    @classmethod
    def new(cls, domain: str, *options: EndpointOption) -> "Endpoint":
        """
        Create an endpoint, applying options in order

        Args:
            domain: Hostname of the instance, without scheme or path
            options: Endpoint options such as with_insecure or with_port

        Returns:
            Endpoint
        """
        endpoint = cls(domain=domain)
        for option in options:
            endpoint = option(endpoint)
        return endpoint

    @classmethod
    def from_env(cls, config=None) -> "Endpoint":
        """Build an endpoint from ZITADEL_* settings"""
        from .config import get_settings

        config = config or get_settings()
        if not config.domain:
            raise InvalidEndpointError("ZITADEL_DOMAIN is not set")
        if config.insecure:
            return cls.new(config.domain, with_insecure(config.port))
        return cls.new(config.domain, with_port(config.port))

    @property
    def host(self) -> str:
        """Dial target, always domain:port"""
        return f"{self.domain}:{self.port}"

    @property
    def origin(self) -> str:
        """Externally visible origin, the default port for the scheme is omitted"""
        scheme = "https" if self.tls else "http"
        default_port = DEFAULT_TLS_PORT if self.tls else DEFAULT_PLAIN_PORT
        if self.port == default_port:
            return f"{scheme}://{self.domain}"
        return f"{scheme}://{self.domain}:{self.port}"

    @property
    def is_tls(self) -> bool:
        return self.tls


def with_insecure(port: str) -> EndpointOption:
    """Plaintext connection on the given port (local development only)"""
    def apply(endpoint: Endpoint) -> Endpoint:
        return replace(endpoint, port=str(port), tls=False)
    return apply


def with_port(port: str) -> EndpointOption:
    """Override the external port, TLS setting is kept"""
    def apply(endpoint: Endpoint) -> Endpoint:
        return replace(endpoint, port=str(port))
    return apply


def _validate_domain(domain: Optional[str]):
    if not domain:
        raise InvalidEndpointError("domain must not be empty")
    if "://" in domain or "/" in domain:
        raise InvalidEndpointError(f"domain must be a bare hostname, got {domain!r}")


def _validate_port(port: str):
    if not port or not str(port).isdigit() or not 0 < int(port) < 65536:
        raise InvalidEndpointError(f"invalid port {port!r}")


__all__ = ["Endpoint", "EndpointOption", "with_insecure", "with_port"]
