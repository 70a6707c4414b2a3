#!/usr/bin/env python3
"""
Credentials

Per-call authorization and transport security for the shared gRPC channel.

TokenCredentials is attached to every outbound call. It asks the configured
token source for the current token on each call and holds no per-call state,
so one instance is safely shared by all stubs and threads. Caching and refresh
are the token source's business.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Protocol, runtime_checkable

import grpc

from .errors import TransportSecurityError

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "authorization"
BEARER = "Bearer"

PEM_CERTIFICATE_MARKER = b"-----BEGIN CERTIFICATE-----"


@dataclass(frozen=True)
class Token:
    """Bearer credential issued by a token source"""
    access_token: str
    token_type: str = BEARER
    expiry: Optional[datetime] = None

    def authorization_value(self) -> str:
        return f"{self.token_type or BEARER} {self.access_token}"


@runtime_checkable
class TokenSource(Protocol):
    """
    Produces a currently valid token on demand.

    Implementations must be safe to call from several threads at once.
    """

    def token(self) -> Token:
        ...


class StaticTokenSource:
    """Token source that always returns the same token"""

    def __init__(self, token: Token):
        self._token = token

    def token(self) -> Token:
        return self._token


# (origin, remaining timeout in seconds or None) -> TokenSource
TokenSourceInitializer = Callable[[str, Optional[float]], TokenSource]


def pat(token: str) -> TokenSourceInitializer:
    """
    Authenticate with a personal access token

    Args:
        token: Pre-issued access token of a service user

    Returns:
        Initializer for Client.new(..., with_auth(pat(token)))
    """
    def initialize(origin: str, timeout: Optional[float] = None) -> TokenSource:
        if not token:
            raise ValueError("personal access token must not be empty")
        logger.debug(f"Using personal access token for {origin}")
        return StaticTokenSource(Token(access_token=token, token_type=BEARER))
    return initialize


class TokenCredentials(grpc.AuthMetadataPlugin):
    """Credential provider attaching the authorization header to every call"""

    def __init__(self, tls: bool, token_source: Optional[TokenSource] = None):
        self._tls = tls
        self._token_source = token_source

    @property
    def token_source(self) -> Optional[TokenSource]:
        return self._token_source

    def get_request_metadata(self, context=None, request_info=None) -> Dict[str, str]:
        """
        Metadata for one outbound call

        Returns:
            Empty dict without a token source, otherwise the authorization header.
            Errors of the token source propagate unchanged.
        """
        if self._token_source is None:
            return {}
        token = self._token_source.token()
        return {AUTHORIZATION_HEADER: token.authorization_value()}

    def requires_transport_security(self) -> bool:
        """Whether the metadata may only be sent over an encrypted channel"""
        return self._tls

    def __call__(self, context, callback):
        try:
            metadata = self.get_request_metadata(context)
        except Exception as e:
            logger.debug(f"Failed to obtain request metadata for {getattr(context, 'method_name', None)}: {e}")
            callback(None, e)
            return
        callback(tuple(metadata.items()), None)


@dataclass(frozen=True)
class TransportSecurity:
    """Resolved transport security, channel_credentials is None for plaintext"""
    channel_credentials: Optional[grpc.ChannelCredentials] = None

    @property
    def is_secure(self) -> bool:
        return self.channel_credentials is not None


def transport_credentials(domain: str, tls: bool,
                          root_certificates: Optional[bytes] = None) -> TransportSecurity:
    """
    Build transport security for a domain

    Args:
        domain: Server domain, the certificate is verified against the dial target domain:port
        tls: False gives a plaintext connection
        root_certificates: PEM bundle, defaults to the roots bundled with gRPC

    Returns:
        TransportSecurity

    Raises:
        TransportSecurityError: Empty domain or malformed certificate bundle
    """
    if not tls:
        return TransportSecurity()

    if not domain:
        raise TransportSecurityError("TLS requires a server domain")
    if root_certificates is not None and PEM_CERTIFICATE_MARKER not in root_certificates:
        raise TransportSecurityError("root certificate bundle contains no PEM certificate")

    return TransportSecurity(
        channel_credentials=grpc.ssl_channel_credentials(root_certificates=root_certificates),
    )


__all__ = [
    "AUTHORIZATION_HEADER",
    "Token",
    "TokenSource",
    "StaticTokenSource",
    "TokenSourceInitializer",
    "pat",
    "TokenCredentials",
    "TransportSecurity",
    "transport_credentials",
]
