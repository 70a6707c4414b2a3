#!/usr/bin/env python3
"""
Dial options and channel opening

A dial option is one transport setting. Options are applied in order to a
fresh settings object right before the channel is opened:

- credentials, compression and blocking are single values, the last one wins
- channel arguments and interceptors accumulate in order
"""

import logging
from typing import Callable, List, Optional, Sequence

import grpc

from .credentials import TokenCredentials, TransportSecurity
from .errors import TransportSecurityError
from .interceptors import AuthMetadataInterceptor

logger = logging.getLogger(__name__)


class _DialSettings:
    """Accumulated transport settings for one dial"""

    def __init__(self):
        self.security: Optional[TransportSecurity] = None
        self.call_credentials: Optional[TokenCredentials] = None
        self.channel_options: List[tuple] = []
        self.interceptors: List = []
        self.compression: Optional[grpc.Compression] = None
        self.block = False


class DialOption:
    """A named transport setting"""

    def __init__(self, name: str, apply: Callable[[_DialSettings], None]):
        self.name = name
        self._apply = apply

    def apply(self, settings: _DialSettings):
        self._apply(settings)

    def __repr__(self):
        return f"DialOption({self.name})"


def with_transport_credentials(security: TransportSecurity) -> DialOption:
    def apply(settings: _DialSettings):
        settings.security = security
    return DialOption("transport_credentials", apply)


def with_per_call_credentials(provider: TokenCredentials) -> DialOption:
    def apply(settings: _DialSettings):
        settings.call_credentials = provider
    return DialOption("per_call_credentials", apply)


def with_channel_option(name: str, value) -> DialOption:
    """Raw gRPC channel argument, e.g. ('grpc.keepalive_time_ms', 30000)"""
    def apply(settings: _DialSettings):
        settings.channel_options.append((name, value))
    return DialOption(f"channel_option:{name}", apply)


def with_interceptors(*interceptors) -> DialOption:
    """Client interceptors, run after the authorization interceptor"""
    def apply(settings: _DialSettings):
        settings.interceptors.extend(interceptors)
    return DialOption("interceptors", apply)


def with_compression(algorithm: grpc.Compression) -> DialOption:
    def apply(settings: _DialSettings):
        settings.compression = algorithm
    return DialOption("compression", apply)


def with_user_agent(agent: str) -> DialOption:
    return with_channel_option("grpc.primary_user_agent", agent)


def with_block() -> DialOption:
    """Wait for the channel to become ready before the dial returns"""
    def apply(settings: _DialSettings):
        settings.block = True
    return DialOption("block", apply)


def dial_options(security: TransportSecurity, provider: TokenCredentials,
                 extra: Sequence[DialOption] = ()) -> List[DialOption]:
    """Mandatory credential settings first, caller options after them"""
    options = [
        with_transport_credentials(security),
        with_per_call_credentials(provider),
    ]
    options.extend(extra)
    return options


def dial(host: str, options: Sequence[DialOption], timeout: Optional[float] = None) -> grpc.Channel:
    """
    Open a channel to host

    Args:
        host: Target as host:port
        options: Dial options, applied in order
        timeout: Seconds to wait for readiness when with_block() is set

    Returns:
        grpc.Channel

    Raises:
        TransportSecurityError: Missing transport credentials, or a provider that
            requires transport security on a plaintext channel
        grpc.FutureTimeoutError: Channel not ready within timeout (with_block only)
    """
    settings = _DialSettings()
    for option in options:
        option.apply(settings)

    security = settings.security
    if security is None:
        raise TransportSecurityError("no transport credentials configured")

    provider = settings.call_credentials
    channel_options = list(settings.channel_options)
    interceptors = []

    if security.is_secure:
        credentials = security.channel_credentials
        if provider is not None:
            credentials = grpc.composite_channel_credentials(
                credentials, grpc.metadata_call_credentials(provider, name="authorization"))
        channel = grpc.secure_channel(host, credentials, options=channel_options,
                                      compression=settings.compression)
    else:
        if provider is not None and provider.requires_transport_security():
            raise TransportSecurityError(
                f"credentials for {host} require transport security but the channel is plaintext")
        channel = grpc.insecure_channel(host, options=channel_options,
                                        compression=settings.compression)
        if provider is not None:
            interceptors.append(AuthMetadataInterceptor(provider))

    interceptors.extend(settings.interceptors)
    logger.debug(
        f"Dialing {host} (secure={security.is_secure}, channel_options={len(channel_options)}, "
        f"interceptors={len(interceptors)}, block={settings.block})"
    )

    if settings.block:
        try:
            grpc.channel_ready_future(channel).result(timeout=timeout)
        except grpc.FutureTimeoutError:
            channel.close()
            logger.error(f"Channel to {host} not ready within {timeout}s")
            raise

    if interceptors:
        channel = grpc.intercept_channel(channel, *interceptors)
    return channel


__all__ = [
    "DialOption",
    "with_transport_credentials",
    "with_per_call_credentials",
    "with_channel_option",
    "with_interceptors",
    "with_compression",
    "with_user_agent",
    "with_block",
    "dial_options",
    "dial",
]
