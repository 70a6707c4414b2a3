#!/usr/bin/env python3
"""
Platform gRPC Client

One authenticated connection exposing a typed stub per platform service.

Usage:
    from zitadel_client import Client, Endpoint, pat, with_auth

    endpoint = Endpoint.new("example.zitadel.cloud")
    with Client.new(endpoint, with_auth(pat("my-token"))) as client:
        client.management_service.GetMyOrg(request)
"""

from .client import (
    Client,
    ClientOptions,
    Option,
    SERVICES,
    ServiceDescriptor,
    with_auth,
    with_extra_transport_options,
    with_grpc_dial_options,
)
from .credentials import (
    StaticTokenSource,
    Token,
    TokenCredentials,
    TokenSource,
    TokenSourceInitializer,
    TransportSecurity,
    pat,
    transport_credentials,
)
from .dial import (
    DialOption,
    with_block,
    with_channel_option,
    with_compression,
    with_interceptors,
    with_user_agent,
)
from .endpoint import Endpoint, with_insecure, with_port
from .errors import InvalidEndpointError, TransportSecurityError, ZitadelClientError

__all__ = [
    'Client',
    'ClientOptions',
    'Option',
    'SERVICES',
    'ServiceDescriptor',
    'with_auth',
    'with_grpc_dial_options',
    'with_extra_transport_options',
    'Endpoint',
    'with_insecure',
    'with_port',
    'Token',
    'TokenSource',
    'TokenSourceInitializer',
    'StaticTokenSource',
    'TokenCredentials',
    'TransportSecurity',
    'pat',
    'transport_credentials',
    'DialOption',
    'with_block',
    'with_channel_option',
    'with_compression',
    'with_interceptors',
    'with_user_agent',
    'ZitadelClientError',
    'InvalidEndpointError',
    'TransportSecurityError',
]

__version__ = "0.1.0"
