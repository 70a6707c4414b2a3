#!/usr/bin/env python3
"""
Platform Client

One authenticated gRPC channel shared by typed stubs for every platform
service.

Example:
    from zitadel_client import Client, Endpoint, pat, with_auth

    with Client.new(Endpoint.new("example.zitadel.cloud"), with_auth(pat(token))) as client:
        client.user_service_v2.GetUserByID(request)
"""

import importlib
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import grpc

from .credentials import TokenCredentials, TokenSource, TokenSourceInitializer, pat, transport_credentials
from .dial import DialOption, dial, dial_options
from .endpoint import Endpoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceDescriptor:
    """Where the generated stub of one remote service lives"""
    attribute: str
    module: str
    stub: str


# Modules produced by scripts/generate_protos.sh
SERVICES = (
    ServiceDescriptor("system_service", "zitadel.system_pb2_grpc", "SystemServiceStub"),
    ServiceDescriptor("admin_service", "zitadel.admin_pb2_grpc", "AdminServiceStub"),
    ServiceDescriptor("management_service", "zitadel.management_pb2_grpc", "ManagementServiceStub"),
    ServiceDescriptor("auth_service", "zitadel.auth_pb2_grpc", "AuthServiceStub"),
    ServiceDescriptor("user_service", "zitadel.user.v2beta.user_service_pb2_grpc", "UserServiceStub"),
    ServiceDescriptor("user_service_v2", "zitadel.user.v2.user_service_pb2_grpc", "UserServiceStub"),
    ServiceDescriptor("settings_service", "zitadel.settings.v2beta.settings_service_pb2_grpc", "SettingsServiceStub"),
    ServiceDescriptor("settings_service_v2", "zitadel.settings.v2.settings_service_pb2_grpc", "SettingsServiceStub"),
    ServiceDescriptor("session_service", "zitadel.session.v2beta.session_service_pb2_grpc", "SessionServiceStub"),
    ServiceDescriptor("session_service_v2", "zitadel.session.v2.session_service_pb2_grpc", "SessionServiceStub"),
    ServiceDescriptor("organization_service", "zitadel.org.v2beta.org_service_pb2_grpc", "OrganizationServiceStub"),
    ServiceDescriptor("organization_service_v2", "zitadel.org.v2.org_service_pb2_grpc", "OrganizationServiceStub"),
    ServiceDescriptor("oidc_service", "zitadel.oidc.v2beta.oidc_service_pb2_grpc", "OIDCServiceStub"),
    ServiceDescriptor("oidc_service_v2", "zitadel.oidc.v2.oidc_service_pb2_grpc", "OIDCServiceStub"),
)


class ClientOptions:
    """Settings collected from the options passed to Client.new"""

    def __init__(self):
        self.init_token_source: Optional[TokenSourceInitializer] = None
        self.grpc_dial_options: List[DialOption] = []


Option = Callable[[ClientOptions], None]


def with_auth(init_token_source: TokenSourceInitializer) -> Option:
    """
    Authorize every call with tokens from the given initializer, e.g. pat(token).

    Only the last with_auth passed to Client.new takes effect.
    """
    def apply(options: ClientOptions):
        options.init_token_source = init_token_source
    return apply


def with_grpc_dial_options(*dial_opts: DialOption) -> Option:
    """
    Extra dial options for the shared channel.

    May be passed several times, options are appended in order after the
    mandatory credential options.
    """
    def apply(options: ClientOptions):
        options.grpc_dial_options.extend(dial_opts)
    return apply


with_extra_transport_options = with_grpc_dial_options


def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


def _load_stub_factory(descriptor: ServiceDescriptor) -> Callable[[grpc.Channel], Any]:
    module = importlib.import_module(descriptor.module)
    return getattr(module, descriptor.stub)


def new_connection(endpoint: Endpoint, token_source: Optional[TokenSource],
                   extra_options: List[DialOption], timeout: Optional[float] = None) -> grpc.Channel:
    """Open the shared channel with transport security and per-call credentials attached"""
    security = transport_credentials(endpoint.domain, endpoint.is_tls)
    provider = TokenCredentials(tls=endpoint.is_tls, token_source=token_source)
    return dial(endpoint.host, dial_options(security, provider, extra_options), timeout=timeout)


class Client:
    """Typed stubs for all platform services over one shared channel"""

    def __init__(self, channel: grpc.Channel, stubs: Dict[str, Any]):
        self._channel = channel
        self._stubs = dict(stubs)
        self._closed = False

    @classmethod
    def new(cls, endpoint: Endpoint, *options: Option, timeout: Optional[float] = None) -> "Client":
        """
        Connect to a platform instance

        Args:
            endpoint: Target instance
            options: with_auth / with_grpc_dial_options, applied in order
            timeout: Seconds for token source initialization and dialing together

        Returns:
            Client

        Raises:
            Whatever the token source initializer, transport security setup,
            dial or stub import raised. Nothing is left open on failure.
            grpc.FutureTimeoutError: timeout ran out during token source initialization
        """
        client_options = ClientOptions()
        for option in options:
            option(client_options)

        deadline = None if timeout is None else time.monotonic() + timeout

        token_source = None
        if client_options.init_token_source is not None:
            token_source = client_options.init_token_source(endpoint.origin, _remaining(deadline))
            if deadline is not None and time.monotonic() >= deadline:
                logger.error(f"Token source initialization for {endpoint.origin} exceeded {timeout}s")
                raise grpc.FutureTimeoutError()

        logger.debug(
            f"Connecting to {endpoint.host} (tls={endpoint.is_tls}, "
            f"authenticated={token_source is not None}, "
            f"extra_dial_options={len(client_options.grpc_dial_options)})"
        )
        channel = new_connection(endpoint, token_source, client_options.grpc_dial_options,
                                 _remaining(deadline))

        try:
            stubs = {service.attribute: _load_stub_factory(service)(channel) for service in SERVICES}
        except Exception as e:
            logger.error(f"Failed to create service stubs for {endpoint.host}: {e}")
            channel.close()
            raise

        logger.info(f"Client ready for {endpoint.host}")
        return cls(channel, stubs)

    @classmethod
    def from_env(cls, *options: Option, config=None) -> "Client":
        """Connect using ZITADEL_* settings, a configured PAT comes before options"""
        from .config import get_settings

        config = config or get_settings()
        endpoint = Endpoint.from_env(config)
        env_options: List[Option] = []
        if config.pat:
            env_options.append(with_auth(pat(config.pat)))
        return cls.new(endpoint, *env_options, *options, timeout=config.timeout)

    @property
    def channel(self) -> grpc.Channel:
        """The channel shared by all stubs"""
        return self._channel

    @property
    def system_service(self):
        return self._stubs["system_service"]

    @property
    def admin_service(self):
        return self._stubs["admin_service"]

    @property
    def management_service(self):
        return self._stubs["management_service"]

    @property
    def auth_service(self):
        return self._stubs["auth_service"]

    @property
    def user_service(self):
        """User service, v2beta"""
        return self._stubs["user_service"]

    @property
    def user_service_v2(self):
        return self._stubs["user_service_v2"]

    @property
    def settings_service(self):
        """Settings service, v2beta"""
        return self._stubs["settings_service"]

    @property
    def settings_service_v2(self):
        return self._stubs["settings_service_v2"]

    @property
    def session_service(self):
        """Session service, v2beta"""
        return self._stubs["session_service"]

    @property
    def session_service_v2(self):
        return self._stubs["session_service_v2"]

    @property
    def organization_service(self):
        """Organization service, v2beta"""
        return self._stubs["organization_service"]

    @property
    def organization_service_v2(self):
        return self._stubs["organization_service_v2"]

    @property
    def oidc_service(self):
        """OIDC service, v2beta"""
        return self._stubs["oidc_service"]

    @property
    def oidc_service_v2(self):
        return self._stubs["oidc_service_v2"]

    def close(self):
        """Close the shared channel, stubs are unusable afterwards"""
        if self._closed:
            return
        self._channel.close()
        self._closed = True
        logger.debug("Client channel closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


__all__ = [
    "Client",
    "ClientOptions",
    "Option",
    "ServiceDescriptor",
    "SERVICES",
    "with_auth",
    "with_grpc_dial_options",
    "with_extra_transport_options",
    "new_connection",
]
