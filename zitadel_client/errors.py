#!/usr/bin/env python3
"""
Client Errors

Only failures detected by this package get their own type. Errors raised by
token sources, token source initializers, gRPC or stub imports are surfaced
unchanged.
"""


class ZitadelClientError(Exception):
    """Base error for the client package"""
    pass


class InvalidEndpointError(ZitadelClientError, ValueError):
    """Endpoint domain or port is malformed"""
    pass


class TransportSecurityError(ZitadelClientError):
    """Transport security could not be set up for the connection"""
    pass


__all__ = ["ZitadelClientError", "InvalidEndpointError", "TransportSecurityError"]
