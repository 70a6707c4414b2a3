#!/usr/bin/env python3
"""
Authorization interceptor for plaintext channels

gRPC only accepts call credentials on secure channels. For plaintext
connections the credential provider is attached through this interceptor
instead, so every call is authorized the same way on both kinds of channel.
"""

import collections

import grpc


class _ClientCallDetails(
        collections.namedtuple(
            "_ClientCallDetails",
            ("method", "timeout", "metadata", "credentials", "wait_for_ready", "compression")),
        grpc.ClientCallDetails):
    pass


class AuthMetadataInterceptor(grpc.UnaryUnaryClientInterceptor,
                              grpc.UnaryStreamClientInterceptor,
                              grpc.StreamUnaryClientInterceptor,
                              grpc.StreamStreamClientInterceptor):
    """Merges the credential provider's metadata into each outgoing call"""

    def __init__(self, provider):
        self._provider = provider

    def _with_metadata(self, client_call_details):
        extra = self._provider.get_request_metadata(client_call_details.method)
        if not extra:
            return client_call_details

        metadata = list(client_call_details.metadata or [])
        metadata.extend(extra.items())
        return _ClientCallDetails(
            client_call_details.method,
            client_call_details.timeout,
            metadata,
            client_call_details.credentials,
            getattr(client_call_details, "wait_for_ready", None),
            getattr(client_call_details, "compression", None),
        )

    def intercept_unary_unary(self, continuation, client_call_details, request):
        return continuation(self._with_metadata(client_call_details), request)

    def intercept_unary_stream(self, continuation, client_call_details, request):
        return continuation(self._with_metadata(client_call_details), request)

    def intercept_stream_unary(self, continuation, client_call_details, request_iterator):
        return continuation(self._with_metadata(client_call_details), request_iterator)

    def intercept_stream_stream(self, continuation, client_call_details, request_iterator):
        return continuation(self._with_metadata(client_call_details), request_iterator)


__all__ = ["AuthMetadataInterceptor"]
