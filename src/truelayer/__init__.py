"""TrueLayer: async Python client for the TrueLayer payments APIs.

Public API:
    - TrueLayerClient: entry point exposing the API handlers
    - Config, ClientCredentials, SigningOptions, Environment: configuration
    - ResultEnvelope: success/error outcome of every API operation
    - Variant: base for status- and type-discriminated response families
"""

from __future__ import annotations

import logging

from truelayer.client import TrueLayerClient
from truelayer.config import ClientCredentials, Config, Environment, SigningOptions
from truelayer.credentials import (
    CachedCredential,
    CredentialsCache,
    CredentialsKey,
    NoopCredentialsCache,
    SimpleCredentialsCache,
)
from truelayer.errors import (
    APIError,
    ConfigurationError,
    DecodeError,
    IssuanceError,
    TransportError,
    TrueLayerError,
    TypeMismatchError,
)
from truelayer.hpp import HostedPaymentPageLinkBuilder
from truelayer.result import ResultEnvelope
from truelayer.retry import RetryPolicy
from truelayer.signing import SignaturePayload, Signer
from truelayer.transport import HttpxTransport, RawResponse, Transport
from truelayer.variants import Entity, Tagged, Variant, decode

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("truelayer-python")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("truelayer").addHandler(logging.NullHandler())

__all__ = [
    "APIError",
    "CachedCredential",
    "ClientCredentials",
    "Config",
    "ConfigurationError",
    "CredentialsCache",
    "CredentialsKey",
    "DecodeError",
    "Entity",
    "Environment",
    "HostedPaymentPageLinkBuilder",
    "HttpxTransport",
    "IssuanceError",
    "NoopCredentialsCache",
    "RawResponse",
    "ResultEnvelope",
    "RetryPolicy",
    "SignaturePayload",
    "Signer",
    "SigningOptions",
    "SimpleCredentialsCache",
    "Tagged",
    "Transport",
    "TransportError",
    "TrueLayerClient",
    "TrueLayerError",
    "TypeMismatchError",
    "Variant",
    "decode",
]
