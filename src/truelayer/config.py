"""Configuration: frozen credentials, signing, environment and client settings."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import TYPE_CHECKING, Literal, cast

from dotenv import load_dotenv

from truelayer.credentials import DEFAULT_SAFETY_MARGIN_S
from truelayer.errors import ConfigurationError
from truelayer.retry import RetryPolicy

if TYPE_CHECKING:
    from truelayer.signing import Signer

load_dotenv()

EnvironmentName = Literal["live", "sandbox"]

_CLIENT_ID_ENV = "TRUELAYER_CLIENT_ID"
_CLIENT_SECRET_ENV = "TRUELAYER_CLIENT_SECRET"
_ENVIRONMENT_ENV = "TRUELAYER_ENVIRONMENT"


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth2 client credentials.

    Both values are auto-resolved from ``TRUELAYER_CLIENT_ID`` and
    ``TRUELAYER_CLIENT_SECRET`` when omitted.
    """

    client_id: str | None = None
    client_secret: str | None = None

    def __post_init__(self) -> None:
        """Resolve from the environment and fail fast on missing values."""
        if self.client_id is None:
            object.__setattr__(self, "client_id", os.environ.get(_CLIENT_ID_ENV))
        if self.client_secret is None:
            object.__setattr__(
                self, "client_secret", os.environ.get(_CLIENT_SECRET_ENV)
            )
        if not self.client_id:
            raise ConfigurationError(
                "client id must be not empty",
                hint=f"Set {_CLIENT_ID_ENV} or pass ClientCredentials(client_id=...).",
            )
        if not self.client_secret:
            raise ConfigurationError(
                "client secret must be not empty",
                hint=f"Set {_CLIENT_SECRET_ENV} or pass ClientCredentials(client_secret=...).",
            )

    def __str__(self) -> str:
        """Return a redacted representation."""
        return f"ClientCredentials(client_id={self.client_id!r}, client_secret='[REDACTED]')"

    __repr__ = __str__


@dataclass(frozen=True)
class SigningOptions:
    """Key material and signer used for signed payment requests."""

    key_id: str
    private_key: bytes | str
    signer: Signer

    def __post_init__(self) -> None:
        """Validate the signing key."""
        if not self.key_id:
            raise ConfigurationError("signing key id must be not empty")
        if not self.private_key:
            raise ConfigurationError("signing private key must be not empty")
        if not callable(self.signer):
            raise ConfigurationError(
                "signer must be callable",
                hint="Pass a function (payload, options) -> signature header value.",
            )

    def __str__(self) -> str:
        """Return a redacted representation."""
        return f"SigningOptions(key_id={self.key_id!r}, private_key='[REDACTED]')"

    __repr__ = __str__


@dataclass(frozen=True)
class Environment:
    """Base URIs of the APIs the client talks to."""

    auth_api_uri: str
    payments_api_uri: str
    hpp_uri: str

    def __post_init__(self) -> None:
        """Normalize URIs (no trailing slash) and reject blanks."""
        for name in ("auth_api_uri", "payments_api_uri", "hpp_uri"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"Environment.{name} must be not empty")
            object.__setattr__(self, name, value.strip().rstrip("/"))

    @classmethod
    def live(cls) -> Environment:
        """Production environment."""
        return cls(
            auth_api_uri="https://auth.truelayer.com",
            payments_api_uri="https://api.truelayer.com",
            hpp_uri="https://payment.truelayer.com",
        )

    @classmethod
    def sandbox(cls) -> Environment:
        """Sandbox environment."""
        return cls(
            auth_api_uri="https://auth.truelayer-sandbox.com",
            payments_api_uri="https://api.truelayer-sandbox.com",
            hpp_uri="https://payment.truelayer-sandbox.com",
        )

    @classmethod
    def development(
        cls, *, auth_api_uri: str, payments_api_uri: str, hpp_uri: str
    ) -> Environment:
        """Custom environment, e.g. a local mock server."""
        return cls(
            auth_api_uri=auth_api_uri,
            payments_api_uri=payments_api_uri,
            hpp_uri=hpp_uri,
        )

    @classmethod
    def from_name(cls, name: str) -> Environment:
        """Resolve ``"live"`` or ``"sandbox"``."""
        normalized = name.strip().lower()
        if normalized == "live":
            return cls.live()
        if normalized == "sandbox":
            return cls.sandbox()
        raise ConfigurationError(
            f"Unknown environment: {name!r}",
            hint="Supported environments: 'live', 'sandbox'.",
        )


@dataclass(frozen=True)
class Config:
    """Immutable client configuration.

    Credentials and environment are auto-resolved from ``TRUELAYER_*``
    environment variables when omitted; with neither, the environment is
    ``Environment.live()``. Without ``signing`` the client can
    only talk to the authentication API and build HPP links.

    Example:
        config = Config(
            credentials=ClientCredentials("client-id", "client-secret"),
            signing=SigningOptions(key_id="kid", private_key=pem, signer=sign),
            environment=Environment.sandbox(),
        )
    """

    credentials: ClientCredentials = field(default_factory=ClientCredentials)
    signing: SigningOptions | None = None
    environment: Environment | None = None
    #: HTTP timeout in seconds per request; *None* keeps the transport default.
    timeout_s: float | None = None
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    credentials_caching: bool = True
    token_safety_margin_s: float = DEFAULT_SAFETY_MARGIN_S
    #: Log one line per HTTP request/response, sensitive headers redacted.
    http_logs: bool = False

    def __post_init__(self) -> None:
        """Auto-resolve the environment and validate numeric fields."""
        if self.environment is None:
            name = os.environ.get(_ENVIRONMENT_ENV) or "live"
            object.__setattr__(self, "environment", Environment.from_name(name))

        if self.timeout_s is not None and self.timeout_s <= 0:
            raise ConfigurationError(
                f"timeout_s must be > 0, got {self.timeout_s}",
                hint="Pass None to use the HTTP client default.",
            )
        if self.token_safety_margin_s < 0:
            raise ConfigurationError(
                f"token_safety_margin_s must be ≥ 0, got {self.token_safety_margin_s}",
                hint="Tokens are treated as expired this many seconds early.",
            )

    @property
    def api_environment(self) -> Environment:
        """The resolved environment."""
        return cast("Environment", self.environment)
