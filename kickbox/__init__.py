"""Client for the Kickbox email verification API."""

__version__ = "1.0.0"

from .client import BASE_URL, DEFAULT_TIMEOUT, Client  # noqa: E402
from .endpoints import ENDPOINTS, Endpoint, ServiceType, lookup  # noqa: E402
from .errors import (  # noqa: E402
    BuildError,
    DecodeError,
    EmptyResponseError,
    KickboxError,
    ServiceError,
    TransportError,
)
from .models import (  # noqa: E402
    CheckJobStatusResponse,
    CreditBalanceResponse,
    DisposableResponse,
    JobProgress,
    JobStats,
    VerifyMultipleResponse,
    VerifyResponse,
)

__all__ = [
    "BASE_URL",
    "DEFAULT_TIMEOUT",
    "Client",
    "ENDPOINTS",
    "Endpoint",
    "ServiceType",
    "lookup",
    "KickboxError",
    "BuildError",
    "TransportError",
    "EmptyResponseError",
    "DecodeError",
    "ServiceError",
    "VerifyResponse",
    "VerifyMultipleResponse",
    "CheckJobStatusResponse",
    "JobProgress",
    "JobStats",
    "CreditBalanceResponse",
    "DisposableResponse",
]
