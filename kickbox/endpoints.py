"""Kickbox endpoint registry.

Based on https://docs.kickbox.com/v2.0/reference
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple


class ServiceType(Enum):
    VERIFY = "verify"
    VERIFY_MULTIPLE = "verify_multiple"
    CHECK_JOB_STATUS = "check_job_status"
    CREDIT_BALANCE = "credit_balance"
    DISPOSABLE_EMAIL_CHECK = "disposable_email_check"


class Endpoint(NamedTuple):
    method: str
    path: str  # may contain {PLACEHOLDER} tokens


ENDPOINTS: Mapping[ServiceType, Endpoint] = MappingProxyType(
    {
        ServiceType.VERIFY: Endpoint("GET", "/{API_VERSION}/verify"),
        ServiceType.VERIFY_MULTIPLE: Endpoint("PUT", "/{API_VERSION}/verify-batch"),
        ServiceType.CHECK_JOB_STATUS: Endpoint(
            "GET", "/{API_VERSION}/verify-batch/{JOB_ID}"
        ),
        ServiceType.CREDIT_BALANCE: Endpoint("GET", "/{API_VERSION}/balance"),
        ServiceType.DISPOSABLE_EMAIL_CHECK: Endpoint(
            "GET", "/{API_VERSION}/disposable/{EMAIL_ADDRESS}"
        ),
    }
)


def lookup(service: ServiceType) -> Endpoint:
    """Return the endpoint registered for ``service``."""
    return ENDPOINTS[service]


def resolve_path(path: str, segments: Mapping[str, str]) -> str:
    """
    Replace every ``{KEY}`` in ``path`` with ``segments[KEY]``.

    Plain string replacement: no escaping, and placeholders without a
    substitution are left untouched.
    """
    for search, replace in segments.items():
        path = path.replace("{" + search + "}", replace)
    return path
