"""Typed Kickbox responses.

Pydantic models decoded straight from the response bytes. JSON ``null`` and
missing fields both leave the zero value; a value of the wrong JSON type is
a DecodeError.
"""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .errors import UNKNOWN_VERIFICATION_ERROR, DecodeError, ServiceError

M = TypeVar("M", bound="_Model")


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return value


class _Response(_Model):
    # HTTP status of the round trip; set by from_json, never read from the body
    status_code: int = Field(default=0, exclude=True)

    @classmethod
    def from_json(cls: Type[M], body: bytes, status_code: int = 0) -> M:
        try:
            result = cls.model_validate_json(body)
        except ValueError as e:
            raise DecodeError(f"Could not decode response body: {e}") from e
        return result.model_copy(update={"status_code": status_code})


class _Envelope(_Response):
    """Shared ``success``/``message`` handling."""

    success: bool = False
    message: str = ""

    def error(self) -> Optional[ServiceError]:
        """Return the service-reported failure, or None when the call succeeded."""
        if self.success:
            return None
        return ServiceError(self.message or UNKNOWN_VERIFICATION_ERROR)


class VerifyResponse(_Envelope):
    result: str = ""  # deliverable / undeliverable / risky / unknown
    reason: str = ""
    role: bool = False
    free: bool = False
    disposable: bool = False
    accept_all: bool = False
    did_you_mean: str = ""
    sendex: float = 0.0  # 0..1 deliverability score
    email: str = ""
    user: str = ""
    domain: str = ""

    def is_valid(self) -> bool:
        return self.result == "deliverable"


class VerifyMultipleResponse(_Envelope):
    id: int = 0  # batch job id


class JobProgress(_Model):
    """Counters reported while a batch job is processing."""

    deliverable: int = 0
    undeliverable: int = 0
    risky: int = 0
    unknown: int = 0
    total: int = 0
    unprocessed: int = 0


class JobStats(_Model):
    """Final statistics of a completed batch job."""

    deliverable: int = 0
    undeliverable: int = 0
    risky: int = 0
    unknown: int = 0
    sendex: float = 0.0
    addresses: int = 0


class CheckJobStatusResponse(_Response):
    """
    Status of a batch verification job.

    ``progress`` is only meaningful while processing and ``stats`` once
    completed. The body's ``error`` field is exposed as ``error_detail``.
    There is no ``error()`` predicate, only the status checks.
    """

    id: int = 0
    name: str = ""
    download_url: str = ""
    created_at: str = ""
    status: str = ""  # starting / processing / completed
    progress: JobProgress = Field(default_factory=JobProgress)
    stats: JobStats = Field(default_factory=JobStats)
    success: bool = False
    message: str = ""
    error_detail: str = Field(default="", alias="error")
    duration: int = 0

    def is_starting(self) -> bool:
        return self.status == "starting"

    def is_processing(self) -> bool:
        return self.status == "processing"

    def is_completed(self) -> bool:
        return self.status == "completed"


class CreditBalanceResponse(_Envelope):
    balance: int = 0


class DisposableResponse(_Response):
    # this endpoint has no success/message envelope
    disposable: bool = False
