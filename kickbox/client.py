"""Kickbox API email verification client."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple, Union
from urllib.parse import quote, urlsplit, urlunsplit

import requests

from . import __version__
from .endpoints import ServiceType, lookup, resolve_path
from .errors import BuildError, EmptyResponseError, TransportError
from .models import (
    CheckJobStatusResponse,
    CreditBalanceResponse,
    DisposableResponse,
    VerifyMultipleResponse,
    VerifyResponse,
)

logger = logging.getLogger(__name__)

BASE_URL = "https://api.kickbox.com"
DEFAULT_TIMEOUT = 2.0  # seconds

CALLBACK_HEADER = "X-Kickbox-Callback"
FILENAME_HEADER = "X-Kickbox-Filename"


def _header_value(value: str) -> Union[str, bytes]:
    """Header values outside Latin-1 are sent as UTF-8 bytes."""
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return value.encode("utf-8")
    return value


class Client:
    """
    Client holding the Kickbox credentials and HTTP session.

    Every method performs exactly one blocking round trip. Transport, build and
    decode failures are raised; failures reported by the service (bad API key,
    exhausted credits, ...) come back inside the result, see ``error()``.
    """

    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Args:
            api_key: Kickbox API key, sent as the ``apikey`` query parameter
            session: pre-configured requests session (proxies, TLS, adapters);
                a private one is created and owned by the client when omitted
            base_url: service root, override for tests or a local endpoint
            timeout: per-request timeout in seconds
        """
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = f"kickbox-python/{__version__}"
        self._session = session

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._base_url!r})"

    # ---------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------

    def verify(self, email: str) -> VerifyResponse:
        """Verify a single email address."""
        body, status = self._call(
            ServiceType.VERIFY,
            segments={"API_VERSION": "v2"},
            params={"email": email},
        )
        return VerifyResponse.from_json(body, status)

    def verify_multiple(
        self, callback_url: str, filename: str, data: bytes
    ) -> VerifyMultipleResponse:
        """
        Upload a CSV of ``"email","name"`` rows for asynchronous verification.

        Returns the job id to poll with :meth:`check_job_status`. When
        ``callback_url`` is set the service also POSTs the outcome there.
        """
        headers = {}
        if callback_url:
            headers[CALLBACK_HEADER] = _header_value(callback_url)
        if filename:
            headers[FILENAME_HEADER] = _header_value(filename)

        body, status = self._call(
            ServiceType.VERIFY_MULTIPLE,
            segments={"API_VERSION": "v2"},
            headers=headers,
            data=data,
        )
        return VerifyMultipleResponse.from_json(body, status)

    def check_job_status(self, job_id: int) -> CheckJobStatusResponse:
        """Fetch the status of a batch job created by :meth:`verify_multiple`."""
        body, status = self._call(
            ServiceType.CHECK_JOB_STATUS,
            segments={"API_VERSION": "v2", "JOB_ID": str(int(job_id))},
        )
        return CheckJobStatusResponse.from_json(body, status)

    def credit_balance(self) -> CreditBalanceResponse:
        """Return the remaining verification credits."""
        body, status = self._call(
            ServiceType.CREDIT_BALANCE, segments={"API_VERSION": "v2"}
        )
        return CreditBalanceResponse.from_json(body, status)

    def disposable(self, email: str) -> DisposableResponse:
        """Check whether the domain of ``email`` is a disposable-address provider."""
        body, status = self._call(
            ServiceType.DISPOSABLE_EMAIL_CHECK,
            segments={"API_VERSION": "v1", "EMAIL_ADDRESS": quote(email, safe="@")},
        )
        return DisposableResponse.from_json(body, status)

    def close(self) -> None:
        """Close the HTTP session if the client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # ---------------------------------------------------------------
    # Internal helpers
    # ---------------------------------------------------------------

    def _call(
        self,
        service: ServiceType,
        segments: Mapping[str, str],
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, Union[str, bytes]]] = None,
        data: Optional[bytes] = None,
    ) -> Tuple[bytes, int]:
        endpoint = lookup(service)
        request = self._build_request(
            endpoint.method, endpoint.path, segments, params or {}, headers, data
        )
        status, body = self._call_service(request)
        return body, status

    def _build_request(
        self,
        method: str,
        path: str,
        segments: Mapping[str, str],
        params: Mapping[str, str],
        headers: Optional[Mapping[str, Union[str, bytes]]] = None,
        data: Optional[bytes] = None,
    ) -> requests.PreparedRequest:
        """Resolve the path template, add the API key and prepare the request."""
        query: Dict[str, str] = dict(params)
        query["apikey"] = self._api_key

        url = self._build_url(resolve_path(path, segments))
        request = requests.Request(
            method, url, params=query, headers=dict(headers or {}), data=data
        )
        try:
            return self._session.prepare_request(request)
        except (
            requests.exceptions.InvalidURL,
            requests.exceptions.InvalidHeader,
        ) as e:
            raise BuildError(f"Could not build request for {path}: {e}") from e

    def _build_url(self, path: str) -> str:
        try:
            parts = urlsplit(self._base_url)
        except ValueError as e:
            raise BuildError(f"Invalid base URL {self._base_url!r}: {e}") from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise BuildError(f"Invalid base URL {self._base_url!r}")
        return urlunsplit(
            (parts.scheme, parts.netloc, parts.path.rstrip("/") + path, parts.query, "")
        )

    def _redact(self, text: str) -> str:
        # requests puts the full URL, apikey included, in its error messages
        if not self._api_key:
            return text
        return text.replace(quote(self._api_key, safe=""), "***").replace(
            self._api_key, "***"
        )

    def _call_service(self, request: requests.PreparedRequest) -> Tuple[int, bytes]:
        """Send the request and return ``(status_code, body)``, whatever the status."""
        path = urlsplit(request.url).path  # the query holds the API key
        settings = self._session.merge_environment_settings(
            request.url, {}, None, None, None
        )
        try:
            response = self._session.send(request, timeout=self._timeout, **settings)
            with response:
                status, body = response.status_code, response.content
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", request.method, path, type(e).__name__)
            raise TransportError(f"Error doing request: {self._redact(str(e))}") from e

        logger.debug("%s %s -> %s (%d bytes)", request.method, path, status, len(body))
        if not body:
            raise EmptyResponseError()
        return status, body
