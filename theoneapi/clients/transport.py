from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from theoneapi.clients.results import FailureReason
from theoneapi.core.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, TheOneApiError
from theoneapi.schemas.models import D, Envelope


class TheOneApiClientError(TheOneApiError):
    def __init__(self, message: str, reason: FailureReason, status_code: int | None = None) -> None:
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code


class TheOneApiTransport:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self, with_auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if with_auth:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def fetch(self, path: str, params: dict[str, Any] | None, with_auth: bool) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url, timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(path, params=params, headers=self._headers(with_auth))
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TheOneApiClientError(
                "The One API request failed",
                FailureReason.STATUS,
                status_code=exc.response.status_code,
            ) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TheOneApiClientError("The One API is unavailable", FailureReason.TRANSPORT) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TheOneApiClientError(
                "The One API returned a non-JSON body",
                FailureReason.DECODE,
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise TheOneApiClientError(
                "The One API returned an unexpected payload",
                FailureReason.DECODE,
                status_code=response.status_code,
            )
        return payload

    async def fetch_envelope(
        self,
        path: str,
        params: dict[str, Any] | None,
        with_auth: bool,
        document: type[D],
    ) -> Envelope[D]:
        payload = await self.fetch(path, params, with_auth)
        try:
            envelope = Envelope[document].model_validate(payload)  # type: ignore[valid-type]
        except ValidationError as exc:
            raise TheOneApiClientError(
                f"The One API returned a malformed {document.__name__} envelope",
                FailureReason.DECODE,
            ) from exc

        if envelope.docs is None:
            raise TheOneApiClientError("The One API envelope has no docs", FailureReason.DECODE)
        return envelope
