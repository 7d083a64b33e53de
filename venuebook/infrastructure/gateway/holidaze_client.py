from __future__ import annotations

import logging
from typing import Any

import httpx

from venuebook.application.exceptions import GatewayError, TransportError
from venuebook.core.config import settings

BOOKINGS_ENDPOINT = "/holidaze/bookings"
SESSION_EXPIRED_MESSAGE = "Your session has expired. Please log in again."
GENERIC_API_ERROR_MESSAGE = "An API error occurred."
NETWORK_ERROR_MESSAGE = "A network error occurred. Please check your connection."


def venue_endpoint(venue_id: str) -> str:
    return f"/holidaze/venues/{venue_id}"


class HolidazeClient:
    """Thin JSON client for the venue API. Maps failures to GatewayError / TransportError."""

    def __init__(
        self,
        api_key: str | None = None,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or settings.VENUE_API_KEY
        self._access_token = access_token or settings.VENUE_API_ACCESS_TOKEN
        self._base_url = (base_url or settings.VENUE_API_BASE_URL).rstrip("/")
        self._client = httpx.Client(
            timeout=timeout if timeout is not None else settings.GATEWAY_TIMEOUT_SECONDS,
            transport=transport,
        )
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("VENUE_API_KEY is required for the venue API client")

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any, headers: dict[str, str] | None = None) -> Any:
        return self._request("POST", endpoint, json=data, headers=headers)

    def close(self) -> None:
        self._client.close()

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "X-Noroff-API-Key": self._api_key}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{endpoint}"
        try:
            resp = self._client.request(method, url, params=params, json=json, headers=self._headers(headers))
        except httpx.TimeoutException as e:
            self._logger.error(
                "Venue API request timed out",
                extra={"error_category": "transport", "method": method, "endpoint": endpoint, "error": str(e)},
            )
            raise TransportError(NETWORK_ERROR_MESSAGE) from e
        except httpx.HTTPError as e:
            self._logger.error(
                "Venue API request failed",
                extra={"error_category": "transport", "method": method, "endpoint": endpoint, "error": str(e)},
            )
            raise TransportError(NETWORK_ERROR_MESSAGE) from e

        if resp.status_code >= 400:
            raise self._error_from_response(resp, endpoint)

        if resp.status_code == 204 or not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as e:
            self._logger.error(
                "Venue API returned a non-JSON body",
                extra={"error_category": "transport", "status": resp.status_code, "endpoint": endpoint},
            )
            raise TransportError(NETWORK_ERROR_MESSAGE) from e

    def _error_from_response(self, resp: httpx.Response, endpoint: str) -> GatewayError:
        if resp.status_code == 401:
            self._logger.warning(
                "Venue API rejected credentials",
                extra={"error_category": "gateway", "status": resp.status_code, "endpoint": endpoint},
            )
            return GatewayError(SESSION_EXPIRED_MESSAGE, status_code=401)

        details: dict[str, Any] | None = None
        message = GENERIC_API_ERROR_MESSAGE
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            details = body
            errors = body.get("errors") or []
            if errors and isinstance(errors[0], dict) and errors[0].get("message"):
                message = str(errors[0]["message"])

        self._logger.error(
            "Venue API error",
            extra={"error_category": "gateway", "status": resp.status_code, "endpoint": endpoint, "reason": message},
        )
        return GatewayError(message, status_code=resp.status_code, details=details)
