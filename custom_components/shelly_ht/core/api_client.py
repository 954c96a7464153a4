"""HTTP API client for Shelly H&T integration."""

import asyncio
from typing import Any, Dict, Optional
import logging

import aiohttp
from aiohttp.client import ClientTimeout
from aiohttp import ClientConnectorError, ServerConnectionError

from ..const import DEFAULT_HEADERS, REQUEST_TIMEOUT, URL_DEVICE_STATUS
from .exceptions import AuthError, NetworkError, ResponseError

_LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = ClientTimeout(total=REQUEST_TIMEOUT)


class ShellyHTApiClient:
    """HTTP client for a Shelly device status server."""

    __slots__ = ("_session", "_server_url", "_timeout")

    def __init__(
        self,
        session: aiohttp.ClientSession,
        server_url: str,
        timeout: Optional[ClientTimeout] = None,
    ) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp client session for HTTP requests
            server_url: Base URL of the status server, without trailing slash
            timeout: Request timeout, defaults to REQUEST_TIMEOUT seconds
        """
        self._session = session
        self._server_url = server_url.rstrip("/")
        self._timeout = timeout or DEFAULT_TIMEOUT

    @property
    def server_url(self) -> str:
        return self._server_url

    async def _request(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON payload and return the decoded JSON body.

        Raises:
            AuthError: If the server rejects the credentials
            ResponseError: If the body is not a JSON object
            NetworkError: On transport errors, timeouts and HTTP errors
        """
        url = f"{self._server_url}{endpoint}"

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("HTTP POST %s", url)

        try:
            async with self._session.post(
                url, json=payload, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                if _LOGGER.isEnabledFor(logging.DEBUG):
                    _LOGGER.debug("HTTP %s response: %s", url, response.status)

                if response.status in (401, 403):
                    raise AuthError(f"Auth failed (status={response.status})")
                if not 200 <= response.status < 300:
                    raise NetworkError(f"HTTP error: {response.status}")

                try:
                    resp_json = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as json_err:
                    raise ResponseError(f"Invalid JSON from {url}") from json_err

        except NetworkError:
            raise
        except asyncio.TimeoutError as exc:
            raise NetworkError(f"Request timeout: {url} did not answer in time") from exc
        except (ClientConnectorError, ServerConnectionError) as exc:
            raise NetworkError(
                f"Connection failed: {type(exc).__name__}: {exc}"
            ) from exc
        except aiohttp.ClientError as exc:
            raise NetworkError(f"Client error: {exc}") from exc

        if not isinstance(resp_json, dict):
            raise ResponseError(f"Unexpected response type from {url}: {type(resp_json).__name__}")
        return resp_json

    async def async_get_device_status(self, device_id: str, auth_key: str) -> Dict[str, Any]:
        """Fetch the raw device status object.

        Args:
            device_id: Shelly device identifier
            auth_key: Authorization key for the status server

        Returns:
            The `data.device_status` object of the response

        Raises:
            NetworkError: If the request fails or the body lacks device_status
        """
        resp = await self._request(
            URL_DEVICE_STATUS, {"id": device_id, "auth_key": auth_key}
        )

        data = resp.get("data")
        status = data.get("device_status") if isinstance(data, dict) else None
        if not isinstance(status, dict):
            if resp.get("isok") is False:
                raise ResponseError(f"Server reported an error: {resp.get('errors')}")
            raise ResponseError("Response has no data.device_status object")
        return status
