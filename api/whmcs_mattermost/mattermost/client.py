"""Thin client for the Mattermost REST API v4."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from whmcs_mattermost.config import settings
from whmcs_mattermost.mattermost.errors import (
    ApiClientError,
    ApiConnectError,
    ApiInvalidResponse,
    ApiServerError,
    ApiTooManyRedirects,
)
from whmcs_mattermost.schemas.settings import ConnectionSettings

logger = logging.getLogger(__name__)

_REDACTED = "Bearer ********"


def dump_request(request: httpx.Request) -> str:
    """
    Render an outgoing request as HTTP/1.1 text for diagnostics.

    The bearer token is redacted; every other header is kept as sent.
    """
    target = request.url.raw_path.decode("ascii", errors="replace")
    lines = [f"{request.method} {target} HTTP/1.1"]
    for raw_name, raw_value in request.headers.raw:
        name = raw_name.decode("latin-1")
        value = raw_value.decode("latin-1")
        if name.lower() == "authorization":
            value = _REDACTED
        lines.append(f"{name}: {value}")

    try:
        body = request.content.decode("utf-8", errors="replace")
    except httpx.RequestNotRead:
        body = ""
    return "\r\n".join(lines) + "\r\n\r\n" + body


class MattermostClient:
    """
    Perform authenticated requests against ``https://{domain}/api/v4/``.

    Every failure is raised as a ``MattermostApiError`` subclass; nothing is
    retried. Use as a context manager so the connection pool is released.
    """

    def __init__(
        self,
        connection: ConnectionSettings,
        timeout: Optional[float] = None,
        max_redirects: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.connection = connection
        try:
            self._http = httpx.Client(
                base_url=connection.base_url,
                headers={
                    "Authorization": f"Bearer {connection.bot_token}",
                    "Accept": "application/json",
                    "User-Agent": settings.user_agent,
                },
                timeout=timeout if timeout is not None else settings.http_timeout,
                follow_redirects=True,
                max_redirects=max_redirects if max_redirects is not None else settings.max_redirects,
                transport=transport,
            )
        except httpx.InvalidURL as e:
            logger.warning("Invalid Mattermost domain %r: %s", connection.domain, e)
            raise ApiConnectError(str(e)) from e

    def __enter__(self) -> "MattermostClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def request(self, method: str, path: str, json: Any = None) -> Any:
        """Send one request and return the decoded JSON body (None if empty)."""
        try:
            response = self._http.request(method, path, json=json)
        except httpx.TooManyRedirects as e:
            logger.warning("Too many redirects for %s %s", method, path)
            raise ApiTooManyRedirects(str(e)) from e
        except httpx.DecodingError as e:
            logger.warning("Undecodable response body for %s %s: %s", method, path, e)
            raise ApiInvalidResponse(str(e)) from e
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.warning("Cannot reach Mattermost at %s: %s", self.connection.domain, e)
            raise ApiConnectError(str(e)) from e

        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code >= 500:
            logger.warning(
                "Mattermost server error %s for %s %s", response.status_code, method, path
            )
            raise ApiServerError(response.status_code, dump_request(response.request))
        if response.status_code >= 400:
            logger.warning(
                "Mattermost API rejected %s %s with %s: %s",
                method,
                path,
                response.status_code,
                response.text[:200],
            )
            raise ApiClientError(response.status_code, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiInvalidResponse(response.text) from e

    # --- Endpoints ---

    def get_user_by_username(self, username: str) -> dict:
        user = self.request("GET", f"users/username/{quote(username, safe='')}")
        if not isinstance(user, dict):
            raise ApiInvalidResponse(str(user))
        return user

    def get_user_channels(self, user_id: str) -> list:
        channels = self.request("GET", f"users/{quote(user_id, safe='')}/channels")
        if not isinstance(channels, list):
            raise ApiInvalidResponse(str(channels))
        return channels

    def create_post(self, payload: dict) -> Any:
        return self.request("POST", "posts", json=payload)
