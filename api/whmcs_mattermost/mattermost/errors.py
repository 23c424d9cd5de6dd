"""Mattermost API failures and the user-facing errors they map to."""

import html


class MattermostApiError(Exception):
    """Base class for normalised Mattermost API failures."""


class ApiClientError(MattermostApiError):
    """The API answered with a 4xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Mattermost API returned {status_code}")
        self.status_code = status_code
        self.body = body


class ApiConnectError(MattermostApiError):
    """The API could not be reached (DNS, TLS, refused, timed out)."""


class ApiServerError(MattermostApiError):
    """The API or a reverse proxy in front of it answered with a 5xx status."""

    def __init__(self, status_code: int, request_dump: str):
        super().__init__(f"Mattermost API returned {status_code}")
        self.status_code = status_code
        self.request_dump = request_dump


class ApiTooManyRedirects(MattermostApiError):
    """The redirect limit was exceeded."""


class ApiInvalidResponse(MattermostApiError):
    """A successful response did not carry the expected JSON."""

    def __init__(self, body: str):
        super().__init__("Unexpected Mattermost API response")
        self.body = body


class NotificationError(Exception):
    """
    A terminal, user-visible failure of a provider operation.

    The message is shown as-is in the host's admin UI, which renders HTML.
    """

    status_code = 502

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingSettingsError(NotificationError):
    status_code = 400

    def __init__(self):
        super().__init__(
            "Please provide the Mattermost Domain Name, Bot Username and Bot Access Token."
        )


class NoChannelSelectedError(NotificationError):
    status_code = 400

    def __init__(self):
        super().__init__("No (existing) channel selected for notification delivery.")


def _pre(text: str) -> str:
    return f"<pre>{html.escape(text, quote=False)}</pre>"


def to_notification_error(exc: MattermostApiError) -> NotificationError:
    """Map an API failure to the message shown to the administrator."""
    if isinstance(exc, ApiClientError):
        return NotificationError(f"An API error has occurred. Response: {_pre(exc.body)}")
    if isinstance(exc, ApiConnectError):
        return NotificationError(
            "A network error has occurred. Please check the domain name for correctness "
            "and perform a server reachability check using cURL."
        )
    if isinstance(exc, ApiServerError):
        return NotificationError(
            "An error occurred on the Mattermost server or on the reverse proxy if used. "
            f"Request: {_pre(exc.request_dump)}"
        )
    if isinstance(exc, ApiTooManyRedirects):
        return NotificationError("Too many redirects occur when trying to connect to the API.")
    if isinstance(exc, ApiInvalidResponse):
        return NotificationError(
            f"The Mattermost API returned an unexpected response. Response: {_pre(exc.body)}"
        )
    return NotificationError(f"Unexpected Mattermost API failure: {exc}")
