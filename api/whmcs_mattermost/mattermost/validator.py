"""Connection-settings check run before the host saves module settings."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from whmcs_mattermost.mattermost.client import MattermostClient
from whmcs_mattermost.mattermost.errors import (
    MattermostApiError,
    MissingSettingsError,
    to_notification_error,
)
from whmcs_mattermost.schemas.settings import ConnectionSettings

logger = logging.getLogger(__name__)


def validate_connection(
    connection: ConnectionSettings,
    transport: Optional[httpx.BaseTransport] = None,
) -> None:
    """
    Confirm the settings are complete and the bot account exists.

    Raises NotificationError on failure. The returned user object is not
    inspected: any successful lookup passes, whatever its body.
    """
    if not connection.is_complete():
        raise MissingSettingsError()

    try:
        with MattermostClient(connection, transport=transport) as client:
            client.request("GET", f"users/username/{quote(connection.bot_username, safe='')}")
    except MattermostApiError as e:
        raise to_notification_error(e) from e

    logger.info(
        "Mattermost connection verified for %s as %s",
        connection.domain,
        connection.bot_username,
    )
