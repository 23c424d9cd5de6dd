"""Channel options for the per-rule channel selector."""

import logging
from typing import Optional

import httpx

from whmcs_mattermost.mattermost import CHANNEL_FIELD, ChannelOption
from whmcs_mattermost.mattermost.client import MattermostClient
from whmcs_mattermost.mattermost.errors import (
    ApiInvalidResponse,
    MattermostApiError,
    MissingSettingsError,
    to_notification_error,
)
from whmcs_mattermost.schemas.settings import ConnectionSettings

logger = logging.getLogger(__name__)


def list_channels(
    field_name: str,
    connection: ConnectionSettings,
    transport: Optional[httpx.BaseTransport] = None,
) -> list[ChannelOption]:
    """
    List the channels the bot account belongs to.

    Direct and group messages have no display name and are skipped. Options
    keep the order returned by the server. Unknown field names yield an
    empty list without contacting the server.
    """
    if field_name != CHANNEL_FIELD:
        logger.debug("No options for dynamic field %s", field_name)
        return []

    if not connection.is_complete():
        raise MissingSettingsError()

    try:
        with MattermostClient(connection, transport=transport) as client:
            bot = client.get_user_by_username(connection.bot_username)
            bot_id = bot.get("id")
            if not bot_id:
                raise ApiInvalidResponse(str(bot))
            channels = client.get_user_channels(bot_id)
    except MattermostApiError as e:
        raise to_notification_error(e) from e

    options = [
        ChannelOption(
            id=channel.get("id", ""),
            name=channel["display_name"],
            description=channel.get("purpose") or "",
        )
        for channel in channels
        if isinstance(channel, dict) and channel.get("display_name")
    ]
    logger.info("Found %d of %d channels for %s", len(options), len(channels), connection.bot_username)
    return options
