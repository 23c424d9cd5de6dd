"""Delivery of a triggered notification as a Mattermost post."""

import logging
from typing import Optional

import httpx

from whmcs_mattermost.mattermost import ChannelSelection, NotificationEvent
from whmcs_mattermost.mattermost.client import MattermostClient
from whmcs_mattermost.mattermost.errors import (
    MattermostApiError,
    MissingSettingsError,
    NoChannelSelectedError,
    to_notification_error,
)
from whmcs_mattermost.schemas.settings import ConnectionSettings

logger = logging.getLogger(__name__)


def build_post_payload(channel_id: str, event: NotificationEvent) -> dict:
    """
    Build the ``POST /posts`` body: the message plus one attachment holding
    the title, link and attribute table.
    """
    attachment = {"title": event.title}
    if event.url:
        attachment["title_link"] = event.url
    attachment["fields"] = [
        {"title": attr.label, "value": attr.value}
        for attr in event.attributes
    ]

    return {
        "channel_id": channel_id,
        "message": event.message,
        "props": {"attachments": [attachment]},
    }


def dispatch_notification(
    connection: ConnectionSettings,
    selection: ChannelSelection,
    event: NotificationEvent,
    transport: Optional[httpx.BaseTransport] = None,
) -> None:
    """Post exactly one message for ``event`` to the selected channel."""
    if selection.is_empty():
        raise NoChannelSelectedError()
    if not connection.is_complete():
        raise MissingSettingsError()

    channel_id = selection.channel_id
    payload = build_post_payload(channel_id, event)

    try:
        with MattermostClient(connection, transport=transport) as client:
            client.create_post(payload)
    except MattermostApiError as e:
        logger.warning("Failed to deliver %r to channel %s: %s", event.title, channel_id, e)
        raise to_notification_error(e) from e

    logger.info("Delivered %r to channel %s", event.title, channel_id)
