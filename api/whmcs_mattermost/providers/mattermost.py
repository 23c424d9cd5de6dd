"""Mattermost notification provider."""

import logging
from typing import Optional

import httpx

from whmcs_mattermost.mattermost import CHANNEL_FIELD, ChannelSelection, NotificationEvent
from whmcs_mattermost.mattermost.directory import list_channels
from whmcs_mattermost.mattermost.dispatcher import dispatch_notification
from whmcs_mattermost.mattermost.validator import validate_connection
from whmcs_mattermost.providers.base import NotificationProvider
from whmcs_mattermost.schemas.settings import ConnectionSettings, SettingField

logger = logging.getLogger(__name__)

_MODULE_SETTINGS = {
    "mattermost_url": SettingField(
        friendly_name="Mattermost Domain",
        type="text",
        description="Supply your Mattermost domain name without protocols or backslashes.",
    ),
    "mattermost_bot_username": SettingField(
        friendly_name="Mattermost Bot Username",
        type="text",
        placeholder="whmcs",
        description="Enter the bot username. In most cases this should be whmcs.",
    ),
    "mattermost_bot_access_token": SettingField(
        friendly_name="Mattermost Bot Access Token",
        type="text",
        description="Can be generated in the Integrations tab of Mattermost",
    ),
}

_NOTIFICATION_SETTINGS = {
    CHANNEL_FIELD: SettingField(
        friendly_name="Channel",
        type="dynamic",
        description="Select the desired channel for notification delivery.",
        required=True,
    ),
}


class MattermostProvider(NotificationProvider):
    """Deliver host notifications as posts in a Mattermost channel."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None):
        self.transport = transport

    @property
    def display_name(self) -> str:
        return "Mattermost"

    @property
    def logo_file_name(self) -> str:
        return "logo.png"

    def settings(self) -> dict:
        return {name: field.to_host() for name, field in _MODULE_SETTINGS.items()}

    def test_connection(self, settings: dict) -> None:
        validate_connection(ConnectionSettings.model_validate(settings), transport=self.transport)

    def notification_settings(self) -> dict:
        return {name: field.to_host() for name, field in _NOTIFICATION_SETTINGS.items()}

    def get_dynamic_field(self, field_name: str, settings: dict) -> dict:
        options = list_channels(
            field_name,
            ConnectionSettings.model_validate(settings),
            transport=self.transport,
        )
        return {"values": [option.to_host() for option in options]}

    def send_notification(
        self,
        notification: NotificationEvent,
        module_settings: dict,
        notification_settings: dict,
    ) -> None:
        selection = ChannelSelection.parse(notification_settings.get(CHANNEL_FIELD))
        dispatch_notification(
            ConnectionSettings.model_validate(module_settings),
            selection,
            notification,
            transport=self.transport,
        )
