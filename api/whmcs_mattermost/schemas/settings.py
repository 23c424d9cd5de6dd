"""Pydantic schemas for host-supplied settings and provider form fields."""

import re
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Module connection settings
# ---------------------------------------------------------------------------

class ConnectionSettings(BaseModel):
    """
    Connection settings stored by the host for this provider.

    Accepts either the host keys (``mattermost_url``, ...) or the field names.
    """

    domain: str = Field("", alias="mattermost_url")
    bot_username: str = Field("", alias="mattermost_bot_username")
    bot_token: str = Field("", alias="mattermost_bot_access_token", repr=False)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("domain", "bot_username", "bot_token", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> str:
        if v is None:
            return ""
        return str(v).strip()

    @field_validator("domain")
    @classmethod
    def _bare_hostname(cls, v: str) -> str:
        # The form asks for a hostname, but pasted URLs are common
        return _SCHEME_RE.sub("", v).strip("/")

    def is_complete(self) -> bool:
        return bool(self.domain and self.bot_username and self.bot_token)

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}/api/v4/"


# ---------------------------------------------------------------------------
# Form field declarations (rendered by the host UI)
# ---------------------------------------------------------------------------

class SettingField(BaseModel):
    friendly_name: str = Field(..., alias="FriendlyName")
    type: str = Field("text", alias="Type")
    description: Optional[str] = Field(None, alias="Description")
    placeholder: Optional[str] = Field(None, alias="Placeholder")
    required: Optional[bool] = Field(None, alias="Required")

    model_config = {"populate_by_name": True}

    def to_host(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Bridge request bodies
# ---------------------------------------------------------------------------

class AttributeIn(BaseModel):
    label: str
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _stringify(cls, v: Any) -> str:
        return "" if v is None else str(v)


class NotificationIn(BaseModel):
    title: str = Field(..., description="Notification title")
    url: Optional[str] = Field(None, description="Link back to the host record")
    message: str = Field("", description="Message body")
    attributes: list[AttributeIn] = Field(default=[], description="Ordered label/value pairs")


class NotificationDelivery(BaseModel):
    settings: dict = Field(..., description="Stored module settings")
    notification_settings: dict = Field(default={}, description="Settings of the triggered rule")
    notification: NotificationIn
