"""Base types for the Mattermost integration."""

from dataclasses import dataclass, field
from typing import Any, Optional

# Name of the per-rule dynamic field holding the channel selection
CHANNEL_FIELD = "channelId"

# The host UI stores selections as "<channel id>|<display label>"
SELECTION_DELIMITER = "|"


@dataclass
class ChannelOption:
    """A selectable channel the bot account is a member of."""
    id: str
    name: str
    description: str = ""

    def to_host(self) -> dict:
        return {"id": self.id, "name": self.name, "description": self.description}


@dataclass
class NotificationAttribute:
    label: str
    value: str


@dataclass
class NotificationEvent:
    """A triggered host notification."""
    title: str
    message: str
    url: Optional[str] = None
    attributes: list[NotificationAttribute] = field(default_factory=list)


@dataclass
class ChannelSelection:
    """Channel chosen for a notification rule, as stored by the host."""
    raw: str = ""

    @classmethod
    def parse(cls, value: Any) -> "ChannelSelection":
        return cls(raw="" if value is None else str(value))

    @property
    def channel_id(self) -> str:
        return self.raw.split(SELECTION_DELIMITER, 1)[0]

    @property
    def label(self) -> str:
        _, _, label = self.raw.partition(SELECTION_DELIMITER)
        return label

    def is_empty(self) -> bool:
        return not self.channel_id.strip()
