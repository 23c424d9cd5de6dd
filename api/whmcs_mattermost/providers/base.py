"""Base notification provider interface expected by the host."""

from abc import ABC, abstractmethod

from whmcs_mattermost.mattermost import NotificationEvent


class NotificationProvider(ABC):
    """
    Common interface for all notification providers.

    The host renders ``settings()`` as the module configuration form and calls
    ``test_connection()`` before saving it. ``notification_settings()`` is shown
    per notification rule; fields of type ``dynamic`` are resolved through
    ``get_dynamic_field()``. Failures are raised as NotificationError and shown
    to the administrator.
    """

    @property
    @abstractmethod
    def display_name(self) -> str:
        ...

    @property
    @abstractmethod
    def logo_file_name(self) -> str:
        ...

    @abstractmethod
    def settings(self) -> dict:
        """Module settings form, keyed by setting name."""
        ...

    @abstractmethod
    def test_connection(self, settings: dict) -> None:
        ...

    @abstractmethod
    def notification_settings(self) -> dict:
        """Per-rule settings form, keyed by setting name."""
        ...

    @abstractmethod
    def get_dynamic_field(self, field_name: str, settings: dict) -> dict:
        """Options for a dynamic field, as ``{"values": [...]}``."""
        ...

    @abstractmethod
    def send_notification(
        self,
        notification: NotificationEvent,
        module_settings: dict,
        notification_settings: dict,
    ) -> None:
        ...
