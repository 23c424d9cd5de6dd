"""Routes exposing the Mattermost provider to the host."""

from fastapi import APIRouter, Depends

from whmcs_mattermost.auth import require_api_key
from whmcs_mattermost.mattermost import NotificationAttribute, NotificationEvent
from whmcs_mattermost.providers.base import NotificationProvider
from whmcs_mattermost.providers.mattermost import MattermostProvider
from whmcs_mattermost.response import single_response
from whmcs_mattermost.schemas.settings import NotificationDelivery, NotificationIn

router = APIRouter(
    prefix="/provider",
    tags=["provider"],
    dependencies=[Depends(require_api_key)],
)


def get_provider() -> NotificationProvider:
    return MattermostProvider()


def _to_event(notification: NotificationIn) -> NotificationEvent:
    return NotificationEvent(
        title=notification.title,
        url=notification.url,
        message=notification.message,
        attributes=[
            NotificationAttribute(label=attr.label, value=attr.value)
            for attr in notification.attributes
        ],
    )


@router.get("", summary="Describe the provider and its settings forms")
def describe_provider(provider: NotificationProvider = Depends(get_provider)):
    return single_response({
        "name": provider.display_name,
        "logo": provider.logo_file_name,
        "settings": provider.settings(),
        "notification_settings": provider.notification_settings(),
    })


@router.post("/test-connection", summary="Validate module settings")
def test_connection(
    settings: dict,
    provider: NotificationProvider = Depends(get_provider),
):
    provider.test_connection(settings)
    return single_response({"ok": True})


@router.post("/dynamic-fields/{field_name}", summary="Resolve options for a dynamic field")
def dynamic_field(
    field_name: str,
    settings: dict,
    provider: NotificationProvider = Depends(get_provider),
):
    return single_response(provider.get_dynamic_field(field_name, settings))


@router.post("/notifications", summary="Deliver a triggered notification")
def send_notification(
    body: NotificationDelivery,
    provider: NotificationProvider = Depends(get_provider),
):
    provider.send_notification(
        _to_event(body.notification),
        body.settings,
        body.notification_settings,
    )
    return single_response({"delivered": True})
