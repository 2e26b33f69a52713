from __future__ import annotations

from src.config.settings import Settings
from src.infrastructure.push.channel import LoggingDeliveryChannel, PushDeliveryChannel
from src.infrastructure.push.fcm import FCMClient
from src.infrastructure.push.fcm_v1 import FCMv1Client
from src.infrastructure.push.models import DeliveryChannel


def build_delivery_channel(settings: Settings) -> DeliveryChannel:
    """Prefer FCM HTTP v1, then the legacy server key, else log only."""
    sa_json = settings.get_fcm_service_account_json()
    if settings.fcm_project_id and sa_json:
        sender = FCMv1Client(project_id=settings.fcm_project_id, service_account_json=sa_json)
        return PushDeliveryChannel(
            sender,
            attempts=settings.push_retry_attempts,
            delay=settings.push_retry_delay_seconds,
        )
    if settings.fcm_server_key:
        sender = FCMClient(settings.fcm_server_key.get_secret_value())
        return PushDeliveryChannel(
            sender,
            attempts=settings.push_retry_attempts,
            delay=settings.push_retry_delay_seconds,
        )
    return LoggingDeliveryChannel()
