"""Notification delivery abstraction layer."""

from core.mail.interface import NotificationGateway, get_notification_gateway
from core.mail.log_gateway import LogNotificationGateway
from core.mail.ses_gateway import SesNotificationGateway

__all__ = ["LogNotificationGateway", "NotificationGateway", "SesNotificationGateway", "get_notification_gateway"]
