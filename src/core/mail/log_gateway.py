"""Log-only notification transport for local development."""

import logging
import uuid

from core.config import Config
from core.models.notification import DeliveryReceipt, Recipient

from .interface import NotificationGateway

logger = logging.getLogger(__name__)


class LogNotificationGateway(NotificationGateway):
    """Writes each message to the log instead of delivering it."""

    def __init__(self, config: Config):
        self._sender = config.mail_sender_address

    async def send(self, recipient: Recipient, subject: str, html: str) -> DeliveryReceipt:
        message_id = f"local-{uuid.uuid4()}"
        logger.info(
            "Notification %s from %s to %s: %s\n%s",
            message_id,
            self._sender,
            recipient.address,
            subject,
            html,
        )
        return DeliveryReceipt(recipient=recipient.address, message_id=message_id)
