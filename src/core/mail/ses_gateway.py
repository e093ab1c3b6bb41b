"""Amazon SES notification transport."""

import asyncio
import logging
from email.utils import formataddr
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.config import Config
from core.errors import NotificationDeliveryError
from core.models.notification import DeliveryReceipt, Recipient

from .interface import NotificationGateway

logger = logging.getLogger(__name__)


class SesNotificationGateway(NotificationGateway):
    def __init__(self, config: Config, ses_client: Any):
        self._client = ses_client
        self._source = formataddr((config.mail_sender_name, config.mail_sender_address))

    def _destination(self, recipient: Recipient) -> str:
        if recipient.name:
            return formataddr((recipient.name, recipient.address))
        return recipient.address

    async def send(self, recipient: Recipient, subject: str, html: str) -> DeliveryReceipt:
        # boto3 is synchronous; keep the event loop free for sibling sends.
        try:
            response = await asyncio.to_thread(
                self._client.send_email,
                Source=self._source,
                Destination={"ToAddresses": [self._destination(recipient)]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Html": {"Data": html, "Charset": "UTF-8"}},
                },
            )
        except (BotoCoreError, ClientError) as e:
            raise NotificationDeliveryError(f"SES rejected message to {recipient.address}: {e}") from e

        message_id = response["MessageId"]
        logger.info("Sent notification %s to %s", message_id, recipient.address)
        return DeliveryReceipt(recipient=recipient.address, message_id=message_id)
