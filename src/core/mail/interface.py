from abc import ABC, abstractmethod

from core.models.notification import DeliveryReceipt, Recipient


class NotificationGateway(ABC):
    @abstractmethod
    async def send(self, recipient: Recipient, subject: str, html: str) -> DeliveryReceipt:
        """Deliver one message to one recipient.

        Raises NotificationDeliveryError when the transport rejects the message.
        """


def get_notification_gateway() -> NotificationGateway:
    from core.config import get_config

    config = get_config()
    if config.mail_transport == "ses":
        from core.clients import get_ses_client
        from core.mail.ses_gateway import SesNotificationGateway

        return SesNotificationGateway(config, get_ses_client())

    from core.mail.log_gateway import LogNotificationGateway

    return LogNotificationGateway(config)
