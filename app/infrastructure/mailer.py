"""HTTP mail API client used to deliver password-reset links.

The message body carries a plaintext reset link, so only the recipient and
subject are ever logged.
"""

from typing import Optional

import httpx
import structlog

from app.config import get_settings
from app.domain.schemas.notification import EmailMessage

settings = get_settings()
logger = structlog.get_logger(__name__)


class MailDeliveryError(Exception):
    """The mail API did not accept the message."""


class EmailClient:
    """Thin async client for a JSON mail-sending API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.MAIL_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.MAIL_API_KEY
        self.sender = sender or settings.MAIL_FROM
        self.timeout = settings.MAIL_TIMEOUT_SECONDS
        self.transport = transport
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def send(self, message: EmailMessage) -> None:
        """Send one message. Raises MailDeliveryError on any failure."""
        if not self.base_url:
            raise MailDeliveryError("Mail API is not configured")

        payload = {
            "from": self.sender,
            "to": message.recipient,
            "subject": message.subject,
            "text": message.body,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/send", json=payload, headers=self.headers
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Mail API rejected message",
                recipient=message.recipient,
                subject=message.subject,
                status_code=e.response.status_code,
            )
            raise MailDeliveryError(f"Mail API returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(
                "Mail API unreachable",
                recipient=message.recipient,
                subject=message.subject,
                error=type(e).__name__,
            )
            raise MailDeliveryError("Mail API unreachable") from e

        logger.info("Email sent", recipient=message.recipient, subject=message.subject)
