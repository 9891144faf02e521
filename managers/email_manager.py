from typing import Any, Dict
import logging
import requests
from managers.config_manager import Settings
from models.email import EmailMessage, EmailResponse
from models.errors import UpstreamError

logger = logging.getLogger(__name__)


class EmailManager:
    """Brevo トランザクションメールAPIのクライアント（1回のみ送信、リトライなし）"""

    def __init__(self, settings: Settings):
        self.api_url = settings.brevo_api_url
        self.api_key = settings.email_api_key

    def _headers(self) -> Dict[str, Any]:
        return {
            "accept": "application/json",
            "api-key": self.api_key,
            "content-type": "application/json",
        }

    def send(self, message: EmailMessage) -> EmailResponse:
        response = requests.post(
            self.api_url,
            headers=self._headers(),
            json=message.model_dump(exclude_none=True),
        )

        if not response.ok:
            logger.error(
                "Brevo API error: status=%s reason=%s body=%s",
                response.status_code,
                response.reason,
                response.text,
            )
            raise UpstreamError(
                "Failed to send email notification",
                upstream_status=response.status_code,
                details=response.text,
            )

        return EmailResponse(**response.json())
