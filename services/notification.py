from typing import Any
import logging
import pydantic
from managers.config_manager import Settings
from managers.email_manager import EmailManager
from models.email import EmailAddress, EmailMessage
from models.errors import ConfigurationError, HandlerError, InternalError, ValidationError
from models.notification import NotificationRequest, NotificationResult
from utils.form_templates import render_submission
from utils.http import parse_json

logger = logging.getLogger(__name__)


class NotificationEmailHandler:
    """フォーム送信内容を通知メールに整形し、Brevo経由で運営者に1回だけ送信する"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def handle(self, body: bytes) -> NotificationResult:
        try:
            data = parse_json(body)
            self._check_configuration()
            request = self._validate(data)
            message = self.build_message(request)
            logger.info("Sending email notification: formType=%s subject=%s", request.formType, message.subject)
            response = EmailManager(self.settings).send(message)
            logger.info("Email sent successfully: %s", response.messageId)
            return NotificationResult(messageId=response.messageId)
        except HandlerError:
            raise
        except Exception as e:
            logger.exception("Error in send-notification-email handler")
            raise InternalError(str(e)) from e

    def _check_configuration(self):
        if not self.settings.email_api_key:
            logger.error("BREVO_API_KEY not found in environment variables")
            raise ConfigurationError("Email service configuration error")

    def _validate(self, data: Any) -> NotificationRequest:
        try:
            return NotificationRequest.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid notification request", details=str(e)) from e

    def build_message(self, request: NotificationRequest) -> EmailMessage:
        subject, html = render_submission(request.formType, request.formData, request.submissionTime)
        return EmailMessage.notification(
            sender=EmailAddress(name=self.settings.sender_name, email=self.settings.sender_email),
            recipient=EmailAddress(name=self.settings.recipient_name, email=self.settings.recipient_email),
            subject=subject,
            html=html,
        )
