# services/payment.py
from typing import Any, Dict
import logging
import pydantic
import stripe
from managers.config_manager import Settings
from models.errors import ConfigurationError, HandlerError, InternalError, UpstreamError, ValidationError
from models.payment import PaymentRequest, PaymentResult
from utils.http import parse_json

logger = logging.getLogger(__name__)

MIN_AMOUNT_MESSAGE = "Minimum donation amount is $1.00"

# 1リクエストにつき送信は1回のみ（リトライ時の Idempotency-Key も付与されない）
stripe.max_network_retries = 0


class PaymentIntentHandler:
    """寄付リクエストを検証し、Stripeの支払いインテントを1回だけ作成する"""

    def __init__(self, settings: Settings):
        self.settings = settings

    def handle(self, body: bytes) -> PaymentResult:
        try:
            data = parse_json(body)
            self._check_configuration()
            payment = self._validate(data)
            params = self.build_params(payment)
            logger.info("Creating Stripe payment intent: amount=%s currency=%s", params["amount"], params["currency"])
            intent = self._create_intent(params)
            result = PaymentResult(
                client_secret=intent.client_secret,
                payment_intent_id=intent.id,
                amount=intent.amount,
            )
            logger.info("Payment intent created successfully: %s", result.payment_intent_id)
            return result
        except HandlerError:
            raise
        except Exception as e:
            logger.exception("Error in process-payment handler")
            raise InternalError(str(e)) from e

    def _check_configuration(self):
        if not self.settings.payment_api_key:
            logger.error("STRIPE_RESTRICTED_KEY not found in environment variables")
            raise ConfigurationError("Payment service configuration error")

    def _validate(self, data: Any) -> PaymentRequest:
        try:
            payment = PaymentRequest.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError("Invalid payment request", details=str(e)) from e

        if not payment.is_valid_amount():
            raise ValidationError(MIN_AMOUNT_MESSAGE)
        return payment

    def build_params(self, payment: PaymentRequest) -> Dict[str, Any]:
        # stripe ライブラリが form-urlencoded (automatic_payment_methods[enabled] 等) に変換する
        return {
            "amount": payment.amount,
            "currency": payment.resolved_currency(),
            "automatic_payment_methods": {"enabled": True},
            "description": self.settings.payment_description,
            "metadata": {
                "project": self.settings.payment_project,
                "donor_email": payment.resolved_donor_email(),
            },
        }

    def _create_intent(self, params: Dict[str, Any]):
        try:
            return stripe.PaymentIntent.create(api_key=self.settings.payment_api_key, **params)
        except stripe.StripeError as e:
            if e.http_status is None:
                # 接続エラーなどHTTPレスポンスがない場合
                raise
            logger.error(
                "Stripe API error: status=%s body=%s",
                e.http_status,
                e.http_body,
            )
            raise UpstreamError(
                "Failed to create payment intent",
                upstream_status=e.http_status,
                details=e.http_body if e.http_body is not None else str(e),
            ) from e
