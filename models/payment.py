# models/payment.py
from pydantic import BaseModel
from typing import Optional

MIN_DONATION_AMOUNT = 100  # 最低寄付額（セント単位、$1.00）
DEFAULT_CURRENCY = "usd"
ANONYMOUS_DONOR = "anonymous"


class PaymentRequest(BaseModel):
    amount: Optional[int] = None  # 金額（最小通貨単位）
    currency: Optional[str] = None  # 通貨（未指定時はusd）
    donor_email: Optional[str] = None  # 寄付者のメールアドレス

    def is_valid_amount(self) -> bool:
        return bool(self.amount) and self.amount >= MIN_DONATION_AMOUNT

    def resolved_currency(self) -> str:
        return self.currency or DEFAULT_CURRENCY

    def resolved_donor_email(self) -> str:
        return self.donor_email or ANONYMOUS_DONOR


class PaymentResult(BaseModel):
    success: bool = True
    client_secret: str  # フロントエンドで支払いを完了するために必要
    payment_intent_id: str  # Stripe Payment Intent ID
    amount: int
