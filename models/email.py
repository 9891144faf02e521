from pydantic import BaseModel
from typing import List, Optional
from bs4 import BeautifulSoup


class EmailAddress(BaseModel):
    email: str
    name: Optional[str] = None


class EmailMessage(BaseModel):
    """Brevo の送信APIに渡すトランザクションメール"""

    sender: EmailAddress
    to: List[EmailAddress]
    subject: str
    htmlContent: str
    textContent: Optional[str] = None

    @classmethod
    def notification(cls, sender: EmailAddress, recipient: EmailAddress, subject: str, html: str) -> "EmailMessage":
        """
        運営者宛ての通知メールを作成するメソッド

        Args:
            sender: 送信元
            recipient: 送信先（運営者の受信箱）
            subject: 件名
            html: HTML本文

        Returns:
            EmailMessage: HTML本文とプレーンテキスト本文を持つインスタンス
        """
        soup = BeautifulSoup(html, "html.parser")
        text = "\n".join(line.strip() for line in soup.get_text().splitlines() if line.strip())
        return cls(
            sender=sender,
            to=[recipient],
            subject=subject,
            htmlContent=html,
            textContent=text,
        )


class EmailResponse(BaseModel):
    messageId: Optional[str] = None
