from pydantic import BaseModel, BeforeValidator, Field
from typing import Annotated, Any, Dict, Optional
from utils.form_templates import to_text

SENT_MESSAGE = "Email notification sent successfully"


def scalar_to_text(value: Any) -> Any:
    # 数値や真偽値もそのまま文字列として扱う（オブジェクトや配列は検証エラー）
    if value is None or isinstance(value, (dict, list)):
        return value
    return to_text(value)


ScalarText = Annotated[Optional[str], BeforeValidator(scalar_to_text)]


class NotificationRequest(BaseModel):
    formType: ScalarText = ""
    formData: Optional[Dict[str, Any]] = Field(default_factory=dict)
    submissionTime: ScalarText = ""  # 表示用のみ、解析しない


class NotificationResult(BaseModel):
    success: bool = True
    messageId: Optional[str] = None
    message: str = SENT_MESSAGE
