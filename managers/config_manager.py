from functools import lru_cache
from typing import List, Optional
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """環境変数から読み込む実行時設定"""

    payment_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("payment_api_key", "STRIPE_RESTRICTED_KEY")
    )
    email_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("email_api_key", "BREVO_API_KEY")
    )
    log_level: str = "INFO"

    brevo_api_url: str = "https://api.brevo.com/v3/smtp/email"
    sender_name: str = "The Open Church Project"
    sender_email: str = "titanbusinesspros@gmail.com"
    recipient_name: str = "Titan Business Pros"
    recipient_email: str = "titanbusinesspros@gmail.com"

    payment_description: str = "Donation to The Open Church Project"
    payment_project: str = "open-church-project"

    model_config = SettingsConfigDict(extra="ignore")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    def missing_secrets(self) -> List[str]:
        missing = []
        if not self.payment_api_key:
            missing.append("STRIPE_RESTRICTED_KEY")
        if not self.email_api_key:
            missing.append("BREVO_API_KEY")
        return missing


@lru_cache
def get_settings() -> Settings:
    return Settings()
