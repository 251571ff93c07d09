from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

RECAPTCHA_VERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"


# ================== SETTINGS ==================
class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./bookings.db"

    MAIL_USERNAME: str
    MAIL_PASSWORD: str
    MAIL_FROM: str
    MAIL_FROM_NAME: str = "Lotus Cabs Booking"
    MAIL_SERVER: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_SUPPRESS_SEND: bool = False
    OPERATOR_EMAIL: Optional[str] = None

    RECAPTCHA_SECRET: str
    RECAPTCHA_VERIFY_URL: str = RECAPTCHA_VERIFY_URL
    RECAPTCHA_TIMEOUT: Optional[float] = None

    RATE_LIMIT_MAX: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # what the client hears when the booking is stored but the email fails
    NOTIFY_FAILURE_POLICY: Literal["best_effort", "strict"] = "best_effort"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )

    @property
    def operator_email(self) -> str:
        return self.OPERATOR_EMAIL or self.MAIL_USERNAME
