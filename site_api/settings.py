from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    root_path: str = ""

    debug: bool = False
    reload: bool = False

    allowed_origin: str = "https://www.jonathanlipson.com"

    turnstile_secret: str | None = None
    turnstile_verify_url: str = "https://challenges.cloudflare.com/turnstile/v0/siteverify"

    smtp_host: str = "smtp.zoho.com"
    smtp_port: int = 465
    smtp_user: str = ""
    smtp_pass: str = ""
    smtp_tls: bool = True

    from_email: str | None = None
    dest_email: str | None = None

    asset_cache_enabled: bool = False
    asset_origin: str | None = None

    sentry_dsn: str | None = None
    sentry_environment: str = "test"

    @model_validator(mode="after")
    def _default_asset_origin(self) -> "Settings":
        if not self.asset_origin:
            self.asset_origin = self.allowed_origin
        return self

    @property
    def mail_sender(self) -> str:
        return self.from_email or self.smtp_user

    @property
    def mail_recipient(self) -> str:
        return self.dest_email or self.smtp_user

    @property
    def turnstile_enabled(self) -> bool:
        return bool(self.turnstile_secret)


settings = Settings()
