"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    jwt_secret: str = "change-me"
    jwt_expires_hours: int = 24
    frontend_url: str = "http://localhost:3000"
    tracking_url: str = "https://theordnery.com/track"
    store_name: str = "The Ordnery"
    currency: str = "PKR"
    support_email: str = "support@theordnery.com"
    email_host: str | None = None
    email_port: int = 587
    email_user: str | None = None
    email_pass: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            environment=(os.getenv("PROTEAN_ENV") or os.getenv("ENV") or "development").lower(),
            jwt_secret=os.getenv("JWT_SECRET", cls.jwt_secret),
            jwt_expires_hours=int(os.getenv("JWT_EXPIRES_HOURS", cls.jwt_expires_hours)),
            frontend_url=os.getenv("FRONTEND_URL", cls.frontend_url).rstrip("/"),
            tracking_url=os.getenv("TRACKING_URL", cls.tracking_url).rstrip("/"),
            store_name=os.getenv("STORE_NAME", cls.store_name),
            currency=os.getenv("CURRENCY", cls.currency),
            support_email=os.getenv("SUPPORT_EMAIL", cls.support_email),
            email_host=os.getenv("EMAIL_HOST") or None,
            email_port=int(os.getenv("EMAIL_PORT", cls.email_port)),
            email_user=os.getenv("EMAIL_USER") or None,
            email_pass=os.getenv("EMAIL_PASS") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, read once from the environment."""
    return Settings.from_env()
