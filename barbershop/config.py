# barbershop/config.py

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./barbershop.db"
    debug: bool = False  # echoes SQL
    log_level: str = "INFO"

    # JWT
    secret_key: str = "change-me-later"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 30

    # Google OAuth
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:8000/auth/google/callback"

    # Booking
    slot_interval_minutes: int = 30
    timezone: Optional[str] = None  # IANA name, server local time when unset
    placeholder_image_url: str = "/Barber2.jpg"
    seed_defaults: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
