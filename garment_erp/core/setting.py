from typing import List
from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Application settings class.
    Reads variables from .env file automatically.
    """

    # API Config
    PROJECT_NAME: str = "Garment ERP"
    API_V1_STR: str = "/api"

    # MongoDB Config
    MONGODB_URL: AnyUrl
    DATABASE_NAME: str

    # Security Config
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    SESSION_COOKIE_NAME: str = "session"
    SESSION_COOKIE_SECURE: bool = False

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Asia/Dhaka"

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379

    # Email Configuration
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = "noreply@example.com"
    MAIL_PORT: int = 587
    MAIL_SERVER: str = "localhost"
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False
    MAIL_FROM_NAME: str = "Garment ERP"
    REPORT_RECIPIENTS: List[str] = []

    # Pydantic V2 Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )
# It creates the 'settings' object that main.py uses.
config = Settings()
