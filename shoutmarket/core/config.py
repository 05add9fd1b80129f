"""Application configuration"""

from decimal import Decimal
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Shoutmarket"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "Personalized shoutout marketplace"

    # Security
    SECRET_KEY: str = Field(..., env="SECRET_KEY")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7, env="ACCESS_TOKEN_EXPIRE_MINUTES")  # 7 days
    ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = Field(default=12, env="BCRYPT_ROUNDS")

    # Database
    DATABASE_URL: str = Field(..., env="DATABASE_URL")

    # Redis
    REDIS_URL: str = Field(default="redis://localhost:6379", env="REDIS_URL")

    # NOWPayments
    NOWPAYMENTS_API_KEY: str = Field(default="", env="NOWPAYMENTS_API_KEY")
    NOWPAYMENTS_API_URL: str = Field(default="https://api.nowpayments.io/v1", env="NOWPAYMENTS_API_URL")
    NOWPAYMENTS_PAY_CURRENCY: str = Field(default="btc", env="NOWPAYMENTS_PAY_CURRENCY")

    # Outbound provider calls
    PROVIDER_TIMEOUT_SECONDS: float = Field(default=15.0, env="PROVIDER_TIMEOUT_SECONDS")
    PROVIDER_MAX_RETRIES: int = Field(default=2, env="PROVIDER_MAX_RETRIES")
    PROVIDER_RETRY_BACKOFF_SECONDS: float = Field(default=0.5, env="PROVIDER_RETRY_BACKOFF_SECONDS")

    # Cloudflare Turnstile
    TURNSTILE_SECRET_KEY: Optional[str] = Field(default=None, env="TURNSTILE_SECRET_KEY")
    TURNSTILE_VERIFY_URL: str = Field(
        default="https://challenges.cloudflare.com/turnstile/v0/siteverify",
        env="TURNSTILE_VERIFY_URL"
    )

    # MinIO File Storage
    MINIO_ENDPOINT: str = Field(default="localhost:9000", env="MINIO_ENDPOINT")
    MINIO_ACCESS_KEY: str = Field(..., env="MINIO_ACCESS_KEY")
    MINIO_SECRET_KEY: str = Field(..., env="MINIO_SECRET_KEY")
    MINIO_BUCKET_NAME: str = Field(..., env="MINIO_BUCKET_NAME")
    MINIO_SECURE: bool = Field(default=False, env="MINIO_SECURE")  # Use HTTPS
    MINIO_REGION: str = Field(default="us-east-1", env="MINIO_REGION")  # avoids a region lookup per presign
    SIGNED_URL_TTL_SECONDS: int = Field(default=3600, env="SIGNED_URL_TTL_SECONDS")

    # CORS
    ALLOWED_HOSTS: list[str] = Field(default=["http://localhost:3000"], env="ALLOWED_HOSTS")

    # Application URLs
    FRONTEND_URL: str = Field(default="http://localhost:3000", env="FRONTEND_URL")
    BACKEND_URL: str = Field(default="http://localhost:8000", env="BACKEND_URL")

    # Marketplace rules
    DEFAULT_COMMISSION_RATE: Decimal = Field(default=Decimal("15.00"), env="DEFAULT_COMMISSION_RATE")
    MIN_WITHDRAWAL_AMOUNT: Decimal = Field(default=Decimal("10.00"), env="MIN_WITHDRAWAL_AMOUNT")

    # Activity log retention
    ACTIVITY_LOG_RETENTION_DAYS: int = Field(default=30, env="ACTIVITY_LOG_RETENTION_DAYS")
    ACTIVITY_LOG_MAX_ENTRIES: int = Field(default=10000, env="ACTIVITY_LOG_MAX_ENTRIES")

    # Development
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")
    DEBUG: bool = Field(default=False, env="DEBUG")
    TESTING: bool = Field(default=False, env="TESTING")
    ENVIRONMENT: str = Field(default="development", env="ENVIRONMENT")

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
