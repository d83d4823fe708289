"""
SoYummy Configuration Settings
Manages all application configuration with environment-based overrides
"""

from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Annotated, List


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Application
    APP_NAME: str = "SoYummy"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)
    VERSION: str = "1.0.0"

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    BASE_URL: str = Field(default="http://localhost:8000")

    # Security
    JWT_SECRET_KEY: str = Field(default="dev-jwt-secret-change-in-production")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_TOKEN_EXPIRE_HOURS: int = Field(default=23)
    BCRYPT_ROUNDS: int = Field(default=10)

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
        ]
    )

    # Database
    MONGODB_URL: str = Field(default="mongodb://localhost:27017")
    MONGODB_DB: str = Field(default="soyummy")
    MONGODB_TIMEOUT_MS: int = Field(default=5000)

    # Pagination
    DEFAULT_PAGE_LIMIT: int = Field(default=8)
    MAX_PAGE_LIMIT: int = Field(default=100)

    # Avatar storage
    CLOUDINARY_CLOUD_NAME: str = Field(default="")
    CLOUDINARY_API_KEY: str = Field(default="")
    CLOUDINARY_API_SECRET: str = Field(default="")
    CLOUDINARY_AVATAR_PRESET: str = Field(default="avatars")
    MAX_FILE_SIZE: int = Field(default=5 * 1024 * 1024)  # 5MB
    ALLOWED_FILE_TYPES: Annotated[List[str], NoDecode] = Field(
        default=["image/jpeg", "image/png", "image/webp", "image/gif"]
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Email Configuration
    SMTP_SERVER: str = Field(default="smtp.meta.ua")
    SMTP_PORT: int = Field(default=465)
    SMTP_USERNAME: str = Field(default="")
    SMTP_PASSWORD: str = Field(default="")
    FROM_EMAIL: str = Field(default="noreply@soyummy.app")
    FROM_NAME: str = Field(default="So Yummy")

    @field_validator("CORS_ORIGINS", "ALLOWED_FILE_TYPES", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


# Environment-specific configurations
if settings.is_production:
    settings.DEBUG = False
    settings.LOG_LEVEL = "WARNING"

elif settings.is_development:
    settings.DEBUG = True
    settings.LOG_LEVEL = "DEBUG"
