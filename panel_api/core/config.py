"""Application configuration and settings"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional
import secrets


class Settings(BaseSettings):
    """Application settings and configuration"""

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env")

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Panel User API"
    VERSION: str = "1.0.0"
    DESCRIPTION: str = "User management service for the panel (search, create, read, update, delete)"

    # Security
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Database
    DATABASE_URL: str = "sqlite:///./panel.db"

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Users
    DEFAULT_USER_SCOPES: str = "users.view"
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_EMAIL: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    ADMIN_SCOPES: str = "users.view users.edit"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"


settings = Settings()
