from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Hospital Management System"
    VERSION: str = "2.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    LOG_LEVEL: str = "INFO"

    # Database - any SQLAlchemy URL; SQLite file by default, PostgreSQL/MySQL in production
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./hospital.db"
    )
    TEST_DATABASE_URL: str = os.getenv(
        "TEST_DATABASE_URL",
        "sqlite://"
    )

    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Redis (rate limiting of the credential endpoints)
    REDIS_URL: str = "redis://localhost:6379"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_MAX_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SECONDS: int = 3600

    # Seed data loaded on startup (wards, pharmacy catalogue, bootstrap admin)
    SEED_ON_STARTUP: bool = True
    ADMIN_USER_ID: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # CORS / hosts
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173", "http://testserver"]
    ALLOWED_HOSTS: List[str] = ["localhost", "127.0.0.1", "*.localhost", "testserver"]

    @property
    def get_database_url(self):
        """Return the appropriate database URL based on if we're testing"""
        if self.TESTING:
            return self.TEST_DATABASE_URL
        return self.DATABASE_URL

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

# Create settings instance
settings = Settings()
