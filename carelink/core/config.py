"""
Application configuration for MySQL deployments and local testing
"""
from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings"""

    # Project
    PROJECT_NAME: str = Field(default="CareLink API")
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="production")
    DEBUG: bool = Field(default=False)

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8081)

    # Security
    SECRET_KEY: str = Field(default="change-this-secret-key")
    ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)

    # MySQL database
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=3306)
    DB_NAME: str = Field(default="carelink")
    DB_USER: str = Field(default="carelink_user")
    DB_PASSWORD: str = Field(default="")
    DB_CHARSET: str = Field(default="utf8mb4")

    # Full SQLAlchemy URL, takes precedence over the DB_* fields
    DATABASE_URL: Optional[str] = Field(default=None)

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173"
        ]
    )

    # Analytics windows
    ANALYTICS_WINDOW_DAYS: int = Field(default=30)
    TREND_WINDOW_WEEKS: int = Field(default=12)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @property
    def database_url(self) -> str:
        """Build the database connection URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            f"?charset={self.DB_CHARSET}"
        )

    @property
    def is_production(self) -> bool:
        """Whether we are running in production"""
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings accessor"""
    return Settings()
