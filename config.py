"""
Security Alert Classifier - Configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    BASE_DIR: Path = Path(__file__).parent
    DATA_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "data")
    LOG_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "logs")
    API_KEY_FILE: Path = Field(
        default_factory=lambda: Path(__file__).parent / "data" / "openai_api_key",
        description="File holding a remembered API key"
    )

    # API Keys
    OPENAI_API_KEY: str = Field(default="", description="External model API key")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # LLM
    LLM_PROVIDER: str = Field(default="openai")
    LLM_MODEL: str = Field(default="gpt-4o-mini")
    LLM_BASE_URL: str = Field(default="https://api.openai.com/v1")
    LLM_TIMEOUT_SECONDS: float = Field(default=8.0, description="Per-item request timeout")
    LLM_VERIFY_SSL: bool = Field(default=True)
    LLM_MAX_CONCURRENCY: int = Field(default=8)

    # Alerts
    USER_LOCATION: str = Field(default="תל אביב-יפו")
    REFRESH_INTERVAL_SECONDS: int = Field(default=60)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def ensure_directories():
    """Ensure all required directories exist."""
    dirs = [
        settings.DATA_DIR,
        settings.LOG_DIR,
    ]
    for dir_path in dirs:
        dir_path.mkdir(parents=True, exist_ok=True)
