"""
Configuration settings for the Lesson Assistant.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # === Application ===
    APP_NAME: str = "Lesson Assistant"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    
    # === Gemini Configuration ===
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-2.5-flash-preview-05-20"
    GEMINI_API_KEY: str = ""  # Injected at runtime, never committed
    REQUEST_TIMEOUT: float = 30.0  # seconds, per attempt
    
    # === Retry Policy ===
    MAX_ATTEMPTS: int = 5
    BASE_DELAY_MS: int = 1000
    JITTER_MAX_MS: int = 1000
    RETRYABLE_STATUS_CODES: list[int] = [429]  # Too Many Requests
    RETRY_SERVER_ERRORS: bool = True  # 5xx treated as transient
    
    # === Redis (progress store) ===
    REDIS_URL: str = "redis://redis:6379/0"
    REDIS_MAX_CONNECTIONS: int = 20
    PROGRESS_KEY_PREFIX: str = "lesson-assistant"
    
    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
