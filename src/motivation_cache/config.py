import os
from dataclasses import dataclass
from functools import lru_cache

import pytz
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Generation
    message_provider: str = os.getenv("MESSAGE_PROVIDER", "openai").lower()
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    generation_temperature: float = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
    generation_timeout_seconds: float = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "30"))

    # Ollama
    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "llama3.2")

    # Cache
    reference_timezone: str = os.getenv("REFERENCE_TIMEZONE", "America/Guayaquil")
    staleness_window_hours: float = float(os.getenv("STALENESS_WINDOW_HOURS", "1"))
    change_threshold: float = float(os.getenv("CHANGE_THRESHOLD", "0.5"))

    # Identity
    anonymous_user_id: str = os.getenv("ANONYMOUS_USER_ID", "anon")
    share_anonymous_bucket: bool = os.getenv("SHARE_ANONYMOUS_BUCKET", "true").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def staleness_window_ms(self) -> int:
        """Staleness window expressed in epoch milliseconds."""
        return int(self.staleness_window_hours * 3_600_000)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.message_provider not in ("openai", "ollama"):
            raise ValueError(
                f"MESSAGE_PROVIDER must be 'openai' or 'ollama', got {self.message_provider!r}"
            )

        if self.staleness_window_hours <= 0:
            raise ValueError("STALENESS_WINDOW_HOURS must be greater than 0")

        if self.change_threshold < 0:
            raise ValueError("CHANGE_THRESHOLD must not be negative")

        if self.generation_timeout_seconds < 0:
            raise ValueError("GENERATION_TIMEOUT_SECONDS must not be negative (0 disables it)")

        if self.reference_timezone not in pytz.all_timezones_set:
            raise ValueError(f"Unknown REFERENCE_TIMEZONE: {self.reference_timezone}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
