"""Configuration management using python-dotenv."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from finnolan.domain.exceptions import ConfigurationError

# Load .env file from project root
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

# Environment variable backing each provider secret
SECRET_ENV_VARS = {
    "gnews_api_key": "GNEWS_API_KEY",
    "llm_api_key": "LOVABLE_API_KEY",
    "google_tts_api_key": "GOOGLE_CLOUD_API_KEY",
    "resend_api_key": "RESEND_API_KEY",
    "supabase_url": "SUPABASE_URL",
    "supabase_service_role_key": "SUPABASE_SERVICE_ROLE_KEY",
}


class Settings(BaseModel):
    """Process-wide configuration, built once at startup and injected."""
    model_config = ConfigDict(frozen=True)

    gnews_api_key: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_base_url: str = "https://ai.gateway.lovable.dev/v1"
    llm_model: str = "google/gemini-2.5-flash"
    llm_fast_model: str = "google/gemini-2.5-flash-lite"
    google_tts_api_key: Optional[str] = None
    resend_api_key: Optional[str] = None
    alert_sender: str = "FINNOLAN Alerts <onboarding@resend.dev>"
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None

    log_level: str = "INFO"
    http_timeout: float = 20.0
    retry_attempts: int = 1
    retry_backoff: float = 1.0
    news_max_articles: int = 10
    article_char_limit: int = 15000
    alert_cooldown_minutes: int = 60

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the process environment."""
        values = {
            field: os.getenv(env_var) or None
            for field, env_var in SECRET_ENV_VARS.items()
        }
        values.update(
            llm_base_url=os.getenv("LLM_BASE_URL", cls.model_fields["llm_base_url"].default),
            llm_model=os.getenv("LLM_MODEL", cls.model_fields["llm_model"].default),
            llm_fast_model=os.getenv("LLM_FAST_MODEL", cls.model_fields["llm_fast_model"].default),
            alert_sender=os.getenv("ALERT_SENDER", cls.model_fields["alert_sender"].default),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "20")),
            retry_attempts=int(os.getenv("RETRY_ATTEMPTS", "1")),
            retry_backoff=float(os.getenv("RETRY_BACKOFF", "1.0")),
            news_max_articles=int(os.getenv("NEWS_MAX_ARTICLES", "10")),
            article_char_limit=int(os.getenv("ARTICLE_CHAR_LIMIT", "15000")),
            alert_cooldown_minutes=int(os.getenv("ALERT_COOLDOWN_MINUTES", "60")),
        )
        return cls(**values)

    def require(self, field: str) -> str:
        """Return a secret or raise ConfigurationError naming its env var."""
        value = getattr(self, field)
        if not value:
            env_var = SECRET_ENV_VARS.get(field, field.upper())
            raise ConfigurationError(f"{env_var} is not configured")
        return value

    def configured(self) -> dict:
        """Map of provider secret -> whether it is set."""
        return {field: bool(getattr(self, field)) for field in SECRET_ENV_VARS}
