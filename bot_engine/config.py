from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Webhook integration
    WEBHOOK_TIMEOUT: float = 10.0
    WEBHOOK_USER_AGENT: str = "bot-engine"

    # Error bodies of failed webhook calls are truncated to this many characters when logged
    WEBHOOK_MAX_RESPONSE_LOG_CHARS: int = 500

    # Loads from a .env file in the root directory
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

# Singleton instance
settings = Settings()
