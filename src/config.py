"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "syntria-api"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8787

    cors_origins: list[str] = ["*"]

    # Generative AI provider. Only presence of the key is ever logged.
    gemini_api_key: str | None = None
    openai_api_key: str | None = None
    gemini_model: str = "gemini-2.0-flash-exp"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    ai_timeout_seconds: float = 20.0
    ai_max_retries: int = 1
    ai_structured_output: bool = True

    # Automation webhooks (n8n or similar)
    automation_webhook_url: str | None = None
    strategy_webhook_url: str | None = None
    webhook_timeout_seconds: float = 15.0

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @property
    def ai_provider(self) -> str:
        if self.gemini_api_key:
            return "gemini"
        if self.openai_api_key:
            return "openai"
        return "none"


settings = Settings()
