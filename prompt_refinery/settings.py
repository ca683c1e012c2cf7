"""Application settings using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_prefix: str = "/api"
    cors_allow_origins: list[str] = ["*"]

    # Conversation guardrails
    max_message_length: int = 7000
    daily_generation_limit: int = 5

    # LLM
    llm_mode: str = "groq"
    llm_temperature: float = 0.7
    llm_system_prompt: str = "You are a helpful assistant."
    llm_timeout_seconds: float = 60.0

    # Groq (OpenAI-compatible chat completions)
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model: str = "llama-3.3-70b-versatile"

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Auth
    auth_provider: str = "jwt"  # "jwt" or "firebase"
    jwt_secret_key: str = "dev-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    firebase_credentials_path: str | None = None

    # Redis (optional, backs the usage counters when enabled)
    redis_url: str = "redis://localhost:6379/0"
    redis_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
