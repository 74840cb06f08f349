from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://localhost:5432/salesdesk"
    default_tz: str = "America/Sao_Paulo"  # Business day boundaries for "today" and sale dates
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Auth
    token_ttl_hours: int = 24
    bcrypt_rounds: int = 10

    # Fallback daily target for sellers created without one
    default_daily_target: float = 500.0

    # Optional first manager, created at startup when both are set
    bootstrap_manager_name: str | None = None
    bootstrap_manager_password: str | None = None

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
