"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/todo.db"
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "development"
    log_level: str = "INFO"

    # Built web client, served for non-API paths when set
    static_dir: str | None = None

    # JWT Configuration
    jwt_secret_key: str = "change-me-in-production-use-env-var"
    jwt_algorithm: str = "HS256"
    # Tokens carry no exp claim unless this is set
    jwt_expiry_days: int | None = None

    # Bcrypt work factor (higher = more secure but slower)
    # Tests use 4 for faster execution
    bcrypt_work_factor: int = 12

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()
