from pydantic_settings import BaseSettings, SettingsConfigDict

from errorkit.errors.messages import DEFAULT_ERROR_TITLE, STICKY_MODE


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "errorkit"
    db_username: str = "errorkit"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    audit_sink: str = "database"

    error_title: str = DEFAULT_ERROR_TITLE
    notification_mode: str = STICKY_MODE

    http_timeout_seconds: int = 30
