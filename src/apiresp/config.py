from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Pydantic Settings reads env vars prefixed with ``APIRESP_`` (case-insensitive),
    e.g. ``APIRESP_LOG_LEVEL=DEBUG``. In development, it also reads from .env if present.
    """

    # Minimum level for the stdlib root logger configured by configure_logging()
    log_level: str = "INFO"

    # JSON lines when true, human-readable console lines otherwise
    log_json: bool = True

    # Header read for an incoming request id and echoed on the response
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_prefix="APIRESP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


settings = Settings()
