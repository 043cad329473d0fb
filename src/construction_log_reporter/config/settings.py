"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    All settings can be overridden via environment variables prefixed with SITELOG_
    For example: SITELOG_WEATHER_API_TOKEN=abc123

    Only the batch entrypoint reads these; library components take plain values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SITELOG_",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Weather API =====
    weather_api_token: str = ""  # empty token -> simulated weather
    weather_base_url: str = "https://api.caiyunapp.com/v2.5"
    weather_lang: str = "zh_CN"
    weather_unit: str = "metric"
    weather_granularity: str = "realtime"
    default_latitude: float = 34.2610
    default_longitude: float = 117.1859
    request_timeout_seconds: float = 30.0

    # ===== Retry =====
    retry_max_attempts: int = 3
    retry_initial_delay_ms: int = 1000
    retry_max_delay_ms: int = 10000

    # ===== Storage =====
    shared_documents_dir: Path | None = Path.home() / "Documents"
    private_documents_dir: Path = Path.home() / ".local" / "share" / "construction-log-reporter"
    report_folder_name: str = "ConstructionLogs"

    # ===== Report =====
    report_title: str = "施工日志"
    report_font_name: str = "STSong-Light"

    # ===== Logging =====
    log_level: str = "INFO"
    log_json: bool = False

    # ===== Job =====
    job_file: Path | None = None


# Global settings instance
settings = Settings()
