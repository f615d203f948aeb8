from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Settings loaded from GANK_RADAR_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="GANK_RADAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Local game client
    live_client_url: str = "https://127.0.0.1:2999/liveclientdata"
    request_timeout_s: float = 2.0

    # Polling cadence of the inference loop
    live_poll_interval_s: float = 2.0
    sim_poll_interval_s: float = 1.0
    # Reports kept for /reports paging
    max_reports: int = 1800

    # Simulation
    sim_tick_s: float = 1.0
    default_seed: int = 42
    use_simulator: bool = False

    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
