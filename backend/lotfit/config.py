from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_version: str = "1.0.0"
    log_level: str = "INFO"

    # Catalog fallbacks for unknown ids in a scenario
    default_ruleset_id: str = "sample_current"
    default_preset_id: str = "two_flat"
    default_lot_preset_id: str = "lot_50x150"

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "LOTFIT_",
    }


settings = Settings()
