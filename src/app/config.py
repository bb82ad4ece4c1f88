"""Configuration management using Pydantic settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "FLEETWATCH"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Fleet data (JSON array of vehicle objects)
    fleet_data_path: Path = Path("./data/vehicles.json")
    fleet_autoload: bool = True

    # Simulation
    simulation_enabled: bool = True
    simulation_tick_interval: float = 1.0   # seconds between ticks (also dt)
    simulation_jitter: bool = True          # speed/heading noise per tick
    simulation_normalize_heading: bool = True  # wrap heading into [0, 360)
    simulation_seed: Optional[int] = None   # fixed seed for reproducible runs

    # Mission target in local meters, +X east, +Y north
    mission_target_x: float = 0.0
    mission_target_y: float = 0.0

    # Display
    live_updates: bool = True


settings = Settings()
