"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; override them via
environment variables in a real deployment.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Crowd Check API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Demo locations, users, reviews and a day of hourly crowd history
    # are created at startup unless this is switched off.
    seed_sample_data: bool = os.getenv("SEED_SAMPLE_DATA", "true").lower() in {"1", "true", "yes"}
    sample_data_seed: int = int(os.getenv("SAMPLE_DATA_SEED", "42"))

    # Number of samples returned by the crowd history when the caller
    # does not ask for a specific limit (one day at hourly granularity).
    history_limit: int = int(os.getenv("HISTORY_LIMIT", "24"))

    # Two locations closer than this many degrees on both axes are
    # treated as the same place (0.0001 deg is roughly 11 m).
    dedup_tolerance: float = float(os.getenv("DEDUP_TOLERANCE", "0.0001"))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
