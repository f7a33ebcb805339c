"""
MedianStream Configuration Module
=================================
Handles environment variables for the adaptive median filter.
Values come from the process environment, optionally seeded by a .env file.
"""

import math
import os
from dataclasses import dataclass, field
from typing import Optional
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


@dataclass
class FilterConfig:
    """Adaptive median filter settings."""
    time_constant: float = 1.0          # seconds of history kept per channel
    initial_rate: float = 0.0           # Hz reported before any time has elapsed
    clear_buffers_on_reset: bool = True
    max_window_length: Optional[int] = None  # cap on samples per channel

    def __post_init__(self):
        validate_time_constant(self.time_constant)
        if not math.isfinite(self.initial_rate) or self.initial_rate < 0:
            raise ValueError(f"initial_rate must be >= 0, got {self.initial_rate}")
        if self.max_window_length is not None and self.max_window_length < 1:
            raise ValueError(
                f"max_window_length must be >= 1, got {self.max_window_length}"
            )


@dataclass
class LoggingConfig:
    """Logging output settings."""
    level: str = "INFO"
    log_file: Optional[str] = None


@dataclass
class Config:
    """Main application configuration."""
    filter: FilterConfig = field(default_factory=FilterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def validate_time_constant(time_constant: float) -> float:
    """Return time_constant as a float, or raise ValueError if it is not > 0."""
    value = float(time_constant)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"time_constant must be a positive number of seconds, got {time_constant}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


def load_config() -> Config:
    """
    Load configuration from environment variables (.env in development).
    Missing variables fall back to the dataclass defaults.
    """
    filter_config = FilterConfig(
        time_constant=float(os.getenv("MEDIAN_TIME_CONSTANT", "1.0")),
        initial_rate=float(os.getenv("MEDIAN_INITIAL_RATE", "0.0")),
        clear_buffers_on_reset=_env_bool("MEDIAN_CLEAR_ON_RESET", True),
        max_window_length=_env_optional_int("MEDIAN_MAX_WINDOW"),
    )
    logging_config = LoggingConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
    )

    return Config(filter=filter_config, logging=logging_config)


# Singleton config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the application configuration (singleton)."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


if __name__ == "__main__":
    # Test configuration loading
    config = get_config()
    print("Configuration loaded successfully!")
    print(f"  Time constant: {config.filter.time_constant}s")
    print(f"  Initial rate: {config.filter.initial_rate} Hz")
    print(f"  Clear buffers on reset: {config.filter.clear_buffers_on_reset}")
    print(f"  Max window: {config.filter.max_window_length}")
    print(f"  Log level: {config.logging.level}")
