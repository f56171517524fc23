"""Configuration package."""

from setsugar.config.settings import (
    SWITCHES,
    LogSettings,
    TransformConfig,
    load_config,
)

__all__ = [
    "SWITCHES",
    "LogSettings",
    "TransformConfig",
    "load_config",
]
