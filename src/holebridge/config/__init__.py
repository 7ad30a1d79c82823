"""Configuration management for holebridge.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Point matching tolerances
- BridgeConfig: Bridge resolution settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- HolebridgeSettings: Main application settings
"""

from holebridge.config.settings import (
    BridgeConfig,
    GeometryConfig,
    HolebridgeSettings,
    LoggingConfig,
    ProcessingConfig,
    RayTarget,
    get_default_settings,
)

__all__ = [
    "BridgeConfig",
    "GeometryConfig",
    "HolebridgeSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "RayTarget",
    "get_default_settings",
]
