"""Configuration settings for Holebridge."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class RayTarget(str, Enum):
    """Ring the bridge-search ray is cast against.

    OUTER follows the hole-bridging literature: the ray from the hole's
    rightmost vertex is intersected with the outer ring. HOLE reproduces the
    legacy behavior of intersecting the ray with the hole's own boundary.
    """

    OUTER = "outer"
    HOLE = "hole"


class GeometryConfig(BaseModel):
    """Point matching tolerances.

    A tolerance of 0.0 means exact coordinate equality.
    """

    vertex_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        description="Tolerance for general point equality (x, y and z)",
    )
    bridge_tolerance: float = Field(
        default=0.0,
        ge=0.0,
        description="Tolerance for matching a ray hit to an outer vertex (x and y only)",
    )


class BridgeConfig(BaseModel):
    """Configuration for bridge resolution."""

    ray_target: RayTarget = Field(
        default=RayTarget.OUTER,
        description="Ring the bridge-search ray is intersected with",
    )


class ProcessingConfig(BaseModel):
    """Configuration for document processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    quiet: bool = Field(
        default=False,
        description="Log to file only, without a console handler",
    )


class HolebridgeSettings(BaseModel):
    """Main application settings."""

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> HolebridgeSettings:
    """Get default application settings."""
    return HolebridgeSettings()
