"""Configuration settings for Polykit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class TriangulationAlgorithm(str, Enum):
    """Available triangulation algorithms."""

    EAR_CLIPPING = "ear-clipping"


class ClippingAlgorithm(str, Enum):
    """Available polygon clipping algorithms."""

    CYRUS_BECK = "cyrus-beck"
    SUTHERLAND_HODGMAN = "sutherland-hodgman"


class FillStrategy(str, Enum):
    """Raster fill strategy."""

    RECURSIVE = "recursive"
    STACK = "stack"
    SCANLINE = "scanline"
    ACTIVE_EDGE_TABLE = "active-edge-table"


class FillRule(str, Enum):
    """Inside test used by the active edge table filler."""

    EVEN_ODD = "even-odd"
    WINDING = "winding"
    BOTH = "both"


class ToleranceConfig(BaseModel):
    """Numeric tolerances shared by the geometry algorithms.

    Intersection tests run much closer to grazing angles than containment
    tests, so the intersection epsilon must stay tighter.
    """

    containment_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Tolerance for convexity and point-in-triangle tests",
    )
    intersection_epsilon: float = Field(
        default=1e-12,
        gt=0.0,
        le=1e-3,
        description="Tolerance below which a denominator counts as parallel",
    )

    @model_validator(mode="after")
    def _check_ordering(self) -> "ToleranceConfig":
        if self.intersection_epsilon >= self.containment_epsilon:
            raise ValueError(
                "intersection_epsilon must be smaller than containment_epsilon"
            )
        return self


class TriangulationConfig(BaseModel):
    """Configuration for polygon triangulation."""

    algorithm: TriangulationAlgorithm = Field(
        default=TriangulationAlgorithm.EAR_CLIPPING,
        description="Triangulation algorithm",
    )
    max_iterations: int = Field(
        default=1000,
        ge=1,
        description="Maximum ear removals before giving up with a partial result",
    )


class ClippingConfig(BaseModel):
    """Configuration for polygon clipping."""

    algorithm: ClippingAlgorithm = Field(
        default=ClippingAlgorithm.SUTHERLAND_HODGMAN,
        description="Clipping algorithm applied per window edge",
    )
    normalize_window: bool = Field(
        default=True,
        description="Reverse clockwise clip windows to counter-clockwise before clipping",
    )


class FillConfig(BaseModel):
    """Configuration for raster filling."""

    strategy: FillStrategy = Field(
        default=FillStrategy.STACK,
        description="Fill strategy",
    )
    rule: FillRule = Field(
        default=FillRule.EVEN_ODD,
        description="Fill rule for the active edge table strategy",
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


class PolykitSettings(BaseModel):
    """Main application settings."""

    tolerance: ToleranceConfig = Field(default_factory=ToleranceConfig)
    triangulation: TriangulationConfig = Field(default_factory=TriangulationConfig)
    clipping: ClippingConfig = Field(default_factory=ClippingConfig)
    fill: FillConfig = Field(default_factory=FillConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> PolykitSettings:
    """Get default application settings."""
    return PolykitSettings()
