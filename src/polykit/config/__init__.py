"""Configuration management for polykit.

This module provides configuration management using Pydantic models.
Algorithm selection and tolerances are always passed explicitly to the
geometry services; nothing reads global state.

Key classes:
- ToleranceConfig: Numeric tolerances
- TriangulationConfig: Ear clipping settings
- ClippingConfig: Clipping algorithm selection
- FillConfig: Fill strategy and fill rule selection
- LoggingConfig: Logging settings
- PolykitSettings: Main application settings
"""

from polykit.config.settings import (
    ClippingAlgorithm,
    ClippingConfig,
    FillConfig,
    FillRule,
    FillStrategy,
    LoggingConfig,
    PolykitSettings,
    ToleranceConfig,
    TriangulationAlgorithm,
    TriangulationConfig,
    get_default_settings,
)

__all__ = [
    "ClippingAlgorithm",
    "ClippingConfig",
    "FillConfig",
    "FillRule",
    "FillStrategy",
    "LoggingConfig",
    "PolykitSettings",
    "ToleranceConfig",
    "TriangulationAlgorithm",
    "TriangulationConfig",
    "get_default_settings",
]
