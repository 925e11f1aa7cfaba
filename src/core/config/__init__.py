"""Configuration schemas for validation."""

from .schemas import ConversionConfig

__all__ = [
    "ConversionConfig",
]
