"""Bananagen - Generation request form for the Nano Banana image service."""

__version__ = "0.1.0"

from bananagen.core.config import BananagenConfig, config

__all__ = [
    "BananagenConfig",
    "config",
]
