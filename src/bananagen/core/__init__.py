"""Core settings shared by the API and UI layers.

- **BananagenConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
"""

from bananagen.core.config import BananagenConfig, config

__all__ = [
    "BananagenConfig",
    "config",
]
