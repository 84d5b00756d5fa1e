"""Configuration management for the Bananagen generation form.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the BANANAGEN_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (BANANAGEN_* prefix)
2. .env file in the project root
3. Default values defined in BananagenConfig

Example .env file:
    BANANAGEN_GENERATION_ENDPOINT=https://example.com/api/generate-image
    BANANAGEN_REQUEST_TIMEOUT=90
    BANANAGEN_SERVER_PORT=8080

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from bananagen.core.config import config

    print(config.generation_endpoint)
    print(config.request_timeout)

Form limits (8 reference images, 5000 prompt characters) are product
constants and live in ``bananagen.ui.models``, not here.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BananagenConfig(BaseSettings):
    """Main configuration for the Bananagen generation form.

    Attributes
    ----------
    Generation Service:
        generation_endpoint : str
            URL that receives ``POST`` generation requests
        request_timeout : float
            Seconds before an unanswered generation request is abandoned
        default_mime_type : str
            MIME type sent for local images whose type is unknown
        generation_concurrency : int | None
            Generate events served at once across all visitors (None: no limit)

    Server Settings:
        server_host : str
            Bind address for the uvicorn server
        server_port : int
            Port for the uvicorn server (1024-65535)
        log_level : str
            Root logging level used by ``bananagen.api.main.main``

    Examples
    --------
        >>> custom_config = BananagenConfig(
        ...     generation_endpoint="http://127.0.0.1:9000/generate",
        ...     request_timeout=30,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BANANAGEN_",
        case_sensitive=False,
    )

    # Generation service
    generation_endpoint: str = Field(
        default="http://localhost:3000/api/generate-image",
        description="Endpoint that receives generation requests",
    )
    request_timeout: float = Field(
        default=120.0,
        description="Seconds to wait for the generation service before giving up",
        gt=0,
    )
    default_mime_type: str = Field(
        default="image/png",
        description="MIME type used when a local image declares none",
    )
    generation_concurrency: int | None = Field(
        default=None,
        description="Concurrent generate events across all sessions (None for unlimited)",
        ge=1,
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level for the application",
    )


# Global configuration instance
# Loads values from environment variables (BANANAGEN_* prefix) and .env file.
config = BananagenConfig()
