"""Bananagen - FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the REST routes, the mounted Gradio form, and
the ``main()`` CLI function that launches the uvicorn server.

Architecture
------------
- **Configuration** comes from :data:`~bananagen.core.config.config`.
- **The generation form** is a Gradio Blocks app built by
  :func:`~bananagen.ui.app.create_ui` and mounted at ``/``.  Each visitor
  gets their own :class:`~bananagen.ui.state.GeneratorSession`.
- **Image generation** happens in the remote generation service; the form
  talks to it through :class:`~bananagen.api.client.GenerationClient`.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/config``               Form options and limits
GET       ``/``                         Gradio generation form
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    bananagen

Direct invocation::

    python -m bananagen.api.main
"""

from __future__ import annotations

import logging

import gradio as gr
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bananagen import __version__
from bananagen.core.config import config
from bananagen.ui.app import create_ui
from bananagen.ui.models import (
    ACCEPTED_FILE_TYPES,
    ASPECT_RATIO_OPTIONS,
    MAX_LOCAL_FILES,
    MAX_PROMPT_LENGTH,
    MODE_OPTIONS,
    MODEL_OPTIONS,
    RESOLUTION_OPTIONS,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Bananagen",
    description="Generation request form for the Nano Banana image service.",
    version=__version__,
)

# Allow cross-origin requests so the marketing pages can be served from a
# different origin during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the form options and limits.

    The response includes:

    - ``version`` - API version string.
    - ``modes``, ``models``, ``resolutions``, ``aspect_ratios`` - choices
      offered by the form.
    - ``max_local_files`` and ``max_prompt_length`` - client-side limits.
    - ``accepted_file_types`` - file picker filter.

    Returns:
        Dictionary describing the generation form.
    """
    return {
        "version": __version__,
        "modes": [{"label": label, "value": value} for label, value in MODE_OPTIONS],
        "models": [{"value": value, **option} for value, option in MODEL_OPTIONS.items()],
        "resolutions": list(RESOLUTION_OPTIONS),
        "aspect_ratios": [{"label": label, "value": value} for label, value in ASPECT_RATIO_OPTIONS],
        "max_local_files": MAX_LOCAL_FILES,
        "max_prompt_length": MAX_PROMPT_LENGTH,
        "accepted_file_types": list(ACCEPTED_FILE_TYPES),
    }


# Mount the Gradio form last so the API routes above take precedence.
app = gr.mount_gradio_app(app, create_ui(), path="/")


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~bananagen.core.config.config` (which
    loads from ``BANANAGEN_SERVER_HOST`` and ``BANANAGEN_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``bananagen`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(f"Starting Bananagen {__version__}")
    logger.info(f"Generation endpoint: {config.generation_endpoint}")

    uvicorn.run(
        "bananagen.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
