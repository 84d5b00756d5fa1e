"""Bananagen - API layer.

This package contains the FastAPI host application, the Pydantic models
for the generation service wire format, and the HTTP client that talks to
the service.

Modules
-------
main
    FastAPI application with the REST routes, the mounted Gradio form and
    the ``main()`` CLI entry point.
models
    Pydantic models for generation requests and responses.
client
    Async HTTP client for the remote generation service.
"""
