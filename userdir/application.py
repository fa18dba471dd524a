"""Application factory that wires configuration, storage and the web UI."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from .config import Settings, build_store, load_settings
from .web import create_app


def create_application(*, settings: Optional[Settings] = None) -> FastAPI:
    """Create the ASGI application from environment driven settings."""

    if settings is None:
        settings = load_settings()

    store = build_store(settings)
    app = create_app(store=store, title=settings.title)
    app.state.settings = settings
    return app


__all__ = ["create_application"]
