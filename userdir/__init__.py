"""In-memory user directory with an HTML form interface."""

from __future__ import annotations

from typing import Any

from .models import User, UserFields
from .storage import UserStore


def create_app(*args: Any, **kwargs: Any):
    """Factory function that returns the web application for a store."""

    from .web import create_app as _create_app

    return _create_app(*args, **kwargs)


def create_application(*args: Any, **kwargs: Any):
    """Factory function that builds the application from environment settings."""

    from .application import create_application as _create_application

    return _create_application(*args, **kwargs)


__all__ = [
    "User",
    "UserFields",
    "UserStore",
    "create_app",
    "create_application",
]
