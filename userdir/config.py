"""Configuration management for the user directory service."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import yaml

from .models import UserFields
from .storage import UserStore
from .validation import UserValidationError, validate_user

logger = logging.getLogger("userdir.config")

DEFAULT_TITLE = "User Directory"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000

# YAML turns bare words like Yes/No/On into booleans.
_SEED_TEXT_KEYS = ("firstName", "lastName", "email", "bio")


class SeedError(ValueError):
    """Raised when a seed file cannot be turned into user records."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    title: str = DEFAULT_TITLE
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    seed_path: Optional[Path] = None


def _env_port(value: Optional[str]) -> int:
    if value is None or not value.strip():
        return DEFAULT_PORT
    try:
        port = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"USERDIR_PORT must be an integer, got '{value}'") from exc
    if not 0 < port < 65536:
        raise ValueError(f"USERDIR_PORT must be between 1 and 65535, got {port}")
    return port


def resolve_seed_path(env_value: Optional[str]) -> Optional[Path]:
    """Resolve the path to the optional seed file."""
    if not env_value or not env_value.strip():
        return None
    return Path(env_value.strip()).expanduser().resolve(strict=False)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    title = (env.get("USERDIR_TITLE") or "").strip() or DEFAULT_TITLE
    host = (env.get("USERDIR_HOST") or "").strip() or DEFAULT_HOST
    log_level = (env.get("USERDIR_LOG_LEVEL") or "").strip().upper() or "INFO"
    return Settings(
        title=title,
        host=host,
        port=_env_port(env.get("USERDIR_PORT")),
        log_level=log_level,
        seed_path=resolve_seed_path(env.get("USERDIR_SEED_PATH")),
    )


def load_seed_users(seed_path: Path) -> List[UserFields]:
    """Load and validate user entries from a YAML seed file."""
    with seed_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    if not isinstance(raw, dict):
        raise SeedError("Seed file must contain a mapping with a 'users' key")

    entries = raw.get("users") or []
    if not isinstance(entries, list):
        raise SeedError("The 'users' key must hold a list of user entries")

    users: List[UserFields] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise SeedError(f"Seed entry {index} must be a mapping")
        form: Dict[str, object] = {key: value for key, value in entry.items() if value is not None}
        for key in _SEED_TEXT_KEYS:
            if key in form and not isinstance(form[key], str):
                raise SeedError(f"Seed entry {index} field '{key}' must be a string")
        age = form.get("age")
        if age is not None and (isinstance(age, bool) or not isinstance(age, (int, str))):
            raise SeedError(f"Seed entry {index} field 'age' must be a whole number")
        try:
            users.append(validate_user(form))
        except UserValidationError as exc:
            raise SeedError(f"Seed entry {index} is invalid: {exc}") from exc
    return users


def build_store(settings: Optional[Settings] = None) -> UserStore:
    """Create a store, populated from the seed file when one is configured."""
    store = UserStore()
    if settings is None or settings.seed_path is None:
        return store

    for fields in load_seed_users(settings.seed_path):
        store.add(fields)
    logger.info("Loaded %d user(s) from %s", len(store), settings.seed_path)
    return store


__all__ = [
    "SeedError",
    "Settings",
    "build_store",
    "load_seed_users",
    "load_settings",
    "resolve_seed_path",
]
