"""Configuration management for the MongoDB init-users hook."""

import logging
import os
from typing import Final, Optional

# Load environment variables
MONGO_URI: Final[str] = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017")
MONGO_USERNAME: Final[str] = os.getenv("MONGO_INITDB_ROOT_USERNAME", "")
MONGO_PASSWORD: Final[str] = os.getenv("MONGO_INITDB_ROOT_PASSWORD", "")
MONGO_AUTH_SOURCE: Final[str] = os.getenv("MONGO_AUTH_SOURCE", "admin")
MONGO_ADMIN_DATABASE: Final[str] = os.getenv("MONGO_ADMIN_DATABASE", "admin")
MONGO_TARGET_USER: Final[str] = os.getenv("MONGO_TARGET_USER", "root")
MONGO_TIMEOUT_MS: Final[int] = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))
LOG_LEVEL: Final[str] = os.getenv("MONGO_INIT_LOG_LEVEL", "INFO").upper()

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config(
    uri: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    database: Optional[str] = None,
    target_user: Optional[str] = None,
    timeout_ms: Optional[int] = None,
    log_level: Optional[str] = None,
) -> None:
    """Validate configuration values.

    Each argument overrides the matching environment setting, so command-line
    values are checked instead of the environment they replace. Arguments left
    as None fall back to the module constants.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    uri = MONGO_URI if uri is None else uri
    username = MONGO_USERNAME if username is None else username
    password = MONGO_PASSWORD if password is None else password
    database = MONGO_ADMIN_DATABASE if database is None else database
    target_user = MONGO_TARGET_USER if target_user is None else target_user
    timeout_ms = MONGO_TIMEOUT_MS if timeout_ms is None else timeout_ms
    log_level = LOG_LEVEL if log_level is None else log_level.upper()

    if not uri:
        raise ValueError("MONGO_URI must be set")

    if not database:
        raise ValueError("MONGO_ADMIN_DATABASE must be set")

    if not target_user:
        raise ValueError("MONGO_TARGET_USER must be set")

    if password and not username:
        raise ValueError("MONGO_INITDB_ROOT_PASSWORD is set but MONGO_INITDB_ROOT_USERNAME is empty")

    if timeout_ms <= 0:
        raise ValueError(f"MONGO_TIMEOUT_MS must be positive, got {timeout_ms}")

    if log_level not in LOG_LEVELS:
        raise ValueError(f"MONGO_INIT_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level}")


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Send diagnostics to stderr so stdout only carries the confirmation line."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
