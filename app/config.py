# app/config.py
"""
Centralized configuration management with startup validation.

Defines REQUIRED vs OPTIONAL environment variables and provides
safe configuration loading with validation and logging.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

SERVICE_NAME = "sessiongate"
SERVICE_VERSION = "0.1.0"

DEFAULT_SESSION_COOKIE = "sessiongate_session"
DEFAULT_SESSION_MAX_AGE = 14 * 24 * 60 * 60  # 14 days
MIN_SESSION_MAX_AGE = 60

# Only acceptable outside production
DEVELOPMENT_SECRET_KEY = "sessiongate-development-secret"

# Sensitive substrings that should never appear in logs
SENSITIVE_SUBSTRINGS = ("key", "token", "secret", "password", "credential")


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


# =============================================================================
# Configuration Dataclass
# =============================================================================


@dataclass
class AppConfig:
    """Application configuration loaded from environment."""

    # Service info
    service_name: str = SERVICE_NAME
    service_version: str = SERVICE_VERSION
    environment: str = "development"

    # Session cookie
    secret_key: str = field(default=DEVELOPMENT_SECRET_KEY, repr=False)
    secret_key_present: bool = False
    session_cookie: str = DEFAULT_SESSION_COOKIE
    session_max_age: int = DEFAULT_SESSION_MAX_AGE
    https_only: bool = False

    # Warnings collected during config load
    warnings: list = field(default_factory=list)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# =============================================================================
# Configuration Loading
# =============================================================================


def _parse_int_env(
    name: str, default: int, min_value: Optional[int] = None
) -> tuple[int, Optional[str]]:
    """
    Parse an integer environment variable with validation.

    Returns (value, warning_message).
    On invalid input, returns default with a warning.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default, None

    try:
        value = int(raw)
    except ValueError:
        warning = f"{name}='{raw}' is not a valid integer; using default {default}"
        return default, warning

    if min_value is not None and value < min_value:
        warning = f"{name}={value} is below minimum {min_value}; using default {default}"
        return default, warning

    return value, None


def _parse_bool_env(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    raw = os.environ.get(name, "").lower()
    if raw in ("true", "1", "yes", "on"):
        return True
    if raw in ("false", "0", "no", "off"):
        return False
    return default


def load_config(fail_fast: bool = True) -> AppConfig:
    """
    Load and validate application configuration from environment.

    Args:
        fail_fast: If True, raise ConfigurationError on critical issues.
                   If False, collect warnings and continue.

    Returns:
        AppConfig instance with validated configuration.

    Raises:
        ConfigurationError: If required configuration is missing/invalid
                           and fail_fast is True.
    """
    warnings = []

    environment = os.environ.get("SESSIONGATE_ENV", "development").strip().lower() or "development"

    # Secret key is REQUIRED in production
    secret_key = os.environ.get("SESSIONGATE_SECRET_KEY", "")
    secret_key_present = bool(secret_key)
    if not secret_key_present:
        message = "SESSIONGATE_SECRET_KEY is not set; session cookies are signed with a development key"
        if environment == "production" and fail_fast:
            raise ConfigurationError("SESSIONGATE_SECRET_KEY is required in production")
        warnings.append(message)
        secret_key = DEVELOPMENT_SECRET_KEY

    session_cookie = os.environ.get("SESSIONGATE_SESSION_COOKIE", "").strip() or DEFAULT_SESSION_COOKIE

    session_max_age, age_warning = _parse_int_env(
        "SESSIONGATE_SESSION_MAX_AGE",
        DEFAULT_SESSION_MAX_AGE,
        min_value=MIN_SESSION_MAX_AGE,
    )
    if age_warning:
        warnings.append(age_warning)

    https_only = _parse_bool_env("SESSIONGATE_HTTPS_ONLY", environment == "production")

    # Log warnings
    for warning in warnings:
        logger.warning(f"[CONFIG] {warning}")

    return AppConfig(
        environment=environment,
        secret_key=secret_key,
        secret_key_present=secret_key_present,
        session_cookie=session_cookie,
        session_max_age=session_max_age,
        https_only=https_only,
        warnings=warnings,
    )


def log_config_snapshot(config: AppConfig) -> str:
    """
    Generate and log a safe configuration snapshot.

    Returns the snapshot string for testing purposes.
    Never logs actual secret values - only boolean presence flags.
    """
    snapshot = (
        f"[STARTUP] service={config.service_name} "
        f"version={config.service_version} "
        f"environment={config.environment} "
        f"session_cookie={config.session_cookie} "
        f"session_max_age={config.session_max_age} "
        f"https_only={config.https_only} "
        f"secret_key_present={config.secret_key_present}"
    )
    logger.info(snapshot)
    return snapshot


def validate_config_snapshot_safety(snapshot: str) -> bool:
    """
    Validate that a config snapshot doesn't contain sensitive values.

    Returns True if safe, False if potentially unsafe.
    """
    snapshot_lower = snapshot.lower()

    # "secret_key_present=true" is fine, "secret_key=abc" is not
    for sensitive in SENSITIVE_SUBSTRINGS:
        pattern = rf"{sensitive}=(?!true|false)"
        if re.search(pattern, snapshot_lower):
            return False

    return True
