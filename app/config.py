"""
Configuration for SmartGrow
===========================
Main application runtime settings, read from environment variables.
Sets up the logging configuration as well.
"""

import logging
import os
import sys
from contextlib import suppress
from dataclasses import dataclass, field
from logging.handlers import RotatingFileHandler
from typing import Any

from app.domain.environmental_alerts import AlertThresholds
from app.domain.exceptions import ConfigurationError


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "t", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer.") from None


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number.") from None


@dataclass
class AppConfig:
    """Runtime configuration loaded from environment variables."""

    environment: str = field(default_factory=lambda: os.getenv("SMARTGROW_ENV", "development"))
    secret_key: str = field(default_factory=lambda: os.getenv("SMARTGROW_SECRET_KEY", "SmartGrowDevSecretKey"))
    database_path: str = field(default_factory=lambda: os.getenv("SMARTGROW_DATABASE_PATH", "database/smartgrow.db"))

    DEBUG: bool = field(default_factory=lambda: _env_bool("SMARTGROW_DEBUG", False))
    log_level: str = field(default_factory=lambda: os.getenv("SMARTGROW_LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("SMARTGROW_LOG_FILE", "logs/smartgrow.log"))

    # Environmental sampler
    sampler_enabled: bool = field(default_factory=lambda: _env_bool("SMARTGROW_SAMPLER_ENABLED", False))
    sampler_interval_seconds: float = field(
        default_factory=lambda: _env_float("SMARTGROW_SAMPLER_INTERVAL_SECONDS", 5.0)
    )
    # Namespace that receives sampler alerts (unset = default namespace)
    sampler_user_id: str | None = field(default_factory=lambda: os.getenv("SMARTGROW_SAMPLER_USER_ID") or None)
    heat_threshold_c: float = field(default_factory=lambda: _env_float("SMARTGROW_HEAT_THRESHOLD", 31.0))
    cool_threshold_c: float = field(default_factory=lambda: _env_float("SMARTGROW_COOL_THRESHOLD", 22.0))
    soil_threshold_pct: float = field(default_factory=lambda: _env_float("SMARTGROW_SOIL_THRESHOLD", 30.0))

    # Diagnosis provider
    gemini_api_key: str | None = field(default_factory=lambda: os.getenv("GEMINI_API_KEY") or None)
    gemini_model: str = field(default_factory=lambda: os.getenv("SMARTGROW_GEMINI_MODEL", "gemini-3-flash-preview"))
    provider_timeout_seconds: float = field(
        default_factory=lambda: _env_float("SMARTGROW_PROVIDER_TIMEOUT_SECONDS", 30.0)
    )

    # Upload / request size limits
    max_upload_mb: int = field(default_factory=lambda: _env_int("SMARTGROW_MAX_UPLOAD_MB", 16))

    # Default insecure secret key - used only for detection
    _DEFAULT_SECRET_KEY: str = field(default="SmartGrowDevSecretKey", init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.environment == "production" and self.secret_key == self._DEFAULT_SECRET_KEY:
            raise ConfigurationError(
                "Cannot use default secret key in production. "
                "Set SMARTGROW_SECRET_KEY to a secure random value."
            )
        if self.sampler_interval_seconds <= 0:
            raise ConfigurationError("SMARTGROW_SAMPLER_INTERVAL_SECONDS must be positive")
        if self.max_upload_mb < 1:
            raise ConfigurationError("SMARTGROW_MAX_UPLOAD_MB must be at least 1")

    def alert_thresholds(self) -> AlertThresholds:
        try:
            return AlertThresholds(
                heat=self.heat_threshold_c,
                cool=self.cool_threshold_c,
                soil_moisture=self.soil_threshold_pct,
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid alert thresholds: {exc}") from exc

    def as_flask_config(self) -> dict[str, Any]:
        """Render configuration values for Flask application."""
        return {
            "ENV": self.environment,
            "SECRET_KEY": self.secret_key,
            "DATABASE_PATH": self.database_path,
            "DEBUG": self.DEBUG,
            "MAX_CONTENT_LENGTH": self.max_upload_mb * 1024 * 1024,
            "JSON_SORT_KEYS": False,
        }


def setup_logging(debug: bool = False, log_file: str | None = "logs/smartgrow.log", level: str | None = None) -> None:
    """Setup logging configuration.

    Installs a console handler and, when ``log_file`` is set, a rotating
    file handler (10 MB x 5). Calling it again only adjusts levels.
    """
    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or "INFO").upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)

    has_console = any(getattr(h, "name", "") == "smartgrow_console" for h in root.handlers)
    has_file = any(getattr(h, "name", "") == "smartgrow_file" for h in root.handlers)
    added_handler = False

    # Console handler (force UTF-8 to avoid UnicodeEncodeError on Windows terminals)
    stream = sys.stdout
    with suppress(AttributeError, ValueError):
        stream.reconfigure(encoding="utf-8", errors="replace")
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not has_console:
        console_handler = logging.StreamHandler(stream=stream)
        console_handler.name = "smartgrow_console"
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        added_handler = True

    if log_file and not has_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.name = "smartgrow_file"
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
        added_handler = True

    for handler in root.handlers:
        if getattr(handler, "name", "") in {"smartgrow_console", "smartgrow_file"}:
            handler.setLevel(log_level)

    if added_handler:
        root.info("Logging initialized at level: %s", logging.getLevelName(log_level))

    if _env_bool("SMARTGROW_SILENCE_WERKZEUG", True):
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
    # Keep request-level noise from the provider client out of INFO logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_config() -> AppConfig:
    """Helper for callers to load and validate configuration."""
    config = AppConfig()
    if not config.gemini_api_key:
        logging.getLogger(__name__).warning("GEMINI_API_KEY is not set; /diagnose will fail until it is configured")
    return config
