from __future__ import annotations

import atexit
import contextlib
import dataclasses
import logging
import signal
import threading
from typing import Any

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from app.blueprints.api.garden import garden_api
from app.config import load_config, setup_logging
from app.domain.exceptions import ConfigurationError


def create_app(
    config_overrides: dict[str, Any] | None = None,
    *,
    bootstrap_runtime: bool = False,
    provider: Any = None,
) -> Flask:
    """Build the Flask application.

    Args:
        config_overrides: AppConfig field overrides by exact name, e.g.
            ``DEBUG`` or ``database_path``
        bootstrap_runtime: Install shutdown hooks and start the environment
            sampler when it is enabled in config
        provider: Diagnosis provider to use instead of the Gemini client
    """
    config = load_config()
    if config_overrides:
        known = {f.name for f in dataclasses.fields(config) if f.init}
        for key, value in config_overrides.items():
            if key not in known:
                raise ConfigurationError(f"Unknown config override: {key}")
            setattr(config, key, value)

    setup_logging(debug=config.DEBUG, log_file=config.log_file, level=config.log_level)

    flask_app = Flask(__name__)
    flask_app.config.update(config.as_flask_config())

    from app.services.container import ServiceContainer

    container = ServiceContainer.build(config, provider=provider)
    flask_app.config["CONTAINER"] = container
    container.database.init_app(flask_app)

    @flask_app.errorhandler(Exception)
    def _handle_unhandled(exc):
        if not request.path.startswith("/api/"):
            raise exc
        from app.domain.exceptions import SmartGrowError
        from app.utils.http import error_response, safe_error

        if isinstance(exc, HTTPException):
            status = int(exc.code or 500)
            if status >= 500:
                return safe_error(exc, status, context="http-exception")
            return error_response(exc.description or "Request failed", status)

        if isinstance(exc, SmartGrowError):
            status = exc.http_status
            if status >= 500 and not exc.user_facing:
                return safe_error(exc, status, context=type(exc).__name__)
            return error_response(str(exc) or "Request failed", status)

        return safe_error(exc, 500, context="unhandled")

    @flask_app.errorhandler(413)
    def _handle_too_large(_exc):
        from app.utils.http import error_response

        return error_response("Request payload too large", 413)

    flask_app.register_blueprint(garden_api, url_prefix="/api/garden")

    for bp_name in flask_app.blueprints:
        logging.info(" Registered blueprint: %s", bp_name)

    if bootstrap_runtime:
        _install_shutdown_hooks(container)
        if config.sampler_enabled:
            container.sampler.start()
        else:
            logging.info("Environment sampler disabled (SMARTGROW_SAMPLER_ENABLED=false)")

    logger = logging.getLogger(__name__)
    logger.info("SmartGrow application initialized successfully.")
    return flask_app


def _install_shutdown_hooks(container) -> None:
    """Stop the sampler and close the database on exit or SIGINT/SIGTERM."""
    shutdown_lock = threading.Lock()
    shutdown_done = False

    def _graceful_shutdown(reason: str = "unknown") -> None:
        nonlocal shutdown_done
        with shutdown_lock:
            if shutdown_done:
                return
            shutdown_done = True
        logging.info("Graceful shutdown initiated (%s)", reason)
        container.shutdown()

    def _signal_handler(signum: int, _frame: object) -> None:
        sig_name = signal.Signals(signum).name
        logging.info("Received %s, shutting down", sig_name)
        _graceful_shutdown(sig_name)
        raise SystemExit(0)

    atexit.register(_graceful_shutdown, "atexit")

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(OSError, ValueError):
            signal.signal(sig, _signal_handler)


__all__ = ["create_app"]
