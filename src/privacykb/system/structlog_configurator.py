"""Structlog-based logging configuration for the knowledge base service.

This module provides structured logging configuration using structlog,
routing both structlog and standard library loggers to a single handler.

Supports different deployment targets:
- Docker: Uses stdout with JSON output
- Development: Human-readable console output unless JSON is requested
"""

import logging
import os
import sys
from collections.abc import Callable
from importlib import metadata
from typing import Any

import structlog

from privacykb.config.models import KnowledgeBaseConfig


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def is_development_environment() -> bool:
    """Check if the service runs from a development checkout."""
    return os.environ.get("PRIVACYKB_ENV", "production") == "development"


def get_package_version() -> str:
    """Get the installed package version, or 'unknown' when running from source."""
    try:
        return metadata.version("privacykb")
    except metadata.PackageNotFoundError:
        return "unknown"


def get_deployment_environment() -> str:
    """Get deployment environment with 'unknown' fallback."""
    if is_docker_environment():
        return "docker"
    elif is_development_environment():
        return "development"
    else:
        return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json_output(config: KnowledgeBaseConfig) -> bool:
    """Decide between JSON and console rendering."""
    use_json = config.logging.json_logs
    if use_json is None:
        # Auto-detect: JSON inside containers, human-readable elsewhere
        use_json = is_docker_environment()

    if is_development_environment():
        if os.environ.get("PRIVACYKB_JSON_LOGS", "false").lower() == "true":
            use_json = True

    return use_json


def _configure_processors(config: KnowledgeBaseConfig) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": "privacykb",
        "version": get_package_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,
    }

    if config.site_name:
        extra_fields["site_name"] = config.site_name

    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _use_json_output(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def _configure_handlers(config: KnowledgeBaseConfig) -> None:
    """Route the root logger to stdout."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    # Clear existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(config: KnowledgeBaseConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The KnowledgeBaseConfig instance containing logging settings.
    """
    processors = _configure_processors(config)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        version=get_package_version(),
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=config.logging.json_logs,
    )

