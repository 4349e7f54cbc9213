"""Observability – structlog configuration and logger lookup."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import structlog

from ats_search.observability.logging.filters import SensitiveFieldsFilter

if TYPE_CHECKING:
    from ats_search.config import SearchSettings


def configure_logging(
    level: int | str = logging.INFO,
    *,
    json: bool = True,
    sensitive_fields: frozenset[str] | None = None,
) -> None:
    """Route structlog through the stdlib root logger with JSON (or console) rendering.

    Sensitive keys are redacted before rendering; see :class:`SensitiveFieldsFilter`.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    _filter = SensitiveFieldsFilter(sensitive_fields)

    def _redact(logger: Any, method: Any, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG001
        return _filter.redact_deep(event_dict)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _redact,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    renderer: Any = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def configure_logging_from_settings(settings: SearchSettings) -> None:
    """Apply the ``log_level`` and ``log_json`` settings."""
    configure_logging(settings.log_level, json=settings.log_json)


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger, optionally bound to *initial_values*."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["configure_logging", "configure_logging_from_settings", "get_logger"]
