"""Observability – structured logging helpers."""
from ats_search.observability.logging.factory import configure_logging, configure_logging_from_settings, get_logger
from ats_search.observability.logging.filters import SensitiveFieldsFilter

__all__ = ["SensitiveFieldsFilter", "configure_logging", "configure_logging_from_settings", "get_logger"]
