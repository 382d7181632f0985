"""Observability – structured logging helpers."""
from dgraph_http.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from dgraph_http.observability.logging.factory import JsonLoggerFactory
from dgraph_http.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
]
