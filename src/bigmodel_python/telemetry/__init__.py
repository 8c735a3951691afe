"""
Telemetry module - structured logging for bigmodel-python.
"""

from bigmodel_python.telemetry.logger import (
    BigModelLogger,
    JsonFormatter,
    LogContext,
    LogLevel,
    SensitiveDataMasker,
    TextFormatter,
    clear_log_context,
    configure_logging,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "BigModelLogger",
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "SensitiveDataMasker",
    "TextFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
