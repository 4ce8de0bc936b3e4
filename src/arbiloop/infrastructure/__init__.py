"""Infrastructure components for error handling and scan timing."""

from .error_handling import (
    ArbiloopError,
    RateFeedError,
    ConfigurationError,
    retry_with_backoff,
    ErrorHandler,
    error_handler,
)
from .performance import ScanStats, ScanTimer

__all__ = [
    "ArbiloopError",
    "RateFeedError",
    "ConfigurationError",
    "retry_with_backoff",
    "ErrorHandler",
    "error_handler",
    "ScanStats",
    "ScanTimer",
]
