"""Error types and recovery helpers."""
import time
from typing import Callable, Type, Tuple
from functools import wraps
from loguru import logger


class ArbiloopError(Exception):
    """Base class for arbiloop errors."""
    pass


class RateFeedError(ArbiloopError):
    """Raised when a rate feed cannot be read or parsed."""
    pass


class ConfigurationError(ArbiloopError):
    """Raised for invalid search parameters."""
    pass


def retry_with_backoff(
    retries: int = 2,
    delay: float = 0.05,
    factor: float = 2.0,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
):
    """
    Call the wrapped function again when it raises one of ``exceptions``.

    The pause starts at ``delay`` seconds and grows by ``factor`` after each
    failure. Once ``retries`` extra attempts have failed the last error
    propagates unchanged.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            pause = delay
            remaining = retries
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if remaining == 0:
                        raise
                    remaining -= 1
                    logger.debug(f"{func.__name__}: {e}, trying again in {pause:.2f}s")
                    time.sleep(pause)
                    pause *= factor

        return wrapper
    return decorator


class ErrorHandler:
    """Counts errors seen by long-running scans."""

    def __init__(self):
        """Initialise error handler."""
        self.error_counts: dict[str, int] = {}

    def record_error(self, error_type: str):
        """Record an error occurrence."""
        self.error_counts[error_type] = self.error_counts.get(error_type, 0) + 1

    def get_error_stats(self) -> dict:
        """Get error statistics."""
        return {
            'total_errors': sum(self.error_counts.values()),
            'error_types': self.error_counts.copy(),
        }

    def reset(self):
        """Forget all recorded errors."""
        self.error_counts.clear()


# Global error handler instance
error_handler = ErrorHandler()
