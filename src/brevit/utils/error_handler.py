"""Centralized error handling utilities"""
from typing import Callable, TypeVar
from contextlib import contextmanager
import time
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class ErrorHandler:
    """Centralized error handling with logging and fallbacks"""

    @staticmethod
    def handle_with_fallback(
        operation: Callable[[], T],
        fallback: T,
        error_msg: str,
        log_level: str = "error",
        exceptions: tuple[type[BaseException], ...] = (Exception,),
    ) -> T:
        """
        Execute operation with fallback on error.

        Args:
            operation: Function to execute
            fallback: Value to return on error
            error_msg: Event name logged on error
            log_level: Log level for errors
            exceptions: Exception types that trigger the fallback

        Returns:
            Operation result or fallback value

        Example:
            text = ErrorHandler.handle_with_fallback(
                lambda: data.decode("utf-8"),
                fallback=None,
                error_msg="input_not_utf8",
                exceptions=(UnicodeDecodeError,),
            )
        """
        try:
            return operation()
        except exceptions as e:
            getattr(logger, log_level)(error_msg, error=str(e), error_type=type(e).__name__)
            return fallback

    @staticmethod
    @contextmanager
    def log_duration(operation_name: str, log_level: str = "info"):
        """
        Context manager to log operation duration.

        Example:
            with ErrorHandler.log_duration("brevity"):
                text = await client.brevity(data)
        """
        start = time.perf_counter()
        try:
            getattr(logger, log_level)("operation_started", operation=operation_name)
            yield
        finally:
            duration = time.perf_counter() - start
            getattr(logger, log_level)(
                "operation_completed",
                operation=operation_name,
                duration_ms=round(duration * 1000, 3),
            )
