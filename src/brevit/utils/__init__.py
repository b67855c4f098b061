"""
Utility modules for Brevit.
"""

from .logging import get_logger, setup_logging
from .error_handler import ErrorHandler

__all__ = [
    "get_logger",
    "setup_logging",
    "ErrorHandler",
]
