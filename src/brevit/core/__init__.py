"""
Core components of the Brevit pipeline.

The client and selector are imported from their modules directly
(``brevit.core.client``); they depend on ``brevit.utils``, which itself
loads configuration from here.
"""

from .adapter import adapt, is_json_like, parse_json, serialize_structured
from .analyzer import StructuralAnalyzer
from .config import BrevitConfig, get_config, reset_config

__all__ = [
    "adapt",
    "is_json_like",
    "parse_json",
    "serialize_structured",
    "StructuralAnalyzer",
    "BrevitConfig",
    "get_config",
    "reset_config",
]
