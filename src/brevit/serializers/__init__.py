"""
Serializers for token-efficient output.
"""

from .abbreviations import AbbreviationEngine
from .flatten import FlattenEncoder, FlattenLine, LineKind

__all__ = [
    "AbbreviationEngine",
    "FlattenEncoder",
    "FlattenLine",
    "LineKind",
]
