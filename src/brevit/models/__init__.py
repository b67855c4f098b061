"""
Data models for the Brevit pipeline.
"""

from .enums import (
    Complexity,
    ImageOptimizationMode,
    InferredType,
    JsonOptimizationMode,
    LogLevel,
    TextOptimizationMode,
)
from .nodes import (
    ArrayNode,
    BoolNode,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
    ValueNode,
)
from .schemas import (
    AbbreviationEntry,
    DataAnalysis,
    StrategyCandidate,
)

__all__ = [
    "ArrayNode",
    "BoolNode",
    "NullNode",
    "NumberNode",
    "ObjectNode",
    "StringNode",
    "ValueNode",
    "DataAnalysis",
    "StrategyCandidate",
    "AbbreviationEntry",
    "JsonOptimizationMode",
    "TextOptimizationMode",
    "ImageOptimizationMode",
    "Complexity",
    "InferredType",
    "LogLevel",
]
