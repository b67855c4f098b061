"""Configuration enums for type-safe settings.

This module provides enum types for the optimization modes and analysis
classifications used throughout Brevit, enabling IDE autocomplete,
preventing typos, and improving type safety.
"""

from enum import Enum


class JsonOptimizationMode(str, Enum):
    """Optimization strategy for JSON data.

    Attributes:
        NONE: The JSON is passed through as-is
        FLATTEN: Flatten into 'key.path:value' lines with tabular optimizations
        TO_YAML: Convert to YAML (pass-through stub)
        FILTER: Keep only configured paths (pass-through stub)
    """
    NONE = "none"
    FLATTEN = "flatten"
    TO_YAML = "to_yaml"
    FILTER = "filter"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class TextOptimizationMode(str, Enum):
    """Optimization strategy for long unstructured text.

    Attributes:
        NONE: The text is passed through as-is
        CLEAN: Remove excessive whitespace and signatures
        SUMMARIZE_FAST: Summarize with a fast, cheap model
        SUMMARIZE_HIGH_QUALITY: Summarize with a high-quality model
    """
    NONE = "none"
    CLEAN = "clean"
    SUMMARIZE_FAST = "summarize_fast"
    SUMMARIZE_HIGH_QUALITY = "summarize_high_quality"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class ImageOptimizationMode(str, Enum):
    """Optimization strategy for image data.

    Attributes:
        NONE: The image is ignored
        OCR: Extract text from the image
        METADATA: Describe the image format and size
    """
    NONE = "none"
    OCR = "ocr"
    METADATA = "metadata"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


class Complexity(str, Enum):
    """Complexity class derived from depth, array and object counts."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"

    def __str__(self) -> str:
        return self.value


class InferredType(str, Enum):
    """Input kind inferred by the structural analyzer."""
    TEXT = "text"
    LONG_TEXT = "long_text"
    IMAGE = "image"
    ARRAY = "array"
    OBJECT = "object"

    def __str__(self) -> str:
        return self.value


class LogLevel(str, Enum):
    """Standard logging levels.

    Attributes:
        DEBUG: Detailed diagnostic information
        INFO: General informational messages
        WARNING: Warning messages for potentially problematic situations
        ERROR: Error messages for serious problems
        CRITICAL: Critical messages for severe errors
    """
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        """Return the enum value as a string for serialization."""
        return self.value


# Export all enums
__all__ = [
    "JsonOptimizationMode",
    "TextOptimizationMode",
    "ImageOptimizationMode",
    "Complexity",
    "InferredType",
    "LogLevel",
]
