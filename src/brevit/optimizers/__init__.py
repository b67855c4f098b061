"""
Optimizer collaborators for JSON, long text and images.
"""

from .base import ImageOptimizer, JsonOptimizerProtocol, TextOptimizer
from .image_optimizer import DefaultImageOptimizer
from .json_optimizer import JsonOptimizer
from .text_optimizer import DefaultTextOptimizer

__all__ = [
    "JsonOptimizerProtocol",
    "TextOptimizer",
    "ImageOptimizer",
    "JsonOptimizer",
    "DefaultTextOptimizer",
    "DefaultImageOptimizer",
]
