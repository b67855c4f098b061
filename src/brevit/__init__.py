"""
Brevit - Token-Efficient Encoder for LLM Prompts
Flattens structured data into compact path/value lines
"""

# Setup rich logging and tracebacks globally
from .utils.rich_logging import setup_rich_logging
setup_rich_logging()

from .core.client import BrevitClient
from .core.config import BrevitConfig
from .core.selector import OptimizationStrategy, StrategyRegistry
from .models.enums import ImageOptimizationMode, JsonOptimizationMode, TextOptimizationMode
from .models.schemas import DataAnalysis, StrategyCandidate

__version__ = "0.1.0"

__all__ = [
    "BrevitClient",
    "BrevitConfig",
    "OptimizationStrategy",
    "StrategyRegistry",
    "DataAnalysis",
    "StrategyCandidate",
    "JsonOptimizationMode",
    "TextOptimizationMode",
    "ImageOptimizationMode",
]
