"""
Collaborator interfaces.

The core pipeline awaits these but applies no retry, timeout or rate-limit
policy of its own; implementations own those concerns.
"""

from typing import Protocol, runtime_checkable

from ..core.config import BrevitConfig
from ..models.nodes import ValueNode


@runtime_checkable
class JsonOptimizerProtocol(Protocol):
    """Optimizes JSON text (or an already parsed tree) for a prompt."""

    async def optimize_json(
        self, json_string: str, config: BrevitConfig, tree: ValueNode | None = None
    ) -> str:
        ...


@runtime_checkable
class TextOptimizer(Protocol):
    """Optimizes a block of long text, e.g. by summarizing it."""

    async def optimize_text(self, text: str, config: BrevitConfig) -> str:
        ...


@runtime_checkable
class ImageOptimizer(Protocol):
    """Turns image bytes into a text representation, e.g. via OCR."""

    async def optimize_image(self, data: bytes, config: BrevitConfig) -> str:
        ...
