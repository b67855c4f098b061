"""
Brevit Client - orchestrates the optimization pipeline.

Two entry points share one dispatch:

- ``optimize`` uses the client's configuration verbatim and routes purely on
  the literal input shape.
- ``brevity`` analyzes the input, selects a strategy and merges the winning
  candidate's overrides onto the configuration first.
"""

from typing import Any

from ..exceptions import SerializationFailureError
from ..models.schemas import DataAnalysis, StrategyCandidate
from ..optimizers.base import ImageOptimizer, JsonOptimizerProtocol, TextOptimizer
from ..optimizers.image_optimizer import DefaultImageOptimizer
from ..optimizers.json_optimizer import JsonOptimizer
from ..optimizers.text_optimizer import DefaultTextOptimizer
from ..utils.logging import get_logger
from .adapter import (
    AdaptedInput,
    BinaryBlob,
    JsonDocument,
    MalformedJson,
    PlainText,
    StructuredRecord,
    Unserializable,
    adapt,
)
from .analyzer import StructuralAnalyzer
from .config import BrevitConfig
from .selector import OptimizationStrategy, StrategyRegistry, StrategySelector, merge_config

logger = get_logger(__name__)


class BrevitClient:
    """
    Token-efficient encoder for LLM prompts.

    The client is long-lived: it owns the base configuration, the
    collaborators and the custom strategy registry. Analysis and selection
    state is created fresh for each call.

    Example:
        client = BrevitClient(BrevitConfig(enable_abbreviations=True))
        text = await client.brevity({"order": {"id": "o-456", "status": "paid"}})
        # @o=order
        # @o.id:o-456
        # @o.status:paid
    """

    def __init__(
        self,
        config: BrevitConfig | None = None,
        json_optimizer: JsonOptimizerProtocol | None = None,
        text_optimizer: TextOptimizer | None = None,
        image_optimizer: ImageOptimizer | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Base configuration (defaults to BrevitConfig())
            json_optimizer: JSON collaborator (defaults to JsonOptimizer)
            text_optimizer: Long text collaborator (defaults to DefaultTextOptimizer)
            image_optimizer: Image collaborator (defaults to DefaultImageOptimizer)
        """
        self.config = config or BrevitConfig()
        self.json_optimizer = json_optimizer or JsonOptimizer()
        self.text_optimizer = text_optimizer or DefaultTextOptimizer()
        self.image_optimizer = image_optimizer or DefaultImageOptimizer()

        self.strategies = StrategyRegistry()
        self.analyzer = StructuralAnalyzer()
        self.selector = StrategySelector()

    def register_strategy(self, name: str, strategy: OptimizationStrategy) -> None:
        """
        Register a custom strategy that competes in ``brevity`` selection.

        Built-in candidates win ties against custom ones.
        """
        self.strategies.register(name, strategy)
        logger.debug("strategy_registered", strategy=name)

    async def optimize(self, raw: Any, intent: str | None = None) -> str:
        """
        Optimize input using the configuration as given.

        Args:
            raw: Structured record, JSON text, plain text, bytes or None
            intent: Optional description of what the output is for

        Returns:
            Optimized text; failures degrade to a diagnostic line
        """
        adapted = adapt(raw, self.config.long_text_threshold)
        logger.debug("optimize_started", input_kind=type(adapted).__name__, intent=intent)
        return await self._dispatch(adapted, self.config)

    async def brevity(self, raw: Any, intent: str | None = None) -> str:
        """
        Analyze input, pick a strategy and optimize with it.

        Args:
            raw: Structured record, JSON text, plain text, bytes or None
            intent: Optional description of what the output is for

        Returns:
            Optimized text; failures degrade to a diagnostic line
        """
        adapted = adapt(raw, self.config.long_text_threshold)
        analysis = self.analyzer.analyze_input(adapted)
        winner = self.selector.select(
            analysis, self.config, data=raw, registry=self.strategies
        )

        logger.debug(
            "brevity_started",
            input_kind=type(adapted).__name__,
            strategy=winner.name,
            intent=intent,
        )

        if winner.is_custom:
            strategy = self.strategies.get(winner.name)
            if strategy is not None:
                try:
                    return await strategy.optimize(raw, self.config)
                except Exception as e:
                    logger.warning(
                        "custom_strategy_optimize_failed",
                        strategy=winner.name,
                        error=str(e),
                    )
                    winner = self.selector.select(analysis, self.config)

        return await self._dispatch(adapted, merge_config(self.config, winner))

    def analyze(self, raw: Any) -> DataAnalysis:
        """Return the shape metrics brevity() would select on."""
        return self.analyzer.analyze_input(adapt(raw, self.config.long_text_threshold))

    def rank_strategies(self, raw: Any) -> list[StrategyCandidate]:
        """Return every candidate for raw, best first, custom strategies included."""
        analysis = self.analyze(raw)
        return self.selector.rank(analysis, self.config, data=raw, registry=self.strategies)

    async def _dispatch(self, adapted: AdaptedInput, config: BrevitConfig) -> str:
        match adapted:
            case JsonDocument(text=text, node=node) | StructuredRecord(text=text, node=node):
                return await self.json_optimizer.optimize_json(text, config, tree=node)
            case MalformedJson(text=text):
                # Only flatten mode reports the parse error; other modes handle the text
                return await self.json_optimizer.optimize_json(text, config)
            case PlainText(text=text, is_long=True):
                return await self.text_optimizer.optimize_text(text, config)
            case PlainText(text=text):
                return text
            case BinaryBlob(data=data):
                return await self.image_optimizer.optimize_image(data, config)
            case Unserializable(type_name=type_name, message=message):
                error = SerializationFailureError(message, type_name=type_name)
                logger.warning("serialization_failed", **error.to_dict())
                return error.user_message
        raise TypeError(f"Unsupported input variant: {type(adapted).__name__}")
