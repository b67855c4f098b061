"""
Strategy Selector.

Turns a DataAnalysis into a ranked list of StrategyCandidates using a fixed,
ordered rule table, and picks the winner. Custom strategies take part only
through an explicit StrategyRegistry passed into the selection call.
"""

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from ..models.enums import Complexity, InferredType, JsonOptimizationMode
from ..models.schemas import DataAnalysis, StrategyCandidate
from ..utils.logging import get_logger
from .config import BrevitConfig

logger = get_logger(__name__)


@runtime_checkable
class OptimizationStrategy(Protocol):
    """
    A user-provided optimization strategy.

    ``analyze`` scores how well the strategy fits (0-100); ``optimize``
    produces the final text when the strategy wins selection.
    """

    def analyze(self, data: Any, analysis: DataAnalysis) -> int:
        ...

    def optimize(self, data: Any, config: BrevitConfig) -> Awaitable[str]:
        ...


@dataclass(frozen=True)
class StrategyRule:
    """One row of the built-in rule table."""

    name: str
    predicate: Callable[[DataAnalysis], bool]
    score: int
    reason: str
    overrides: Callable[[BrevitConfig], dict[str, Any]]


BUILTIN_RULES: tuple[StrategyRule, ...] = (
    StrategyRule(
        name="Flatten",
        predicate=lambda a: a.has_uniform_arrays,
        score=100,
        reason="Uniform object arrays detected - tabular format optimal",
        overrides=lambda c: {"json_mode_override": JsonOptimizationMode.FLATTEN},
    ),
    StrategyRule(
        name="Flatten",
        predicate=lambda a: a.has_primitive_arrays and not a.has_uniform_arrays,
        score=80,
        reason="Primitive arrays detected - comma-separated format optimal",
        overrides=lambda c: {"json_mode_override": JsonOptimizationMode.FLATTEN},
    ),
    StrategyRule(
        name="Flatten",
        predicate=lambda a: a.has_nested_objects or a.complexity == Complexity.MODERATE,
        score=70,
        reason="Nested objects detected - flatten format optimal",
        overrides=lambda c: {"json_mode_override": JsonOptimizationMode.FLATTEN},
    ),
    StrategyRule(
        name="TextOptimization",
        predicate=lambda a: a.inferred_type == InferredType.LONG_TEXT,
        score=90,
        reason="Long text detected - summarization recommended",
        overrides=lambda c: {"text_mode_override": c.text_mode},
    ),
    StrategyRule(
        name="ImageOptimization",
        predicate=lambda a: a.inferred_type == InferredType.IMAGE,
        score=100,
        reason="Image data detected - OCR recommended",
        overrides=lambda c: {"image_mode_override": c.image_mode},
    ),
)

DEFAULT_CANDIDATE = StrategyCandidate(
    name="Flatten",
    json_mode_override=JsonOptimizationMode.FLATTEN,
    score=50,
    reason="Default flatten strategy",
)


class StrategyRegistry:
    """
    Named custom strategies owned by one long-lived client.

    Example:
        registry = StrategyRegistry()
        registry.register("csv", CsvStrategy())
        "csv" in registry  # True
    """

    def __init__(self):
        self._strategies: dict[str, OptimizationStrategy] = {}

    def register(self, name: str, strategy: OptimizationStrategy) -> None:
        """
        Register a strategy, replacing any strategy with the same name.

        Raises:
            TypeError: If strategy does not implement analyze/optimize
        """
        if not isinstance(strategy, OptimizationStrategy):
            raise TypeError(
                f"Strategy '{name}' must implement analyze() and optimize()"
            )
        self._strategies[name] = strategy

    def unregister(self, name: str) -> None:
        self._strategies.pop(name, None)

    def get(self, name: str) -> OptimizationStrategy | None:
        return self._strategies.get(name)

    def names(self) -> list[str]:
        return list(self._strategies)

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def __iter__(self) -> Iterator[tuple[str, OptimizationStrategy]]:
        return iter(list(self._strategies.items()))


class StrategySelector:
    """
    Deterministic rule engine for encoding strategy selection.

    Candidates are generated in rule declaration order; selection is a
    stable max-by-score, so ties go to the first declared candidate.
    """

    def __init__(self, rules: tuple[StrategyRule, ...] = BUILTIN_RULES):
        self.rules = rules

    def candidates(self, analysis: DataAnalysis, config: BrevitConfig) -> list[StrategyCandidate]:
        """Generate built-in candidates in declaration order."""
        return [
            StrategyCandidate(
                name=rule.name,
                score=rule.score,
                reason=rule.reason,
                **rule.overrides(config),
            )
            for rule in self.rules
            if rule.predicate(analysis)
        ]

    def custom_candidates(
        self,
        data: Any,
        analysis: DataAnalysis,
        registry: StrategyRegistry,
    ) -> list[StrategyCandidate]:
        """
        Score registered custom strategies in registration order.

        Scores are clamped to 0-100. A strategy whose analyze() raises is
        skipped.
        """
        candidates = []
        for name, strategy in registry:
            try:
                raw_score = int(strategy.analyze(data, analysis))
            except Exception as e:
                logger.warning(
                    "custom_strategy_analyze_failed",
                    strategy=name,
                    error=str(e),
                )
                continue

            score = min(100, max(0, raw_score))
            candidates.append(
                StrategyCandidate(
                    name=name,
                    score=score,
                    reason=f"Custom strategy '{name}'",
                    is_custom=True,
                )
            )
        return candidates

    def rank(
        self,
        analysis: DataAnalysis,
        config: BrevitConfig,
        data: Any = None,
        registry: StrategyRegistry | None = None,
    ) -> list[StrategyCandidate]:
        """
        Return all candidates sorted by descending score.

        Built-in candidates come before custom ones among equal scores.
        """
        candidates = self.candidates(analysis, config)
        if registry:
            candidates += self.custom_candidates(data, analysis, registry)
        return sorted(candidates, key=lambda c: c.score, reverse=True)

    def select(
        self,
        analysis: DataAnalysis,
        config: BrevitConfig,
        data: Any = None,
        registry: StrategyRegistry | None = None,
    ) -> StrategyCandidate:
        """
        Pick the highest scoring candidate, or the default flatten candidate.

        Args:
            analysis: Shape metrics of the input
            config: Base configuration (supplies text/image modes)
            data: Raw input, passed to custom strategies
            registry: Optional custom strategies

        Returns:
            Winning StrategyCandidate
        """
        ranked = self.rank(analysis, config, data=data, registry=registry)
        winner = ranked[0] if ranked else DEFAULT_CANDIDATE

        logger.debug(
            "strategy_selected",
            strategy=winner.name,
            score=winner.score,
            reason=winner.reason,
            candidates=len(ranked),
            complexity=str(analysis.complexity),
            inferred_type=str(analysis.inferred_type),
        )
        return winner


def merge_config(base: BrevitConfig, candidate: StrategyCandidate) -> BrevitConfig:
    """
    Apply a candidate's non-null overrides onto a base configuration.

    Args:
        base: Caller's configuration (not modified)
        candidate: Winning strategy candidate

    Returns:
        New BrevitConfig with overrides applied
    """
    overrides = candidate.overrides()
    if not overrides:
        return base
    return base.model_copy(update=overrides)
