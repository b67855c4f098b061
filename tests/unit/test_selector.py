"""
Unit tests for the strategy selector.

Tests cover:
- Built-in candidate generation and scores
- Tie-breaking and the default candidate
- Custom strategy registry
- Configuration merge
"""

import pytest

from brevit.core.config import BrevitConfig
from brevit.core.selector import (
    BUILTIN_RULES,
    DEFAULT_CANDIDATE,
    StrategyRegistry,
    StrategySelector,
    merge_config,
)
from brevit.models.enums import (
    Complexity,
    ImageOptimizationMode,
    InferredType,
    JsonOptimizationMode,
    TextOptimizationMode,
)
from brevit.models.schemas import DataAnalysis, StrategyCandidate


class FixedScoreStrategy:
    """Custom strategy returning a fixed score."""

    def __init__(self, score, output="custom"):
        self.score = score
        self.output = output

    def analyze(self, data, analysis):
        return self.score

    async def optimize(self, data, config):
        return self.output


class FailingStrategy:
    def analyze(self, data, analysis):
        raise RuntimeError("boom")

    async def optimize(self, data, config):
        return ""


@pytest.fixture
def selector():
    return StrategySelector()


class TestCandidates:
    """Tests for built-in candidate generation."""

    def test_uniform_arrays_score_100(self, selector, config):
        analysis = DataAnalysis(has_uniform_arrays=True, has_primitive_arrays=True)
        candidates = selector.candidates(analysis, config)

        assert [c.score for c in candidates] == [100]
        assert candidates[0].json_mode_override == JsonOptimizationMode.FLATTEN

    def test_primitive_arrays_score_80(self, selector, config):
        candidates = selector.candidates(DataAnalysis(has_primitive_arrays=True), config)
        assert [c.score for c in candidates] == [80]

    def test_moderate_scores_70(self, selector, config):
        candidates = selector.candidates(DataAnalysis(complexity=Complexity.MODERATE), config)
        assert [c.score for c in candidates] == [70]

    def test_long_text_uses_configured_text_mode(self, selector):
        config = BrevitConfig(text_mode=TextOptimizationMode.SUMMARIZE_FAST)
        candidates = selector.candidates(
            DataAnalysis(inferred_type=InferredType.LONG_TEXT), config
        )

        assert len(candidates) == 1
        assert candidates[0].score == 90
        assert candidates[0].text_mode_override == TextOptimizationMode.SUMMARIZE_FAST
        assert candidates[0].json_mode_override is None

    def test_image_uses_configured_image_mode(self, selector):
        config = BrevitConfig(image_mode=ImageOptimizationMode.METADATA)
        candidates = selector.candidates(DataAnalysis(inferred_type=InferredType.IMAGE), config)

        assert candidates[0].score == 100
        assert candidates[0].image_mode_override == ImageOptimizationMode.METADATA

    def test_declaration_order(self, selector, config):
        analysis = DataAnalysis(has_uniform_arrays=True, has_nested_objects=True)
        assert [c.score for c in selector.candidates(analysis, config)] == [100, 70]

    def test_rule_table_order(self):
        assert [rule.score for rule in BUILTIN_RULES] == [100, 80, 70, 90, 100]


class TestSelect:
    """Tests for select() and rank()."""

    def test_highest_score_wins(self, selector, config):
        analysis = DataAnalysis(has_primitive_arrays=True, has_nested_objects=True)
        winner = selector.select(analysis, config)

        assert winner.score == 80

    def test_default_when_no_rule_matches(self, selector, config):
        winner = selector.select(DataAnalysis(inferred_type=InferredType.TEXT), config)

        assert winner == DEFAULT_CANDIDATE
        assert winner.score == 50
        assert winner.json_mode_override == JsonOptimizationMode.FLATTEN

    def test_rank_is_descending_and_stable(self, selector, config):
        analysis = DataAnalysis(
            has_uniform_arrays=True,
            has_nested_objects=True,
            inferred_type=InferredType.IMAGE,
        )
        ranked = selector.rank(analysis, config)

        assert [c.score for c in ranked] == [100, 100, 70]
        assert ranked[0].name == "Flatten"
        assert ranked[1].name == "ImageOptimization"


class TestCustomStrategies:
    """Tests for custom strategies taking part in selection."""

    def test_custom_strategy_can_win(self, selector, config):
        registry = StrategyRegistry()
        registry.register("csv", FixedScoreStrategy(95))

        winner = selector.select(DataAnalysis(), config, data={}, registry=registry)

        assert winner.name == "csv"
        assert winner.is_custom is True
        assert winner.overrides() == {}

    def test_builtin_wins_ties(self, selector, config):
        registry = StrategyRegistry()
        registry.register("csv", FixedScoreStrategy(100))

        winner = selector.select(
            DataAnalysis(has_uniform_arrays=True), config, registry=registry
        )

        assert winner.is_custom is False
        assert winner.score == 100

    def test_scores_are_clamped(self, selector, config):
        registry = StrategyRegistry()
        registry.register("big", FixedScoreStrategy(500))
        registry.register("negative", FixedScoreStrategy(-3))

        candidates = selector.custom_candidates(None, DataAnalysis(), registry)

        assert [(c.name, c.score) for c in candidates] == [("big", 100), ("negative", 0)]

    def test_failing_strategy_is_skipped(self, selector, config):
        registry = StrategyRegistry()
        registry.register("bad", FailingStrategy())

        winner = selector.select(DataAnalysis(), config, registry=registry)

        assert winner == DEFAULT_CANDIDATE


class TestStrategyRegistry:
    """Tests for StrategyRegistry."""

    def test_register_and_lookup(self):
        registry = StrategyRegistry()
        strategy = FixedScoreStrategy(10)
        registry.register("s", strategy)

        assert "s" in registry
        assert len(registry) == 1
        assert registry.get("s") is strategy
        assert registry.names() == ["s"]

    def test_register_replaces(self):
        registry = StrategyRegistry()
        registry.register("s", FixedScoreStrategy(10))
        registry.register("s", FixedScoreStrategy(20))

        assert len(registry) == 1
        assert registry.get("s").score == 20

    def test_unregister(self):
        registry = StrategyRegistry()
        registry.register("s", FixedScoreStrategy(10))
        registry.unregister("s")
        registry.unregister("missing")

        assert "s" not in registry

    def test_rejects_non_strategy(self):
        with pytest.raises(TypeError, match="analyze"):
            StrategyRegistry().register("s", object())


class TestMergeConfig:
    """Tests for merge_config()."""

    def test_overrides_win(self):
        base = BrevitConfig(json_mode=JsonOptimizationMode.NONE, enable_abbreviations=True)
        candidate = StrategyCandidate(
            name="Flatten", json_mode_override=JsonOptimizationMode.FLATTEN, score=100
        )

        merged = merge_config(base, candidate)

        assert merged.json_mode == JsonOptimizationMode.FLATTEN
        assert merged.enable_abbreviations is True

    def test_base_is_not_modified(self):
        base = BrevitConfig(json_mode=JsonOptimizationMode.NONE)
        merge_config(base, DEFAULT_CANDIDATE)

        assert base.json_mode == JsonOptimizationMode.NONE

    def test_no_overrides_returns_base(self, config):
        candidate = StrategyCandidate(name="csv", score=10, is_custom=True)
        assert merge_config(config, candidate) is config


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
